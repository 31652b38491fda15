"""Seed job postings from a JSON file into the database.

The file holds a list of titles, or of ``{"title": ...}`` objects::

    python scripts/seed_jobs.py jobs.json

Each title is looked up and added through JobService in its own
transaction, so an existing title is reported and skipped without
aborting the run.
"""

import asyncio
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from jobboard.core.database import (
    DEFAULT_DATABASE_URL,
    build_engine,
    build_session_factory,
    create_tables,
)
from jobboard.dao.job_dao import JobDAO
from jobboard.services import DuplicateError, ServiceError
from jobboard.services.job_service import JobService

ROOT = Path(__file__).resolve().parent.parent


def load_titles(path: Path) -> list[str]:
    """Read titles from *path*; blank or non-string entries are dropped."""
    with open(path) as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"{path}: expected a JSON list of titles, got {type(raw).__name__}")
    titles = []
    for item in raw:
        title = item.get("title") if isinstance(item, dict) else item
        if isinstance(title, str) and title.strip():
            titles.append(title.strip())
    return titles


async def seed(titles: list[str], database_url: str) -> tuple[int, int]:
    """Add *titles*; return (added, skipped)."""
    engine = build_engine(database_url)
    factory = build_session_factory(engine)
    service = JobService(JobDAO())
    added = skipped = 0
    try:
        await create_tables(engine)
        for title in titles:
            try:
                async with factory() as session:
                    async with session.begin():
                        if await service.get_by_title(session, title) is not None:
                            print(f"  SKIP {title}: already exists")
                            skipped += 1
                            continue
                        job = await service.add(session, title)
            except DuplicateError:
                # Another writer added it after the lookup.
                print(f"  SKIP {title}: added concurrently")
                skipped += 1
                continue
            print(f"  ADD  {job.id}  {title}")
            added += 1
    finally:
        await engine.dispose()
    return added, skipped


async def main() -> int:
    load_dotenv(ROOT / ".env")
    if len(sys.argv) != 2:
        print(f"usage: {sys.argv[0]} <jobs.json>", file=sys.stderr)
        return 2

    try:
        titles = load_titles(Path(sys.argv[1]))
    except ValueError as exc:
        print(f"usage: {sys.argv[0]} <jobs.json>\n{exc}", file=sys.stderr)
        return 2
    url = os.environ.get("JOBBOARD_DATABASE_URL", DEFAULT_DATABASE_URL)
    print(f"Seeding {len(titles)} jobs ...")
    try:
        added, skipped = await seed(titles, url)
    except ServiceError as exc:
        print(f"Seeding failed: {exc.message}", file=sys.stderr)
        return 1
    print(f"Done: {added} added, {skipped} skipped.")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
