"""JobService - job posting CRUD with title uniqueness."""

from __future__ import annotations

import math
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.dao.job_dao import JobDAO
from jobboard.models.job import Job
from jobboard.services import DuplicateError, InternalError, NotFoundError, ServiceError

log = structlog.get_logger(__name__)

JOB_NOT_FOUND = "Job not found"


def duplicate_title_message(title: str) -> str:
    return f"Duplicate title: {title} already exists"


@dataclass
class JobPage:
    """One page of jobs plus totals over the whole table."""

    items: list[Job]
    total_items: int
    total_pages: int


@contextmanager
def _classified(op: str, fallback: str, *, title: str | None = None) -> Iterator[None]:
    """Reclassify store failures raised inside the block.

    ServiceErrors pass through untouched. A unique-constraint violation is a
    duplicate title when *title* is given; any other store failure becomes
    an :class:`InternalError` carrying *fallback*.
    """
    try:
        yield
    except ServiceError:
        raise
    except IntegrityError as exc:
        if title is None:
            log.error("job.store_failed", op=op, error=str(exc.orig))
            raise InternalError(fallback) from exc
        log.warning("job.duplicate_on_flush", op=op, title=title)
        raise DuplicateError(duplicate_title_message(title)) from exc
    except (SQLAlchemyError, OSError) as exc:
        log.error("job.store_failed", op=op, error=str(exc))
        raise InternalError(fallback) from exc


class JobService:
    """Stateless service for job CRUD."""

    def __init__(self, job_dao: JobDAO) -> None:
        self._job_dao = job_dao

    async def list_paginated(self, session: AsyncSession, limit: int, page: int) -> JobPage:
        """Return the jobs in ``[(page-1)*limit, page*limit)``.

        ``total_pages`` is ``ceil(total_items / limit)``. A non-positive
        *limit* or *page* selects nothing (and *limit* < 1 reports zero pages).
        """
        with _classified("list", "Unable to retrieve jobs"):
            jobs = await self._job_dao.get_all(session)

        total_items = len(jobs)
        if limit < 1:
            return JobPage(items=[], total_items=total_items, total_pages=0)
        total_pages = math.ceil(total_items / limit)
        if page < 1:
            return JobPage(items=[], total_items=total_items, total_pages=total_pages)

        start = (page - 1) * limit
        return JobPage(
            items=jobs[start : start + limit],
            total_items=total_items,
            total_pages=total_pages,
        )

    async def get(self, session: AsyncSession, job_id: str) -> Job:
        """Return the job. Raises :class:`NotFoundError` if it does not exist."""
        with _classified("get", "Unable to retrieve job"):
            return await self._ensure_job(session, job_id)

    async def get_by_title(self, session: AsyncSession, title: str) -> Job | None:
        with _classified("get_by_title", "Unable to retrieve job"):
            return await self._job_dao.get_by_title(session, title)

    async def add(self, session: AsyncSession, title: str) -> Job:
        """Create a job. Raises :class:`DuplicateError` if the title is taken."""
        with _classified("add", "Unable to add job", title=title):
            existing = await self._job_dao.get_by_title(session, title)
            if existing is not None:
                raise DuplicateError(duplicate_title_message(title))
            job = await self._job_dao.add(session, title)

        log.info("job.added", job_id=job.id, title=title)
        return job

    async def edit(self, session: AsyncSession, job_id: str, title: str) -> Job:
        """Rename a job.

        Raises :class:`NotFoundError` before any title check when the job is
        absent, and :class:`DuplicateError` when another job holds *title*.
        Renaming a job to its current title is not a conflict.
        """
        with _classified("edit", "Unable to edit job", title=title):
            job = await self._ensure_job(session, job_id)
            holder = await self._job_dao.get_by_title(session, title)
            if holder is not None and holder.id != job.id:
                raise DuplicateError(duplicate_title_message(title))
            updated = await self._job_dao.edit(session, job.id, title)
            if updated is None:
                # Deleted between the lookup and the update.
                raise NotFoundError(JOB_NOT_FOUND)

        log.info("job.edited", job_id=job_id, title=title)
        return updated

    async def delete(self, session: AsyncSession, job_id: str) -> Job:
        """Delete a job and return the removed record."""
        with _classified("delete", "Unable to delete job"):
            await self._ensure_job(session, job_id)
            removed = await self._job_dao.delete(session, job_id)
            if removed is None:
                raise NotFoundError(JOB_NOT_FOUND)

        log.info("job.deleted", job_id=job_id)
        return removed

    # ── private helpers ───────────────────────────────────────────────

    async def _ensure_job(self, session: AsyncSession, job_id: str) -> Job:
        job = await self._job_dao.get_by_id(session, job_id)
        if job is None:
            raise NotFoundError(JOB_NOT_FOUND)
        return job
