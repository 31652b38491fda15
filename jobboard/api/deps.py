"""Dependency injection: per-request session and service singletons."""

from __future__ import annotations

from collections.abc import AsyncGenerator

import structlog
from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.dao.job_dao import JobDAO
from jobboard.services import InternalError
from jobboard.services.job_service import JobService

log = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# DAO / service singletons (stateless)
# ---------------------------------------------------------------------------
_job_dao = JobDAO()
_job_service = JobService(_job_dao)


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a per-request session; anything not committed is rolled back on close.

    Write routes commit through :func:`commit` before building their
    response. The session factory is owned by the app lifespan (``app.state``).
    """
    factory = getattr(request.app.state, "session_factory", None)
    if factory is None:
        raise RuntimeError("session factory not initialised; is the app lifespan running?")
    async with factory() as session:
        yield session


async def commit(session: AsyncSession, fallback: str) -> None:
    """Commit the request's writes, surfacing a failed commit as InternalError(*fallback*)."""
    try:
        await session.commit()
    except (SQLAlchemyError, OSError) as exc:
        log.error("session.commit_failed", error=str(exc))
        raise InternalError(fallback) from exc


def get_job_service() -> JobService:
    return _job_service
