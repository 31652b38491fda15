"""JobDAO - jobs table operations."""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.dao.base import BaseDAO
from jobboard.models.job import Job


class JobDAO(BaseDAO[Job]):
    model = Job

    async def get_all(self, session: AsyncSession) -> list[Job]:
        return await self.list_all(session)

    async def get_by_title(self, session: AsyncSession, title: str) -> Job | None:
        """Exact, case-sensitive title match."""
        return await self.get_by_field(session, title=title)

    async def add(self, session: AsyncSession, title: str) -> Job:
        return await self.create(session, id=str(uuid.uuid4()), title=title)

    async def edit(self, session: AsyncSession, job_id: str, title: str) -> Job | None:
        return await self.update(session, job_id, title=title)
