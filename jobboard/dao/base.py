"""Generic base DAO: ORM CRUD plus whole-table reads."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.core.database import Base

ModelT = TypeVar("ModelT", bound=Base)

_IMMUTABLE = frozenset({"id", "created_at", "updated_at"})


class BaseDAO(Generic[ModelT]):
    """Base data-access object. Subclasses set ``model`` class attribute.

    Every method takes the caller's :class:`AsyncSession`; the DAO never
    commits. Writes are flushed so that store constraints fire inside the
    request transaction.
    """

    model: type[ModelT]

    @staticmethod
    def _require_pk(pk: str) -> None:
        if pk is None:
            raise ValueError("pk must not be None")

    async def get_by_id(self, session: AsyncSession, pk: str) -> ModelT | None:
        self._require_pk(pk)
        return await session.get(self.model, pk)

    async def get_by_field(self, session: AsyncSession, **filters: Any) -> ModelT | None:
        """Return the first row matching all *filters*, or None.

        Usage::

            job = await dao.get_by_field(session, title="Backend Developer")
        """
        if not filters:
            raise ValueError("get_by_field() requires at least one filter")
        stmt = select(self.model)
        for key, val in filters.items():
            stmt = stmt.where(getattr(self.model, key) == val)
        result = await session.execute(stmt.limit(1))
        return result.scalars().first()

    async def list_all(self, session: AsyncSession) -> list[ModelT]:
        """Return every row, oldest first (created_at, then id)."""
        table = self.model.__table__
        stmt = select(self.model).order_by(table.c.created_at.asc(), table.c.id.asc())
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        obj = self.model(**values)
        session.add(obj)
        await session.flush()
        await session.refresh(obj)
        return obj

    async def update(self, session: AsyncSession, pk: str, **values: Any) -> ModelT | None:
        self._require_pk(pk)
        obj = await session.get(self.model, pk)
        if obj is None:
            return None
        column_keys = set(self.model.__mapper__.column_attrs.keys())
        for key in values:
            if key in _IMMUTABLE:
                raise AttributeError(f"'{key}' is immutable and cannot be updated")
            if key not in column_keys:
                raise AttributeError(f"{self.model.__name__} has no column '{key}'")
        for key, val in values.items():
            setattr(obj, key, val)
        await session.flush()
        await session.refresh(obj)
        return obj

    async def delete(self, session: AsyncSession, pk: str) -> ModelT | None:
        """Delete the row and return the removed object, or None if absent."""
        self._require_pk(pk)
        obj = await session.get(self.model, pk)
        if obj is None:
            return None
        await session.delete(obj)
        await session.flush()
        return obj
