"""jobs table."""

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from jobboard.core.database import Base, TimestampMixin


class Job(TimestampMixin, Base):
    __tablename__ = "jobs"

    # UUID4 rendered as text; assigned by JobDAO.add, never updated.
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(Text, unique=True, nullable=False)

    __table_args__ = (
        Index("idx_jobs_created", "created_at", "id"),
    )

    def __repr__(self) -> str:
        return f"Job(id={self.id!r}, title={self.title!r})"
