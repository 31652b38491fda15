"""Job request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class JobTitleRequest(BaseModel):
    """Body of POST /jobs and PUT /jobs/{id}.

    ``title`` is optional here so that a missing title is reported by the
    router as a field error instead of a schema error.
    """

    title: str | None = None

    @field_validator("title", mode="before")
    @classmethod
    def _strip_whitespace(cls, v: str | None) -> str | None:
        return v.strip() if isinstance(v, str) else v


class JobResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
