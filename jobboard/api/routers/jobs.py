"""Jobs router.

Required fields are checked here, before the service is called; service
failures are rendered by the handlers in :mod:`jobboard.api.errors`.
"""

from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.api.deps import commit, get_job_service, get_session
from jobboard.api.errors import FieldValidationError
from jobboard.api.schemas.common import DataResponse, ErrorDetail, PaginatedResponse, Pagination
from jobboard.api.schemas.job import JobResponse, JobTitleRequest
from jobboard.services import DuplicateError, InternalError, NotFoundError
from jobboard.services.job_service import JobService

router = APIRouter()

DEFAULT_LIMIT = 10
DEFAULT_PAGE = 1


def _positive_int(raw: str | None, default: int) -> int:
    """Parse a query value; anything but a positive integer yields *default*."""
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _require(
    *, title: str | None = None, job_id: str | None = None, check: tuple[str, ...]
) -> None:
    """Raise :class:`FieldValidationError` listing every missing field in *check*."""
    details = []
    if "title" in check and not title:
        details.append(ErrorDetail(field="title", message="Title is required"))
    if "id" in check and not (job_id and job_id.strip()):
        details.append(ErrorDetail(field="id", message="Id is required"))
    if details:
        raise FieldValidationError(details)


def _title(body: JobTitleRequest | None) -> str | None:
    return body.title if body is not None else None


@router.get("", response_model=PaginatedResponse[JobResponse])
async def list_jobs(
    limit: str | None = Query(None),
    page: str | None = Query(None),
    session: AsyncSession = Depends(get_session),
    svc: JobService = Depends(get_job_service),
) -> PaginatedResponse[JobResponse]:
    limit_value = _positive_int(limit, DEFAULT_LIMIT)
    page_value = _positive_int(page, DEFAULT_PAGE)
    try:
        result = await svc.list_paginated(session, limit=limit_value, page=page_value)
    except (NotFoundError, DuplicateError) as exc:
        # List reads only ever surface as 500.
        raise InternalError("Unable to retrieve jobs") from exc

    return PaginatedResponse(
        data=[JobResponse.model_validate(job) for job in result.items],
        pagination=Pagination(
            page=page_value,
            total_pages=result.total_pages,
            limit=limit_value,
            total_items=result.total_items,
        ),
    )


@router.get("/{job_id}", response_model=DataResponse[JobResponse])
async def get_job(
    job_id: str,
    session: AsyncSession = Depends(get_session),
    svc: JobService = Depends(get_job_service),
) -> DataResponse[JobResponse]:
    _require(job_id=job_id, check=("id",))
    job = await svc.get(session, job_id.strip())
    return DataResponse(data=JobResponse.model_validate(job))


@router.post("", response_model=DataResponse[JobResponse], status_code=201)
async def create_job(
    body: JobTitleRequest | None = Body(None),
    session: AsyncSession = Depends(get_session),
    svc: JobService = Depends(get_job_service),
) -> DataResponse[JobResponse]:
    title = _title(body)
    _require(title=title, check=("title",))
    job = await svc.add(session, title)
    await commit(session, "Unable to add job")
    return DataResponse(data=JobResponse.model_validate(job))


@router.put("/{job_id}", response_model=DataResponse[JobResponse])
async def update_job(
    job_id: str,
    body: JobTitleRequest | None = Body(None),
    session: AsyncSession = Depends(get_session),
    svc: JobService = Depends(get_job_service),
) -> DataResponse[JobResponse]:
    title = _title(body)
    _require(title=title, job_id=job_id, check=("title", "id"))
    job = await svc.edit(session, job_id.strip(), title)
    await commit(session, "Unable to edit job")
    return DataResponse(data=JobResponse.model_validate(job))


@router.delete("/{job_id}", status_code=204)
async def delete_job(
    job_id: str,
    session: AsyncSession = Depends(get_session),
    svc: JobService = Depends(get_job_service),
) -> Response:
    _require(job_id=job_id, check=("id",))
    await svc.delete(session, job_id.strip())
    await commit(session, "Unable to delete job")
    return Response(status_code=204)


# The id-less forms exist only to answer with the missing-id validation error.


@router.put("", include_in_schema=False)
async def update_job_without_id(body: JobTitleRequest | None = Body(None)) -> None:
    _require(title=_title(body), check=("title", "id"))


@router.delete("", include_in_schema=False)
async def delete_job_without_id() -> None:
    _require(check=("id",))
