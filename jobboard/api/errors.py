"""Unified error handling: every failure is rendered as the error envelope.

    {"error": {"message": <category>, "details": [{"field"?, "message"}]}}
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from jobboard.api.schemas.common import ErrorBody, ErrorDetail, ErrorResponse
from jobboard.services import ErrorKind, ServiceError

log = structlog.get_logger(__name__)

VALIDATION_ERROR = "Validation Error"
DUPLICATE_ERROR = "Duplicate Error"
NOT_FOUND_ERROR = "Not Found Error"
INTERNAL_SERVER_ERROR = "Internal Server Error"

# kind -> (status, category, field cited in the detail)
_KIND_MAP: dict[ErrorKind, tuple[int, str, str | None]] = {
    ErrorKind.NOT_FOUND: (404, NOT_FOUND_ERROR, "id"),
    ErrorKind.DUPLICATE: (409, DUPLICATE_ERROR, "title"),
    ErrorKind.INTERNAL: (500, INTERNAL_SERVER_ERROR, None),
}


class FieldValidationError(Exception):
    """Request is missing required fields; raised before any service call."""

    def __init__(self, details: list[ErrorDetail]) -> None:
        super().__init__("; ".join(d.message for d in details))
        self.details = details


def error_response(status: int, category: str, details: list[ErrorDetail]) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(message=category, details=details))
    return JSONResponse(status_code=status, content=body.model_dump(exclude_none=True))


def service_error_response(exc: ServiceError) -> JSONResponse:
    status, category, field = _KIND_MAP[exc.kind]
    return error_response(status, category, [ErrorDetail(field=field, message=exc.message)])


async def _service_error_handler(_request: Request, exc: ServiceError) -> JSONResponse:
    return service_error_response(exc)


async def _field_validation_handler(_request: Request, exc: FieldValidationError) -> JSONResponse:
    return error_response(400, VALIDATION_ERROR, exc.details)


async def _request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = []
    for err in exc.errors():
        # loc is ("body", "title") / ("query", "page"); a bare ("body", pos)
        # means the body itself could not be parsed.
        loc = [str(part) for part in err["loc"][1:] if not isinstance(part, int)]
        details.append(ErrorDetail(field=".".join(loc) or None, message=err["msg"]))
    return error_response(400, VALIDATION_ERROR, details)


def unexpected_error_response() -> JSONResponse:
    return error_response(
        500, INTERNAL_SERVER_ERROR, [ErrorDetail(message="Unexpected server error")]
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.error("request.unhandled_error", path=request.url.path, error=repr(exc))
    return unexpected_error_response()


def register_error_handlers(app: FastAPI) -> None:
    """Register exception handlers on the app."""
    app.add_exception_handler(ServiceError, _service_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(FieldValidationError, _field_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_error_handler)
