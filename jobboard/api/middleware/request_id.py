"""Request ID middleware - reuses a valid X-Request-ID or mints a new one."""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from jobboard.api.errors import unexpected_error_response

log = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _request_id_from(raw: str) -> str:
    try:
        return str(uuid.UUID(raw))
    except ValueError:
        return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Bind request_id/method/path into structlog contextvars for the request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _request_id_from(request.headers.get(REQUEST_ID_HEADER, ""))
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        start = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception:
                # Outer middleware (CORS) must see a response, not the exception.
                log.exception("request.failed", duration_ms=_elapsed_ms(start))
                response = unexpected_error_response()
            else:
                log.info(
                    "request.completed",
                    status_code=response.status_code,
                    duration_ms=_elapsed_ms(start),
                )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            structlog.contextvars.unbind_contextvars("request_id", "method", "path")


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 1)
