"""Service layer: business rules and failure classification."""

from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    DUPLICATE = "duplicate"
    INTERNAL = "internal"


class ServiceError(Exception):
    """Base service exception.

    Every failure leaving a service is one of the three subclasses below;
    ``kind`` and ``status_code`` are fixed per subclass.
    """

    kind: ErrorKind = ErrorKind.INTERNAL
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    """Referenced record does not exist (-> HTTP 404)."""

    kind = ErrorKind.NOT_FOUND
    status_code = 404


class DuplicateError(ServiceError):
    """Uniqueness violation (-> HTTP 409)."""

    kind = ErrorKind.DUPLICATE
    status_code = 409


class InternalError(ServiceError):
    """Anything else, including an unreachable store (-> HTTP 500)."""
