"""Error types shared by the HTTP layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, MutableMapping

from werkzeug.exceptions import HTTPException


@dataclass(slots=True)
class AppError(Exception):
    """Base application error with a JSON friendly payload."""

    message: str
    code: str = "error"
    status_code: int = 400
    details: Mapping[str, Any] | None = None

    def to_dict(self) -> Mapping[str, Any]:
        payload: MutableMapping[str, Any] = {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details or {}),
        }
        return payload


@dataclass(slots=True)
class ValidationAppError(AppError):
    """Error raised for invalid user input."""

    code: str = "validation_error"
    status_code: int = 400


@dataclass(slots=True)
class NotFoundAppError(AppError):
    """Error raised when a route or resource is missing."""

    code: str = "not_found"
    status_code: int = 404


@dataclass(slots=True)
class InternalAppError(AppError):
    """Generic internal error wrapper to avoid leaking implementation details."""

    code: str = "internal_error"
    status_code: int = 500


def from_http_exception(error: HTTPException) -> AppError:
    """Translate a werkzeug HTTP error into the JSON error envelope."""

    status = error.code or 500
    if status == 404:
        return NotFoundAppError(message="Resource not found")
    if status >= 500:
        return InternalAppError(message="Internal server error")
    slug = (error.name or "error").lower().replace(" ", "_")
    return AppError(message=error.description or error.name, code=slug, status_code=status)


__all__ = [
    "AppError",
    "ValidationAppError",
    "NotFoundAppError",
    "InternalAppError",
    "from_http_exception",
]
