"""Application exception types."""

from __future__ import annotations

from typing import TypeVar

from blogapi.domain.results import Failure
from blogapi.schemas.error import ErrorResponse

T = TypeVar("T")


class ApiError(Exception):
    """Structured API error that maps directly to contract error payloads."""

    def __init__(self, status_code: int, code: str, message: str, details: dict | None = None) -> None:
        self.status_code = status_code
        self.payload = ErrorResponse(code=code, message=message, details=details)
        super().__init__(message)

    @classmethod
    def from_failure(cls, failure: Failure) -> ApiError:
        return cls(
            status_code=failure.status_code,
            code=failure.code,
            message=failure.message,
            details=failure.details,
        )


def unwrap(result: T | Failure) -> T:
    """Return a service result, raising the matching ``ApiError`` for a ``Failure``."""
    if isinstance(result, Failure):
        raise ApiError.from_failure(result)
    return result


__all__ = ["ApiError", "unwrap"]
