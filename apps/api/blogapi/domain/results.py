"""Result values returned by the authorization core instead of raised exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class FailureKind(str, Enum):
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"
    CONFLICT = "CONFLICT"
    UNEXPECTED = "UNEXPECTED"


_STATUS_BY_KIND: dict[FailureKind, int] = {
    FailureKind.UNAUTHENTICATED: 401,
    FailureKind.FORBIDDEN: 403,
    FailureKind.NOT_FOUND: 404,
    FailureKind.VALIDATION: 400,
    FailureKind.CONFLICT: 409,
    FailureKind.UNEXPECTED: 500,
}


@dataclass(frozen=True, slots=True)
class Failure:
    """A request outcome that the HTTP layer renders as ``{code, message}``."""

    kind: FailureKind
    code: str
    message: str
    details: dict[str, Any] | None = None

    @property
    def status_code(self) -> int:
        return _STATUS_BY_KIND[self.kind]

    @classmethod
    def unauthenticated(cls, message: str = "Not authorized") -> Failure:
        return cls(kind=FailureKind.UNAUTHENTICATED, code="UNAUTHORIZED", message=message)

    @classmethod
    def forbidden(cls, message: str) -> Failure:
        return cls(kind=FailureKind.FORBIDDEN, code="FORBIDDEN", message=message)

    @classmethod
    def not_found(cls, message: str = "Blog not found") -> Failure:
        return cls(kind=FailureKind.NOT_FOUND, code="RESOURCE_NOT_FOUND", message=message)

    @classmethod
    def conflict(cls, code: str, message: str) -> Failure:
        return cls(kind=FailureKind.CONFLICT, code=code, message=message)


@dataclass(frozen=True, slots=True)
class PrincipalNotFound:
    """The token verified, but its principal no longer has a user record."""

    principal_id: str
