"""Authentication provider interfaces."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class CredentialFailureReason(str, Enum):
    MISSING_CREDENTIAL = "missing_credential"
    MALFORMED_CREDENTIAL = "malformed_credential"
    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"


@dataclass(frozen=True, slots=True)
class CredentialFailure:
    """Why a bearer credential was rejected; every reason maps to HTTP 401."""

    reason: CredentialFailureReason


@dataclass(frozen=True, slots=True)
class VerifiedCredential:
    principal_id: str
    issued_at: datetime
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class IssuedToken:
    token: str
    issued_at: datetime
    expires_at: datetime


class TokenVerifier(ABC):
    """Provider-neutral bearer token issuance and verification."""

    @abstractmethod
    def issue(self, principal_id: str, *, now: datetime) -> IssuedToken:
        """Sign a token for ``principal_id`` valid from ``now`` for the configured lifetime."""

    @abstractmethod
    def verify(self, authorization: str | None, *, now: datetime) -> VerifiedCredential | CredentialFailure:
        """Check an ``Authorization`` header value; never raises for bad input."""


__all__ = [
    "CredentialFailure",
    "CredentialFailureReason",
    "IssuedToken",
    "TokenVerifier",
    "VerifiedCredential",
]
