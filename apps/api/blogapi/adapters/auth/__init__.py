"""Auth verifier adapters."""

from .base import (
    CredentialFailure,
    CredentialFailureReason,
    IssuedToken,
    TokenVerifier,
    VerifiedCredential,
)
from .jwt_auth import JwtTokenVerifier

__all__ = [
    "CredentialFailure",
    "CredentialFailureReason",
    "IssuedToken",
    "JwtTokenVerifier",
    "TokenVerifier",
    "VerifiedCredential",
]
