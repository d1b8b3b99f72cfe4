"""HMAC-signed JWT verifier adapter."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import jwt
from jose.exceptions import JWTClaimsError, JWTError

from blogapi.adapters.auth.base import (
    CredentialFailure,
    CredentialFailureReason,
    IssuedToken,
    TokenVerifier,
    VerifiedCredential,
)

_BEARER_SCHEME = "bearer"


class JwtTokenVerifier(TokenVerifier):
    """Issues and verifies ``{sub, iat, exp}`` JWTs signed with a server-held secret.

    The secret and algorithm are fixed at construction; verification is a pure
    function of the header value, the supplied ``now`` and that secret.
    """

    def __init__(self, *, secret: str, algorithm: str = "HS256", ttl: timedelta) -> None:
        if not secret:
            raise ValueError("JWT signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl

    def issue(self, principal_id: str, *, now: datetime) -> IssuedToken:
        issued_at = now.replace(microsecond=0)
        expires_at = issued_at + self._ttl
        token = jwt.encode(
            {
                "sub": principal_id,
                "iat": int(issued_at.timestamp()),
                "exp": int(expires_at.timestamp()),
            },
            self._secret,
            algorithm=self._algorithm,
        )
        return IssuedToken(token=token, issued_at=issued_at, expires_at=expires_at)

    def verify(self, authorization: str | None, *, now: datetime) -> VerifiedCredential | CredentialFailure:
        if authorization is None or not authorization.strip():
            return CredentialFailure(CredentialFailureReason.MISSING_CREDENTIAL)

        scheme, _, token = authorization.strip().partition(" ")
        token = token.strip()
        if scheme.lower() != _BEARER_SCHEME or not token or " " in token:
            return CredentialFailure(CredentialFailureReason.MALFORMED_CREDENTIAL)

        # Structure first, so an undecodable token is not reported as a bad signature.
        try:
            jwt.get_unverified_header(token)
            jwt.get_unverified_claims(token)
        except JWTError:
            return CredentialFailure(CredentialFailureReason.MALFORMED_CREDENTIAL)

        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False, "verify_nbf": False},
            )
        except JWTClaimsError:
            return CredentialFailure(CredentialFailureReason.MALFORMED_CREDENTIAL)
        except JWTError:
            return CredentialFailure(CredentialFailureReason.INVALID_SIGNATURE)

        principal_id = claims.get("sub")
        issued_at = _timestamp_claim(claims.get("iat"))
        expires_at = _timestamp_claim(claims.get("exp"))
        if not isinstance(principal_id, str) or not principal_id or issued_at is None or expires_at is None:
            return CredentialFailure(CredentialFailureReason.MALFORMED_CREDENTIAL)

        if now >= expires_at:
            return CredentialFailure(CredentialFailureReason.EXPIRED)

        return VerifiedCredential(principal_id=principal_id, issued_at=issued_at, expires_at=expires_at)


def _timestamp_claim(value: object) -> datetime | None:
    # bool is an int subclass; a JSON true is not a timestamp.
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    try:
        return datetime.fromtimestamp(value, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


__all__ = ["JwtTokenVerifier"]
