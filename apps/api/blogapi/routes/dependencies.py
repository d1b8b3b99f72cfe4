"""Dependency wiring for routes."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader

from blogapi.adapters.auth import (
    CredentialFailure,
    CredentialFailureReason,
    JwtTokenVerifier,
    TokenVerifier,
)
from blogapi.core.clock import Clock, utcnow
from blogapi.core.config import Settings, get_settings
from blogapi.core.logging_safety import safe_log_identifier
from blogapi.domain.context import RequestContext
from blogapi.domain.results import Failure, PrincipalNotFound
from blogapi.errors import ApiError
from blogapi.repositories.memory import InMemoryStore
from blogapi.services.auth import AuthService
from blogapi.services.blogs import BlogService
from blogapi.services.principals import PrincipalResolver

# Read the raw header so a missing credential stays distinguishable from a malformed one.
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    scheme_name="bearerAuth",
    description="Bearer <token>",
)
logger = logging.getLogger(__name__)


def get_request_context(request: Request) -> RequestContext:
    correlation_id = request.headers.get("X-Correlation-Id") or f"req-{uuid4()}"
    return RequestContext(correlation_id=correlation_id)


def get_clock() -> Clock:
    return utcnow


def get_token_verifier(settings: Annotated[Settings, Depends(get_settings)]) -> TokenVerifier:
    return JwtTokenVerifier(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(seconds=settings.token_ttl_seconds),
    )


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_principal_resolver(store: Annotated[InMemoryStore, Depends(get_store)]) -> PrincipalResolver:
    return PrincipalResolver(store)


async def get_authenticated_context(
    request: Request,
    context: Annotated[RequestContext, Depends(get_request_context)],
    authorization: Annotated[str | None, Security(authorization_header)],
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
    resolver: Annotated[PrincipalResolver, Depends(get_principal_resolver)],
    clock: Annotated[Clock, Depends(get_clock)],
) -> RequestContext:
    """Verify the bearer token and resolve its principal into a fresh request context."""
    safe_correlation_id = safe_log_identifier(context.correlation_id, prefix="cid")
    verified = verifier.verify(authorization, now=clock())
    if isinstance(verified, CredentialFailure):
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=%s",
            safe_correlation_id,
            request.method,
            request.url.path,
            verified.reason.value,
        )
        raise ApiError.from_failure(Failure.unauthenticated(_rejection_message(verified)))

    principal = resolver.resolve(verified.principal_id)
    if isinstance(principal, PrincipalNotFound):
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=principal_not_found principal_id=%s",
            safe_correlation_id,
            request.method,
            request.url.path,
            safe_log_identifier(principal.principal_id, prefix="pid"),
        )
        raise ApiError.from_failure(Failure.unauthenticated("Not authorized, user not found"))

    logger.info(
        "auth.accepted correlation_id=%s method=%s path=%s principal_id=%s",
        safe_correlation_id,
        request.method,
        request.url.path,
        safe_log_identifier(principal.id, prefix="pid"),
    )
    return context.with_principal(principal)


def _rejection_message(failure: CredentialFailure) -> str:
    if failure.reason is CredentialFailureReason.MISSING_CREDENTIAL:
        return "Not authorized, no token"
    return "Not authorized, token failed"


def get_auth_service(
    store: Annotated[InMemoryStore, Depends(get_store)],
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
    clock: Annotated[Clock, Depends(get_clock)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthService:
    return AuthService(store, verifier, clock, bcrypt_rounds=settings.bcrypt_rounds)


def get_blog_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> BlogService:
    return BlogService(posts=store, users=store)
