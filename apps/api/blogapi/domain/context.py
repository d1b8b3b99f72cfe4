"""Typed per-request context passed explicitly to services."""

from __future__ import annotations

from dataclasses import dataclass, replace

from blogapi.domain.results import Failure
from blogapi.repositories.base import PostRecord
from blogapi.schemas.auth import Principal


@dataclass(frozen=True, slots=True)
class RequestContext:
    correlation_id: str
    principal: Principal | None = None
    post: PostRecord | None = None

    def with_principal(self, principal: Principal) -> RequestContext:
        return replace(self, principal=principal)

    def with_post(self, post: PostRecord) -> RequestContext:
        return replace(self, post=post)

    def require_principal(self) -> Principal | Failure:
        if self.principal is None:
            return Failure.unauthenticated()
        return self.principal
