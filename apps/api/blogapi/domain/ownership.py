"""Ownership guard for post mutations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from blogapi.repositories.base import PostRecord
from blogapi.schemas.auth import Principal


class DenyReason(str, Enum):
    NOT_AUTHOR = "NOT_AUTHOR"


@dataclass(frozen=True, slots=True)
class Allow:
    pass


@dataclass(frozen=True, slots=True)
class Deny:
    reason: DenyReason
    message: str


def authorize_mutation(principal: Principal, post: PostRecord) -> Allow | Deny:
    """Allow update/delete only when the loaded post was authored by ``principal``.

    Callers load the post first; a missing post is reported as not found and never
    reaches this check.
    """
    if post.author_id == principal.id:
        return Allow()
    return Deny(
        reason=DenyReason.NOT_AUTHOR,
        message="Not authorized, you are not the author of this blog",
    )
