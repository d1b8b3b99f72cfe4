"""Persistence contracts required by the authorization core."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class UserRecord:
    id: str
    name: str
    email: str
    password_hash: str
    created_at: datetime


@dataclass(slots=True)
class PostRecord:
    id: str
    title: str
    content: str
    author_id: str
    created_at: datetime
    updated_at: datetime


class CredentialStore(ABC):
    """User records, looked up by id for token resolution and by email for login."""

    @abstractmethod
    def create_user(self, *, name: str, email: str, password_hash: str) -> UserRecord | None:
        """Insert a user; return ``None`` when the email is already registered."""

    @abstractmethod
    def get_user(self, user_id: str) -> UserRecord | None:
        """Return the user with ``user_id`` if it exists."""

    @abstractmethod
    def get_user_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered under the normalized ``email``."""


class ContentStore(ABC):
    """Post records. Conditional writes match id and author in a single operation."""

    @abstractmethod
    def get_post(self, post_id: str) -> PostRecord | None:
        """Return the post with ``post_id`` if it exists."""

    @abstractmethod
    def create_post(self, *, author_id: str, title: str, content: str) -> PostRecord:
        """Insert a post authored by ``author_id``."""

    @abstractmethod
    def update_post_if_owned(
        self,
        *,
        post_id: str,
        author_id: str,
        title: str | None = None,
        content: str | None = None,
    ) -> PostRecord | None:
        """Apply a partial update when the post exists and belongs to ``author_id``."""

    @abstractmethod
    def delete_post_if_owned(self, *, post_id: str, author_id: str) -> bool:
        """Delete the post when it exists and belongs to ``author_id``."""

    @abstractmethod
    def list_posts_page(
        self,
        *,
        skip: int,
        limit: int,
        author_id: str | None = None,
    ) -> tuple[list[PostRecord], int]:
        """Return one newest-first slice and the total count of matching posts."""
