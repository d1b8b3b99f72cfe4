"""In-memory repositories used by the API and tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from uuid import uuid4

from blogapi.core.clock import Clock, utcnow
from blogapi.repositories.base import ContentStore, CredentialStore, PostRecord, UserRecord

_MIN_TIMESTAMP_STEP = timedelta(microseconds=1)


@dataclass(slots=True)
class InMemoryStore(CredentialStore, ContentStore):
    """Simple, deterministic persistence layer.

    Every public method runs to completion without yielding, so each call is atomic
    with respect to other requests served by the same event loop.
    """

    users: dict[str, UserRecord] = field(default_factory=dict)
    user_ids_by_email: dict[str, str] = field(default_factory=dict)
    posts: dict[str, PostRecord] = field(default_factory=dict)
    clock: Clock = utcnow
    user_write_count: int = 0
    post_write_count: int = 0
    list_failure_message: str | None = None

    def create_user(self, *, name: str, email: str, password_hash: str) -> UserRecord | None:
        if email in self.user_ids_by_email:
            return None

        user = UserRecord(
            id=str(uuid4()),
            name=name,
            email=email,
            password_hash=password_hash,
            created_at=self.clock(),
        )
        self.users[user.id] = user
        self.user_ids_by_email[email] = user.id
        self.user_write_count += 1
        return user

    def get_user(self, user_id: str) -> UserRecord | None:
        return self.users.get(user_id)

    def get_user_by_email(self, email: str) -> UserRecord | None:
        user_id = self.user_ids_by_email.get(email)
        if user_id is None:
            return None
        return self.users.get(user_id)

    def delete_user(self, user_id: str) -> bool:
        user = self.users.pop(user_id, None)
        if user is None:
            return False
        self.user_ids_by_email.pop(user.email, None)
        self.user_write_count += 1
        return True

    def get_post(self, post_id: str) -> PostRecord | None:
        return self.posts.get(post_id)

    def create_post(self, *, author_id: str, title: str, content: str) -> PostRecord:
        now = self.clock()
        post = PostRecord(
            id=str(uuid4()),
            title=title,
            content=content,
            author_id=author_id,
            created_at=now,
            updated_at=now,
        )
        self.posts[post.id] = post
        self.post_write_count += 1
        return post

    def update_post_if_owned(
        self,
        *,
        post_id: str,
        author_id: str,
        title: str | None = None,
        content: str | None = None,
    ) -> PostRecord | None:
        post = self.posts.get(post_id)
        if post is None or post.author_id != author_id:
            return None

        if title is not None:
            post.title = title
        if content is not None:
            post.content = content
        post.updated_at = self._next_timestamp(post.updated_at)
        self.post_write_count += 1
        return post

    def delete_post_if_owned(self, *, post_id: str, author_id: str) -> bool:
        post = self.posts.get(post_id)
        if post is None or post.author_id != author_id:
            return False

        del self.posts[post_id]
        self.post_write_count += 1
        return True

    def list_posts_page(
        self,
        *,
        skip: int,
        limit: int,
        author_id: str | None = None,
    ) -> tuple[list[PostRecord], int]:
        if self.list_failure_message is not None:
            message = self.list_failure_message
            self.list_failure_message = None
            raise RuntimeError(message)

        matching = [
            record
            for record in self.posts.values()
            if author_id is None or record.author_id == author_id
        ]
        # Newest first; equal timestamps fall back to id so page boundaries are stable.
        matching.sort(key=lambda record: (record.created_at, record.id), reverse=True)
        return matching[skip : skip + limit], len(matching)

    def _next_timestamp(self, previous: datetime) -> datetime:
        now = self.clock()
        if now <= previous:
            return previous + _MIN_TIMESTAMP_STEP
        return now
