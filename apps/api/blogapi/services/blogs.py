"""Blog service layer."""

import logging

from blogapi.core.logging_safety import safe_log_identifier
from blogapi.domain.context import RequestContext
from blogapi.domain.ownership import Deny, authorize_mutation
from blogapi.domain.pagination import paginate
from blogapi.domain.results import Failure
from blogapi.repositories.base import ContentStore, CredentialStore, PostRecord
from blogapi.schemas.auth import Principal
from blogapi.schemas.blog import AuthorSummary, Blog, BlogPage, MessageResponse

logger = logging.getLogger(__name__)


class BlogService:
    def __init__(self, posts: ContentStore, users: CredentialStore) -> None:
        self._posts = posts
        self._users = users

    def create_blog(self, *, principal: Principal, title: str, content: str) -> Blog:
        record = self._posts.create_post(author_id=principal.id, title=title, content=content)
        logger.info(
            "blog.created post_id=%s principal_id=%s",
            record.id,
            safe_log_identifier(principal.id, prefix="pid"),
        )
        return self._to_blog(record)

    def get_blog(self, *, post_id: str) -> Blog | Failure:
        record = self._posts.get_post(post_id)
        if record is None:
            return Failure.not_found()
        return self._to_blog(record)

    def list_blogs(self, *, requested_page: int | None, page_size: int, author_id: str | None = None) -> BlogPage:
        page = paginate(
            lambda skip, limit: self._posts.list_posts_page(skip=skip, limit=limit, author_id=author_id),
            requested_page=requested_page,
            page_size=page_size,
        )
        return BlogPage(
            blogs=[self._to_blog(record) for record in page.items],
            page=page.page,
            pages=page.total_pages,
            total=page.total,
        )

    def update_blog(
        self,
        *,
        context: RequestContext,
        post_id: str,
        title: str | None,
        content: str | None,
    ) -> Blog | Failure:
        principal = context.require_principal()
        if isinstance(principal, Failure):
            return principal

        checked = self._load_for_mutation(context, principal, post_id)
        if isinstance(checked, Failure):
            return checked

        updated = self._posts.update_post_if_owned(
            post_id=post_id,
            author_id=principal.id,
            title=title,
            content=content,
        )
        if updated is None:
            # Deleted between the ownership check and the write.
            return Failure.not_found()

        _log_mutation("updated", checked)
        return self._to_blog(updated)

    def delete_blog(self, *, context: RequestContext, post_id: str) -> MessageResponse | Failure:
        principal = context.require_principal()
        if isinstance(principal, Failure):
            return principal

        checked = self._load_for_mutation(context, principal, post_id)
        if isinstance(checked, Failure):
            return checked

        if not self._posts.delete_post_if_owned(post_id=post_id, author_id=principal.id):
            return Failure.not_found()

        _log_mutation("deleted", checked)
        return MessageResponse(message="Blog removed")

    def _load_for_mutation(
        self,
        context: RequestContext,
        principal: Principal,
        post_id: str,
    ) -> RequestContext | Failure:
        """Resolve the target post, then apply the ownership guard.

        Not-found is decided before ownership so a missing post never yields 403.
        """
        record = self._posts.get_post(post_id)
        if record is None:
            return Failure.not_found()

        checked = context.with_post(record)
        decision = authorize_mutation(principal, record)
        if isinstance(decision, Deny):
            logger.warning(
                "blog.mutation_denied post_id=%s principal_id=%s correlation_id=%s reason=%s",
                post_id,
                safe_log_identifier(principal.id, prefix="pid"),
                _safe_cid(context),
                decision.reason.value,
            )
            return Failure.forbidden(decision.message)
        return checked

    def _to_blog(self, record: PostRecord) -> Blog:
        author = self._users.get_user(record.author_id)
        return Blog(
            id=record.id,
            title=record.title,
            content=record.content,
            author=AuthorSummary(
                id=record.author_id,
                name=author.name if author is not None else None,
                email=author.email if author is not None else None,
            ),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


def _safe_cid(context: RequestContext) -> str:
    return safe_log_identifier(context.correlation_id, prefix="cid")


def _log_mutation(action: str, context: RequestContext) -> None:
    logger.info(
        "blog.%s post_id=%s principal_id=%s correlation_id=%s",
        action,
        context.post.id if context.post is not None else None,
        safe_log_identifier(context.principal.id if context.principal is not None else None, prefix="pid"),
        _safe_cid(context),
    )
