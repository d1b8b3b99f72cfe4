"""Blog routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from blogapi.core.config import Settings, get_settings
from blogapi.domain.context import RequestContext
from blogapi.domain.pagination import parse_page
from blogapi.errors import unwrap
from blogapi.routes.dependencies import get_authenticated_context, get_blog_service
from blogapi.schemas.blog import Blog, BlogPage, CreateBlogRequest, MessageResponse, UpdateBlogRequest
from blogapi.schemas.error import ErrorResponse, ForbiddenError, NotFoundError, UnauthorizedError
from blogapi.services.blogs import BlogService

router = APIRouter(prefix="/blogs", tags=["Blogs"])

_MUTATION_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": UnauthorizedError},
    403: {"model": ForbiddenError},
    404: {"model": NotFoundError},
}


@router.get(
    "",
    response_model=BlogPage,
    responses={500: {"model": ErrorResponse}},
)
async def list_blogs(
    service: Annotated[BlogService, Depends(get_blog_service)],
    settings: Annotated[Settings, Depends(get_settings)],
    page: Annotated[str | None, Query()] = None,
    author: Annotated[str | None, Query(min_length=1)] = None,
) -> BlogPage:
    # Page size is the server constant; a client-supplied ``limit`` is ignored.
    return service.list_blogs(requested_page=parse_page(page), page_size=settings.page_size, author_id=author)


@router.post(
    "",
    response_model=Blog,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 401: {"model": UnauthorizedError}},
)
async def create_blog(
    payload: CreateBlogRequest,
    context: Annotated[RequestContext, Depends(get_authenticated_context)],
    service: Annotated[BlogService, Depends(get_blog_service)],
) -> Blog:
    principal = unwrap(context.require_principal())
    return service.create_blog(principal=principal, title=payload.title, content=payload.content)


@router.get(
    "/{blogId}",
    response_model=Blog,
    responses={404: {"model": NotFoundError}},
)
async def get_blog(
    blog_id: Annotated[str, Path(alias="blogId")],
    service: Annotated[BlogService, Depends(get_blog_service)],
) -> Blog:
    return unwrap(service.get_blog(post_id=blog_id))


@router.put("/{blogId}", response_model=Blog, responses=_MUTATION_RESPONSES)
@router.patch("/{blogId}", response_model=Blog, responses=_MUTATION_RESPONSES)
async def update_blog(
    blog_id: Annotated[str, Path(alias="blogId")],
    payload: UpdateBlogRequest,
    context: Annotated[RequestContext, Depends(get_authenticated_context)],
    service: Annotated[BlogService, Depends(get_blog_service)],
) -> Blog:
    return unwrap(
        service.update_blog(
            context=context,
            post_id=blog_id,
            title=payload.title,
            content=payload.content,
        )
    )


@router.delete("/{blogId}", response_model=MessageResponse, responses=_MUTATION_RESPONSES)
async def delete_blog(
    blog_id: Annotated[str, Path(alias="blogId")],
    context: Annotated[RequestContext, Depends(get_authenticated_context)],
    service: Annotated[BlogService, Depends(get_blog_service)],
) -> MessageResponse:
    return unwrap(service.delete_blog(context=context, post_id=blog_id))
