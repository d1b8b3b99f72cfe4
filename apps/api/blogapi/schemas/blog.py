"""Blog API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator


def _require_text(value: str | None) -> str | None:
    if value is not None and not value.strip():
        raise ValueError("Field must not be blank")
    return value


class AuthorSummary(BaseModel):
    id: str
    name: str | None = None
    email: str | None = None


class Blog(BaseModel):
    id: str
    title: str
    content: str
    author: AuthorSummary
    created_at: datetime
    updated_at: datetime


class CreateBlogRequest(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str) -> str:
        _require_text(value)
        return value.strip()

    @field_validator("content")
    @classmethod
    def _check_content(cls, value: str) -> str:
        _require_text(value)
        return value


class UpdateBlogRequest(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1)

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str | None) -> str | None:
        _require_text(value)
        return value.strip() if value is not None else None

    @field_validator("content")
    @classmethod
    def _check_content(cls, value: str | None) -> str | None:
        return _require_text(value)


class BlogPage(BaseModel):
    blogs: list[Blog]
    page: int
    pages: int
    total: int


class MessageResponse(BaseModel):
    message: str
