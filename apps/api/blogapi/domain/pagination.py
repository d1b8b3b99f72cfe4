"""Page window arithmetic for newest-first listings."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PageWindow:
    page: int
    page_size: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @classmethod
    def for_request(cls, requested_page: int | None, page_size: int) -> PageWindow:
        """Clamp the requested page to at least 1; there is no upper clamp."""
        if page_size < 1:
            raise ValueError("page_size must be positive")
        page = requested_page if requested_page is not None and requested_page >= 1 else 1
        return cls(page=page, page_size=page_size)


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    total_pages: int
    total: int


def parse_page(raw: str | None) -> int | None:
    """Read a page number leniently; anything that is not an integer means no page."""
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def total_pages(total: int, page_size: int) -> int:
    return -(-total // page_size)


def paginate(
    fetch: Callable[[int, int], tuple[Sequence[T], int]],
    *,
    requested_page: int | None,
    page_size: int,
) -> Page[T]:
    """Fetch one window through ``fetch(skip, limit)``.

    Totals come from the same call as the items and are never cached, so a page
    past the end is simply empty while ``total``/``total_pages`` stay accurate.
    """
    window = PageWindow.for_request(requested_page, page_size)
    items, total = fetch(window.skip, window.page_size)
    return Page(
        items=list(items),
        page=window.page,
        total_pages=total_pages(total, window.page_size),
        total=total,
    )
