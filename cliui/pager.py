"""Fixed-size paging over an ordered entry sequence."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageView(Generic[T]):
    """Items visible on one page plus the page geometry they came from."""

    items: tuple[T, ...]
    page_count: int
    page_index: int

    @property
    def is_empty(self) -> bool:
        return not self.items


def page_count(total: int, page_size: int) -> int:
    """Return ``ceil(total / page_size)``; zero for an empty sequence."""
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    if total <= 0:
        return 0
    return -(-total // page_size)


def clamp_index(value: int, count: int) -> int:
    """Clamp ``value`` into ``[0, count - 1]``; zero when ``count`` is zero."""
    if count <= 0:
        return 0
    return max(0, min(value, count - 1))


def paginate(entries: Sequence[T], page_size: int, requested_page: int) -> PageView[T]:
    """Return the page at ``requested_page``, clamped to the last existing page."""
    pages = page_count(len(entries), page_size)
    if pages == 0:
        return PageView(items=(), page_count=0, page_index=0)
    page = clamp_index(requested_page, pages)
    start = page * page_size
    return PageView(items=tuple(entries[start : start + page_size]), page_count=pages, page_index=page)


__all__ = ["PageView", "page_count", "clamp_index", "paginate"]
