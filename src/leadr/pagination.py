"""
Cursor-paginated results with bound next/previous navigation.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from leadr.errors import FETCH_UNAVAILABLE, NO_NEXT_PAGE, NO_PREV_PAGE
from leadr.result import LeadrResult

T = TypeVar("T")

PageFetcher = Callable[[str], Awaitable[LeadrResult[Any]]]


class PagedResult(Generic[T]):
    """One page of items plus the cursors needed to move to its neighbours.

    ``next_page()`` and ``prev_page()`` repeat the query that produced this
    page with the matching cursor. When there is no page in that direction
    they return a failed result without touching the network.
    """

    def __init__(
        self,
        items: list[T],
        count: int,
        has_next: bool,
        has_prev: bool,
        next_cursor: Optional[str] = None,
        prev_cursor: Optional[str] = None,
        fetch_page: Optional[PageFetcher] = None,
    ):
        self.items = items
        self.count = count
        self.has_next = has_next
        self.has_prev = has_prev
        self.next_cursor = next_cursor
        self.prev_cursor = prev_cursor
        self._fetch_page = fetch_page

    async def next_page(self) -> LeadrResult[PagedResult[T]]:
        if not self.has_next or not self.next_cursor:
            return LeadrResult.fail(0, NO_NEXT_PAGE, "No next page available")
        if self._fetch_page is None:
            return LeadrResult.fail(0, FETCH_UNAVAILABLE, "Page fetch function not available")
        return await self._fetch_page(self.next_cursor)

    async def prev_page(self) -> LeadrResult[PagedResult[T]]:
        if not self.has_prev or not self.prev_cursor:
            return LeadrResult.fail(0, NO_PREV_PAGE, "No previous page available")
        if self._fetch_page is None:
            return LeadrResult.fail(0, FETCH_UNAVAILABLE, "Page fetch function not available")
        return await self._fetch_page(self.prev_cursor)

    @classmethod
    def from_json(
        cls,
        json: dict[str, Any],
        item_parser: Callable[[dict[str, Any]], T],
        fetch_page: Optional[PageFetcher] = None,
    ) -> "PagedResult[T]":
        """Build a page from a ``{data: [...], pagination: {...}}`` envelope.

        Non-object entries in ``data`` are skipped; ``item_parser`` errors
        propagate so the caller can report a parse failure.
        """
        data = json.get("data")
        items = [item_parser(item) for item in data if isinstance(item, dict)] if isinstance(data, list) else []

        pagination = json.get("pagination")
        if not isinstance(pagination, dict):
            pagination = {}
        count = pagination.get("count")

        return cls(
            items=items,
            count=count if isinstance(count, int) else len(items),
            has_next=bool(pagination.get("has_next", False)),
            has_prev=bool(pagination.get("has_prev", False)),
            next_cursor=pagination.get("next_cursor") or None,
            prev_cursor=pagination.get("prev_cursor") or None,
            fetch_page=fetch_page,
        )

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __repr__(self) -> str:
        return (
            f"PagedResult(items={len(self.items)}, count={self.count}, "
            f"has_next={self.has_next}, has_prev={self.has_prev})"
        )


MAX_PAGE_SIZE = 100


def clamp_limit(limit: int) -> Optional[int]:
    """Page size capped at MAX_PAGE_SIZE, or None when ``limit`` is not a positive integer."""
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        return None
    return min(limit, MAX_PAGE_SIZE)
