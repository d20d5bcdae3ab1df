"""Page arithmetic for the catalog list."""

from __future__ import annotations

import math
from dataclasses import dataclass


def page_count(total: int, page_size: int) -> int:
    """Number of pages needed to show ``total`` items."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    return math.ceil(total / page_size)


def parse_page(raw: str | int) -> int | None:
    """Parse a page number from a path segment; None if it is not an integer."""
    if isinstance(raw, int):
        return raw
    try:
        return int(raw.strip())
    except ValueError:
        return None


@dataclass(frozen=True)
class Pagination:
    """Position of one page within the catalog.

    ``prev_page`` and ``next_page`` are plain neighbours and may fall outside
    the valid range at either end; templates check ``has_prev``/``has_next``.
    """

    page: int
    page_size: int
    total: int

    @property
    def total_pages(self) -> int:
        return page_count(self.total, self.page_size)

    @property
    def offset(self) -> int:
        return self.page_size * (self.page - 1)

    @property
    def prev_page(self) -> int:
        return self.page - 1

    @property
    def next_page(self) -> int:
        return self.page + 1

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def is_valid(self) -> bool:
        # An empty catalog has no pages at all
        return 1 <= self.page <= self.total_pages
