from __future__ import annotations

from typing import TypeVar

from api.common.schemas import OffsetPage

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200


def clamp_page(limit: int, offset: int) -> tuple[int, int]:
    """Bound member and reservation listings to ``1..MAX_PAGE_SIZE`` rows from a non-negative offset."""
    return max(1, min(limit, MAX_PAGE_SIZE)), max(0, offset)


def build_page(*, items: list[T], total: int, limit: int, offset: int) -> OffsetPage[T]:
    return OffsetPage[T](
        items=items,
        total=total,
        limit=limit,
        offset=offset,
        has_more=(offset + len(items)) < total,
    )
