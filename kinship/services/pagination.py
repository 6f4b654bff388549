"""Slice in-memory lists into fixed-size, 1-based pages."""

import math
from collections.abc import Sequence
from typing import TypeVar

from kinship.services.errors import ValidationError

T = TypeVar("T")


def _check_page_size(page_size: int) -> None:
    if page_size < 1:
        raise ValidationError("Page size must be at least 1")


def page_count(items: Sequence[T], page_size: int) -> int:
    """Number of pages needed for `items`; 0 for an empty list."""
    _check_page_size(page_size)
    return math.ceil(len(items) / page_size)


def paginate(items: Sequence[T], page_size: int, page: int) -> list[T]:
    """Return page `page` (1-based). Pages past the end are empty."""
    _check_page_size(page_size)
    if page < 1:
        raise ValidationError("Page must be at least 1")
    start = (page - 1) * page_size
    return list(items[start : start + page_size])
