"""Page slicing for filtered item sequences."""

from dataclasses import dataclass
from typing import Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Pagination:
    """Validated page bounds (page >= 1, limit >= 1)."""
    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def paginate(items: Sequence[T], page: int, limit: int) -> list[T]:
    """
    Return page ``page`` of ``items`` with ``limit`` items per page.

    Bounds are assumed valid. A page past the end is empty.
    """
    start = (page - 1) * limit
    return list(items[start:start + limit])
