"""Offset pagination result."""

import math
from typing import Generic, TypeVar

from pydantic import Field

from inkwell.domain.model.common import DomainModel

T = TypeVar("T")


class Page(DomainModel, Generic[T]):
    """One page of an offset-paginated listing (pages are 1-indexed)."""

    items: list[T]
    total: int = Field(ge=0)
    page: int = Field(ge=1)
    limit: int = Field(ge=1)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)

    @property
    def has_next(self) -> bool:
        return (self.page - 1) * self.limit + len(self.items) < self.total

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @staticmethod
    def offset_for(page: int, limit: int) -> int:
        return (page - 1) * limit
