from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

UNBOUNDED_PAGE_SIZE = sys.maxsize


class Direction(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True, slots=True)
class Order:
    property: str
    direction: Direction = Direction.ASC

    @property
    def is_descending(self) -> bool:
        return self.direction is Direction.DESC


@dataclass(frozen=True, slots=True)
class Sort:
    """
    Ordered list of (property, direction) pairs. An empty sort means "unsorted".
    """
    orders: tuple[Order, ...] = ()

    @classmethod
    def unsorted(cls) -> Sort:
        return cls()

    @classmethod
    def by(cls, *properties: str, direction: Direction = Direction.ASC) -> Sort:
        return cls(tuple(Order(p, direction) for p in properties))

    def descending(self) -> Sort:
        return Sort(tuple(Order(o.property, Direction.DESC) for o in self.orders))

    def ascending(self) -> Sort:
        return Sort(tuple(Order(o.property, Direction.ASC) for o in self.orders))

    @property
    def is_sorted(self) -> bool:
        return bool(self.orders)

    def __bool__(self) -> bool:
        return self.is_sorted

    def __iter__(self) -> Iterator[Order]:
        return iter(self.orders)

    def __str__(self) -> str:
        if not self.orders:
            return "UNSORTED"
        return ", ".join(f"{o.property}: {o.direction.value}" for o in self.orders)


class OffsetPager:
    """
    Page-indexed cursor over a sorted result set that starts at an arbitrary offset.

    Stores that paginate by page number see (page_index, page_size); the part of the
    requested offset that does not fill a whole page is carried as residual_offset, so
    that page_index * page_size + residual_offset is always the requested offset.

    Navigation returns new cursors. When a call would not change anything the same
    instance is returned.
    """

    __slots__ = ("_residual_offset", "_page_index", "_page_size", "_sort")

    def __init__(self, residual_offset: int, page_index: int, page_size: int, sort: Sort) -> None:
        self._residual_offset = residual_offset
        self._page_index = page_index
        self._page_size = page_size
        self._sort = sort

    @classmethod
    def of_offset(cls, offset: int | None = None, size: int | None = None, sort: Sort | None = None) -> OffsetPager:
        offset = 0 if offset is None else offset
        size = UNBOUNDED_PAGE_SIZE if size is None else size
        sort = Sort.unsorted() if sort is None else sort
        if offset < 0:
            raise ValueError("Offset must not be less than zero")
        if size < 1:
            raise ValueError("Size must not be less than one")
        page_index, residual_offset = divmod(offset, size)
        return cls(residual_offset, page_index, size, sort)

    @property
    def page_index(self) -> int:
        return self._page_index

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def residual_offset(self) -> int:
        return self._residual_offset

    @property
    def sort(self) -> Sort:
        return self._sort

    @property
    def is_unbounded(self) -> bool:
        return self._page_size >= UNBOUNDED_PAGE_SIZE

    @property
    def offset(self) -> int:
        return self._residual_offset + self._page_index * self._page_size

    @property
    def has_previous(self) -> bool:
        return self.offset > 0

    def window(self) -> tuple[int, int | None]:
        """(skip, limit) for stores that take a raw offset; limit is None when unbounded."""
        return self.offset, None if self.is_unbounded else self._page_size

    def next(self) -> OffsetPager:
        if self.is_unbounded:
            return self
        return OffsetPager(self._residual_offset, self._page_index + 1, self._page_size, self._sort)

    def previous(self) -> OffsetPager:
        if not self.has_previous:
            return self
        if self._page_index == 0:
            return OffsetPager(0, 0, self._page_size, self._sort)
        return OffsetPager(self._residual_offset, self._page_index - 1, self._page_size, self._sort)

    def first(self) -> OffsetPager:
        if not self.has_previous:
            return self
        return OffsetPager(0, 0, self._page_size, self._sort)

    def with_page(self, page_index: int) -> OffsetPager:
        if page_index < 0:
            raise ValueError("Page index must not be less than zero")
        if page_index == self._page_index or self.is_unbounded:
            return self
        return OffsetPager(self._residual_offset, page_index, self._page_size, self._sort)

    def with_sort(self, sort: Sort | None) -> OffsetPager:
        if sort is None:
            sort = Sort.unsorted()
        if sort == self._sort:
            return self
        return OffsetPager(self._residual_offset, self._page_index, self._page_size, sort)

    def with_sort_by(self, direction: Direction | None, *properties: str | None) -> OffsetPager:
        columns: list[str] = []
        for column in properties:
            if column is None:
                break
            columns.append(column)
        if not columns:
            return self.with_sort(Sort.unsorted())
        return self.with_sort(Sort.by(*columns, direction=direction or Direction.ASC))

    def _key(self) -> tuple[int, int, int, Sort]:
        size = UNBOUNDED_PAGE_SIZE if self.is_unbounded else self._page_size
        return self._page_index, size, self._residual_offset, self._sort

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, OffsetPager):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return (
            f"OffsetPager(offset={self._residual_offset}, page={self._page_index}, "
            f"size={self._page_size}, sort={self._sort})"
        )
