from __future__ import annotations

from shareit.core.clock import Clock, utc_now
from shareit.core.pagination import OffsetPager, Sort
from shareit.core.repositories.booking_repository import BookingRepository
from shareit.core.repositories.comment_repository import CommentRepository
from shareit.core.repositories.item_repository import ItemRepository
from shareit.core.use_cases.dto import ItemDTO
from shareit.core.use_cases.errors import BadRequestError
from shareit.core.use_cases.get_item import ItemView

ITEM_LIST_SORT = Sort.by("id")


def _pager(offset: int | None, size: int | None) -> OffsetPager:
    try:
        return OffsetPager.of_offset(offset, size, ITEM_LIST_SORT)
    except ValueError as e:
        raise BadRequestError("pagination", str(e)) from e


class ListOwnerItemsUseCase:
    """
    The caller's own items in id order, each with its last and next approved bookings
    and its comments. An empty page is an empty list.
    """

    def __init__(
            self,
            *,
            item_repo: ItemRepository,
            booking_repo: BookingRepository,
            comment_repo: CommentRepository,
            clock: Clock = utc_now,
    ) -> None:
        self._item_repo = item_repo
        self._view = ItemView(booking_repo=booking_repo, comment_repo=comment_repo)
        self._clock = clock

    def execute(self, *, owner_id: int, offset: int | None = None, size: int | None = None) -> list[ItemDTO]:
        items = self._item_repo.find_by_owner(owner_id, _pager(offset, size))
        now = self._clock()
        return [self._view.describe(item, owner_id, now) for item in items]


class SearchItemsUseCase:
    """
    Available items matching `text` in name or description, in id order. Blank text
    matches nothing. Comments are not loaded for search results.
    """

    def __init__(
            self,
            *,
            item_repo: ItemRepository,
            booking_repo: BookingRepository,
            clock: Clock = utc_now,
    ) -> None:
        self._item_repo = item_repo
        self._view = ItemView(booking_repo=booking_repo, comment_repo=None)
        self._clock = clock

    def execute(
            self,
            *,
            caller_id: int,
            text: str | None,
            offset: int | None = None,
            size: int | None = None,
    ) -> list[ItemDTO]:
        pager = _pager(offset, size)
        if text is None or not text.strip():
            return []

        items = self._item_repo.search(text.strip(), pager)
        now = self._clock()
        return [self._view.describe(item, caller_id, now) for item in items]
