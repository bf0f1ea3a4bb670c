from __future__ import annotations

from datetime import datetime

from shareit.core.clock import Clock, utc_now
from shareit.core.entities.item import Item
from shareit.core.repositories.booking_repository import BookingRepository
from shareit.core.repositories.comment_repository import CommentRepository
from shareit.core.repositories.item_repository import ItemRepository
from shareit.core.use_cases.dto import ItemDTO
from shareit.core.use_cases.errors import NotFoundError


class ItemView:
    """
    Builds the ItemDTO a caller sees: the owner also gets the last and next approved
    bookings. Comments are included unless the view is built without a comment store.
    """

    def __init__(self, *, booking_repo: BookingRepository, comment_repo: CommentRepository | None) -> None:
        self._booking_repo = booking_repo
        self._comment_repo = comment_repo

    def describe(self, item: Item, caller_id: int, now: datetime) -> ItemDTO:
        comments = self._comment_repo.find_by_item(item.item_id) if self._comment_repo else ()

        if not item.is_owned_by(caller_id):
            return ItemDTO.from_entity(item, comments=comments)

        return ItemDTO.from_entity(
            item,
            last_booking=self._booking_repo.find_last_for_item(item.item_id, now),
            next_booking=self._booking_repo.find_next_for_item(item.item_id, now),
            comments=comments,
        )


class GetItemUseCase:
    """
    Any user may read an item and its comments. Only the owner also sees its last and
    next approved bookings.
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

    def execute(self, *, item_id: int, caller_id: int) -> ItemDTO:
        item = self._item_repo.get(item_id)
        if item is None:
            raise NotFoundError("id", f"Item not found: {item_id}")

        return self._view.describe(item, caller_id, self._clock())
