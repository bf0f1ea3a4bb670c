from __future__ import annotations

from datetime import datetime

from shareit.core.entities.booking import Booking, BookingStatus
from shareit.core.repositories.booking_repository import BookingRepository
from shareit.core.repositories.item_repository import ItemRepository
from shareit.core.repositories.user_repository import UserRepository
from shareit.core.use_cases.authorization import AuthorizationAsNotFound
from shareit.core.use_cases.check_interval_conflict import IntervalConflictChecker
from shareit.core.use_cases.dto import BookingDTO
from shareit.core.use_cases.errors import BadRequestError, NotFoundError


class CreateBookingUseCase:
    """
    Requests an item for [start, end). The new booking waits for the owner's decision.

    Only APPROVED bookings block a request: several WAITING bookings may cover the same
    interval, and the owner's approval re-checks for conflicts.
    """

    def __init__(
            self,
            *,
            booking_repo: BookingRepository,
            item_repo: ItemRepository,
            user_repo: UserRepository,
    ) -> None:
        self._booking_repo = booking_repo
        self._item_repo = item_repo
        self._user_repo = user_repo
        self._conflicts = IntervalConflictChecker(booking_repo=booking_repo)

    def execute(self, *, booker_id: int, item_id: int, start: datetime, end: datetime) -> BookingDTO:
        if start >= end:
            raise BadRequestError("start", f"Booking start must be before its end: {start} {end}")

        self._booking_repo.lock_item(item_id)

        if self._conflicts.is_reserved(item_id=item_id, start=start, end=end):
            raise BadRequestError("item", f"Item is reserved for this period: {item_id} {start} {end}")

        item = self._item_repo.get(item_id)
        if item is None:
            raise NotFoundError("itemId", f"Item not found: {item_id}")

        AuthorizationAsNotFound.forbid_own_item(item, booker_id)

        if not item.available:
            raise BadRequestError("itemId", f"Item is not available for booking: {item_id}")

        if self._user_repo.get(booker_id) is None:
            raise NotFoundError("bookerId", f"Booker not found: {booker_id}")

        booking = self._booking_repo.save(
            Booking(
                start=start,
                end=end,
                item_id=item_id,
                booker_id=booker_id,
                status=BookingStatus.WAITING,
                item_owner_id=item.owner_id,
            )
        )
        return BookingDTO.from_entity(booking)
