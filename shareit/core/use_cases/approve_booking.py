from __future__ import annotations

from shareit.core.clock import Clock, utc_now
from shareit.core.entities.booking import BookingStatus
from shareit.core.repositories.booking_repository import BookingRepository
from shareit.core.repositories.item_repository import ItemRepository
from shareit.core.use_cases.authorization import AuthorizationAsNotFound
from shareit.core.use_cases.check_interval_conflict import IntervalConflictChecker
from shareit.core.use_cases.dto import BookingDTO
from shareit.core.use_cases.errors import BadRequestError, NotFoundError


class ApproveBookingUseCase:
    """
    The item owner's one-time decision on a WAITING booking.

    Both decisions take the item lock before the status is read, and the status write
    only succeeds against a row that is still WAITING. A booking decided by a concurrent
    call is reported as BadRequest, never overwritten.
    """

    def __init__(
            self,
            *,
            booking_repo: BookingRepository,
            item_repo: ItemRepository,
            clock: Clock = utc_now,
    ) -> None:
        self._booking_repo = booking_repo
        self._item_repo = item_repo
        self._clock = clock
        self._conflicts = IntervalConflictChecker(booking_repo=booking_repo)

    def execute(self, *, booking_id: int, caller_id: int, approved: bool) -> BookingDTO:
        booking = self._booking_repo.get(booking_id)
        if booking is None:
            raise NotFoundError("id", f"Booking not found: {booking_id}")

        AuthorizationAsNotFound.require_booking_owner(booking, caller_id)

        self._booking_repo.lock_item(booking.item_id)
        # Re-read under the lock.
        booking = self._booking_repo.get(booking_id)
        if booking is None:
            raise NotFoundError("id", f"Booking not found: {booking_id}")

        if booking.status is not BookingStatus.WAITING:
            raise BadRequestError("status", f"Only a WAITING booking can be decided: {booking.status.value}")

        item = self._item_repo.get(booking.item_id)
        if item is None or not item.available:
            raise BadRequestError("item", f"Item is not available for booking: {booking.item_id}")

        if not booking.end > self._clock():
            raise BadRequestError("id", f"Booking has already ended: {booking.end}")

        if approved and self._conflicts.is_reserved(item_id=booking.item_id, start=booking.start, end=booking.end):
            raise BadRequestError(
                "item",
                f"Item is reserved for this period: {booking.item_id} {booking.start} {booking.end}",
            )

        try:
            booking.decide(approved)
        except ValueError as e:
            raise BadRequestError("status", str(e)) from e

        if not self._booking_repo.update_status(booking_id, BookingStatus.WAITING, booking.status):
            raise BadRequestError("status", f"Booking was already decided: {booking_id}")

        return BookingDTO.from_entity(booking)
