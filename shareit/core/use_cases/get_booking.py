from __future__ import annotations

from shareit.core.repositories.booking_repository import BookingRepository
from shareit.core.use_cases.authorization import AuthorizationAsNotFound
from shareit.core.use_cases.dto import BookingDTO
from shareit.core.use_cases.errors import NotFoundError


class GetBookingUseCase:
    """Visible to the booker and the item owner only."""

    def __init__(self, *, booking_repo: BookingRepository) -> None:
        self._booking_repo = booking_repo

    def execute(self, *, booking_id: int, caller_id: int) -> BookingDTO:
        booking = self._booking_repo.get(booking_id)
        if booking is None:
            raise NotFoundError("id", f"Booking not found: {booking_id}")

        AuthorizationAsNotFound.require_participant(booking, caller_id)

        return BookingDTO.from_entity(booking)
