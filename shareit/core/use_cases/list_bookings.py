from __future__ import annotations

from datetime import datetime
from typing import Callable

from shareit.core.clock import Clock, utc_now
from shareit.core.entities.booking import Booking, BookingRole, BookingStatus
from shareit.core.entities.booking_state import BookingState
from shareit.core.pagination import OffsetPager, Sort
from shareit.core.repositories.booking_repository import BookingRepository
from shareit.core.use_cases.dto import BookingDTO
from shareit.core.use_cases.errors import BadRequestError, NotFoundError

BOOKING_LIST_SORT = Sort.by("start").descending()


class ListBookingsUseCase:
    """
    Lists a user's bookings, as booker or as item owner, filtered by a state token and
    windowed by (offset, size). Newest start first.

    Six query shapes: ALL, CURRENT, PAST, FUTURE, and status equality for WAITING and
    REJECTED. An empty page is reported as NotFoundError.
    """

    def __init__(self, *, booking_repo: BookingRepository, clock: Clock = utc_now) -> None:
        self._booking_repo = booking_repo
        self._clock = clock

        self._queries: dict[BookingState, Callable[[int, BookingRole, datetime, OffsetPager], list[Booking]]] = {
            BookingState.ALL: booking_repo.find_all,
            BookingState.CURRENT: booking_repo.find_current,
            BookingState.PAST: booking_repo.find_past,
            BookingState.FUTURE: booking_repo.find_future,
            BookingState.WAITING: self._by_status(BookingStatus.WAITING),
            BookingState.REJECTED: self._by_status(BookingStatus.REJECTED),
        }

    def execute(
            self,
            *,
            subject_id: int,
            role: BookingRole,
            state: str | BookingState | None = None,
            offset: int | None = None,
            size: int | None = None,
    ) -> list[BookingDTO]:
        booking_state = state if isinstance(state, BookingState) else BookingState.parse(state)
        if booking_state is None:
            raise BadRequestError("error", f"Unknown state: {state}")

        try:
            pager = OffsetPager.of_offset(offset, size, BOOKING_LIST_SORT)
        except ValueError as e:
            raise BadRequestError("pagination", str(e)) from e

        bookings = self._queries[booking_state](subject_id, role, self._clock(), pager)
        if not bookings:
            raise NotFoundError("noBookingsFound", f"No {booking_state.value} bookings found for user {subject_id}")

        return [BookingDTO.from_entity(b) for b in bookings]

    def _by_status(self, status: BookingStatus) -> Callable[[int, BookingRole, datetime, OffsetPager], list[Booking]]:
        def query(subject_id: int, role: BookingRole, now: datetime, pager: OffsetPager) -> list[Booking]:
            return self._booking_repo.find_by_status(subject_id, role, status, pager)
        return query
