from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from shareit.core.entities.booking import Booking, BookingRole, BookingStatus
from shareit.core.pagination import OffsetPager


class BookingRepository(ABC):
    """
    Repository interface for bookings.

    Implementations must run a whole create/approve call (lock, checks, write) inside
    one transaction owned by the caller, and must load `Booking.item_owner_id`.

    Every find_* query matches `subject_id` against the booker (BookingRole.BOOKER) or
    the item owner (BookingRole.OWNER), applies the pager's sort and window, and
    returns one page.
    """

    @abstractmethod
    def get(self, booking_id: int) -> Booking | None:
        raise NotImplementedError

    @abstractmethod
    def save(self, booking: Booking) -> Booking:
        """Insert or update; returns the stored booking with its identity."""
        raise NotImplementedError

    @abstractmethod
    def update_status(self, booking_id: int, expected: BookingStatus, target: BookingStatus) -> bool:
        """
        Compare-and-set on the stored status. Returns False, writing nothing, when the
        stored status is no longer `expected`.
        """
        raise NotImplementedError

    @abstractmethod
    def count_approved_overlapping(self, item_id: int, start: datetime, end: datetime) -> int:
        """Number of APPROVED bookings on the item with start < `end` and end > `start`."""
        raise NotImplementedError

    @abstractmethod
    def lock_item(self, item_id: int) -> None:
        """Serialize writers on this item's bookings until the current transaction ends."""
        raise NotImplementedError

    @abstractmethod
    def count_started_approved_for_booker(self, item_id: int, booker_id: int, now: datetime) -> int:
        """APPROVED bookings of the item by this booker with start <= now (past or current)."""
        raise NotImplementedError

    @abstractmethod
    def find_all(self, subject_id: int, role: BookingRole, now: datetime, pager: OffsetPager) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def find_current(self, subject_id: int, role: BookingRole, now: datetime, pager: OffsetPager) -> list[Booking]:
        """start <= now < end"""
        raise NotImplementedError

    @abstractmethod
    def find_past(self, subject_id: int, role: BookingRole, now: datetime, pager: OffsetPager) -> list[Booking]:
        """end <= now"""
        raise NotImplementedError

    @abstractmethod
    def find_future(self, subject_id: int, role: BookingRole, now: datetime, pager: OffsetPager) -> list[Booking]:
        """start > now"""
        raise NotImplementedError

    @abstractmethod
    def find_by_status(
            self, subject_id: int, role: BookingRole, status: BookingStatus, pager: OffsetPager
    ) -> list[Booking]:
        raise NotImplementedError

    @abstractmethod
    def find_last_for_item(self, item_id: int, now: datetime) -> Booking | None:
        """Latest-starting APPROVED booking with start <= now."""
        raise NotImplementedError

    @abstractmethod
    def find_next_for_item(self, item_id: int, now: datetime) -> Booking | None:
        """Earliest-starting APPROVED booking with start > now."""
        raise NotImplementedError
