from __future__ import annotations

from datetime import datetime

from shareit.core.repositories.booking_repository import BookingRepository


class IntervalConflictChecker:
    """
    Counts APPROVED bookings on an item that overlap a candidate half-open interval
    [start, end). Intervals that only touch at a boundary do not overlap.
    """

    def __init__(self, *, booking_repo: BookingRepository) -> None:
        self._booking_repo = booking_repo

    def count(self, *, item_id: int, start: datetime, end: datetime) -> int:
        if start >= end:
            return 0
        return max(0, self._booking_repo.count_approved_overlapping(item_id, start, end))

    def is_reserved(self, *, item_id: int, start: datetime, end: datetime) -> bool:
        return self.count(item_id=item_id, start=start, end=end) > 0
