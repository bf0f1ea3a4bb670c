from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class BookingStatus(str, Enum):
    WAITING = "WAITING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    CANCELED = "CANCELED"

    def can_transition_to(self, target: BookingStatus) -> bool:
        return target in _TRANSITIONS.get(self, frozenset())


# CANCELED has no inbound edge.
_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.WAITING: frozenset({BookingStatus.APPROVED, BookingStatus.REJECTED}),
}


class BookingRole(str, Enum):
    """Which side of a booking a list query is asked from."""
    BOOKER = "BOOKER"
    OWNER = "OWNER"


@dataclass(slots=True)
class Booking:
    """
    A reservation of an item by a user for the half-open interval [start, end).
    """
    start: datetime
    end: datetime
    item_id: int
    booker_id: int
    status: BookingStatus = BookingStatus.WAITING
    booking_id: int | None = None
    # Denormalized from the item at load time; used for authorization only.
    item_owner_id: int | None = None

    def overlaps(self, start: datetime, end: datetime) -> bool:
        return self.start < end and self.end > start

    def is_participant(self, user_id: int) -> bool:
        return user_id == self.booker_id or user_id == self.item_owner_id

    def decide(self, approved: bool) -> None:
        target = BookingStatus.APPROVED if approved else BookingStatus.REJECTED
        if not self.status.can_transition_to(target):
            raise ValueError(f"Booking status cannot change from {self.status.value} to {target.value}")
        self.status = target
