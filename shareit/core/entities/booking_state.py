from __future__ import annotations

from enum import Enum


class BookingState(str, Enum):
    """
    Caller-chosen category used to select which bookings a list query returns.
    """
    ALL = "ALL"
    CURRENT = "CURRENT"
    PAST = "PAST"
    FUTURE = "FUTURE"
    WAITING = "WAITING"
    REJECTED = "REJECTED"

    @classmethod
    def parse(cls, token: str | None) -> BookingState | None:
        """
        Case-insensitive lookup. A missing token means ALL; an unknown one returns None.
        """
        if token is None:
            return cls.ALL
        try:
            return cls(token.strip().upper())
        except ValueError:
            return None
