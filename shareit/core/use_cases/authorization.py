from __future__ import annotations

from shareit.core.entities.booking import Booking
from shareit.core.entities.item import Item
from shareit.core.use_cases.errors import NotFoundError


class AuthorizationAsNotFound:
    """
    Booking authorization policy: a caller who may not act on a booking or item is told
    it does not exist. There is no "forbidden" outcome, so an outsider cannot learn
    whether a booking exists or what state it is in.
    """

    @staticmethod
    def require_item_owner(item: Item, caller_id: int) -> None:
        if not item.is_owned_by(caller_id):
            raise NotFoundError("itemId", f"{item.item_id} for user with id {caller_id}")

    @staticmethod
    def require_booking_owner(booking: Booking, caller_id: int) -> None:
        if booking.item_owner_id != caller_id:
            raise NotFoundError("itemId", f"{booking.item_id} for user with id {caller_id}")

    @staticmethod
    def require_participant(booking: Booking, caller_id: int) -> None:
        if not booking.is_participant(caller_id):
            raise NotFoundError("itemId", f"{booking.item_id} for user with id {caller_id}")

    @staticmethod
    def forbid_own_item(item: Item, booker_id: int) -> None:
        """Owners may not book their own items."""
        if item.is_owned_by(booker_id):
            raise NotFoundError("itemId", f"{item.item_id} for user with id {booker_id}")
