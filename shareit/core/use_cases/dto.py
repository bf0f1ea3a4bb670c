from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from shareit.core.entities.booking import Booking, BookingStatus
from shareit.core.entities.comment import Comment
from shareit.core.entities.item import Item
from shareit.core.entities.user import User


@dataclass(frozen=True, slots=True)
class BookingDTO:
    """
    Use-case return type for every booking operation.
    """
    booking_id: int
    start: datetime
    end: datetime
    status: BookingStatus
    item_id: int
    booker_id: int

    @classmethod
    def from_entity(cls, booking: Booking) -> BookingDTO:
        return cls(
            booking_id=booking.booking_id,
            start=booking.start,
            end=booking.end,
            status=booking.status,
            item_id=booking.item_id,
            booker_id=booking.booker_id,
        )


@dataclass(frozen=True, slots=True)
class CommentDTO:
    comment_id: int
    text: str
    author_name: str
    created: datetime

    @classmethod
    def from_entity(cls, comment: Comment) -> CommentDTO:
        return cls(
            comment_id=comment.comment_id,
            text=comment.text,
            author_name=comment.author_name,
            created=comment.created,
        )


@dataclass(frozen=True, slots=True)
class ItemDTO:
    """
    last_booking / next_booking are only filled in for the item owner. Comments are
    newest first.
    """
    item_id: int
    name: str
    description: str
    available: bool
    owner_id: int
    last_booking: BookingDTO | None = None
    next_booking: BookingDTO | None = None
    comments: tuple[CommentDTO, ...] = ()

    @classmethod
    def from_entity(
            cls,
            item: Item,
            *,
            last_booking: Booking | None = None,
            next_booking: Booking | None = None,
            comments: Iterable[Comment] = (),
    ) -> ItemDTO:
        return cls(
            item_id=item.item_id,
            name=item.name,
            description=item.description,
            available=item.available,
            owner_id=item.owner_id,
            last_booking=BookingDTO.from_entity(last_booking) if last_booking else None,
            next_booking=BookingDTO.from_entity(next_booking) if next_booking else None,
            comments=tuple(CommentDTO.from_entity(c) for c in comments),
        )


@dataclass(frozen=True, slots=True)
class UserDTO:
    user_id: int
    name: str
    email: str

    @classmethod
    def from_entity(cls, user: User) -> UserDTO:
        return cls(user_id=user.user_id, name=user.name, email=user.email)
