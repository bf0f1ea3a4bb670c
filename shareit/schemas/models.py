from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from shareit.core import clock


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class Status(Enum):
    WAITING = 'WAITING'
    APPROVED = 'APPROVED'
    REJECTED = 'REJECTED'
    CANCELED = 'CANCELED'


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr


class UserOut(BaseModel):
    id: int
    name: str
    email: str


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None


class ItemCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    available: bool


class ItemUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    available: bool | None = None


class BookingCreate(BaseModel):
    """
    start and end must not be in the past and end must come after start. Aware
    datetimes are converted to naive UTC.
    """
    model_config = ConfigDict(populate_by_name=True)

    item_id: int = Field(alias="itemId")
    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def _not_in_past(cls, value: datetime) -> datetime:
        value = _naive_utc(value)
        if value < clock.now():
            raise ValueError("must be a present or future instant")
        return value

    @model_validator(mode="after")
    def _end_after_start(self) -> BookingCreate:
        if not self.start < self.end:
            raise ValueError("start must be before end")
        return self


class CommentCreate(BaseModel):
    text: str = Field(min_length=1, max_length=2000)

    @field_validator("text")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class CommentOut(BaseModel):
    id: int
    text: str
    author_name: str
    created: datetime


class BookingOut(BaseModel):
    id: int
    start: datetime
    end: datetime
    status: Status
    item_id: int
    booker_id: int


class ItemOut(BaseModel):
    id: int
    name: str
    description: str
    available: bool
    owner_id: int
    last_booking: BookingOut | None = None
    next_booking: BookingOut | None = None
    comments: list[CommentOut] = []
