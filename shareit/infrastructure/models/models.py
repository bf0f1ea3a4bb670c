from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shareit.core.entities.booking import BookingStatus
from shareit.infrastructure.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(512), nullable=False, unique=True)

    items = relationship("ItemModel", back_populates="owner")


class ItemModel(Base):
    __tablename__ = "items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id", name="fk_item_owner"), nullable=False, index=True)

    owner = relationship("UserModel", back_populates="items")
    bookings = relationship("BookingModel", back_populates="item")
    comments = relationship("CommentModel", back_populates="item")


class BookingModel(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("end_date > start_date", name="ck_bookings_end_after_start"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    start: Mapped[datetime] = mapped_column("start_date", DateTime, nullable=False, index=True)
    end: Mapped[datetime] = mapped_column("end_date", DateTime, nullable=False)
    item_id: Mapped[int] = mapped_column(ForeignKey("items.id", name="fk_booking_item"), nullable=False, index=True)
    booker_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", name="fk_booking_booker"),
        nullable=False,
        index=True,
    )
    status: Mapped[BookingStatus] = mapped_column(
        Enum(BookingStatus, native_enum=False, length=16),
        nullable=False,
        default=BookingStatus.WAITING,
    )

    item = relationship("ItemModel", back_populates="bookings")
    booker = relationship("UserModel")


class CommentModel(Base):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    text: Mapped[str] = mapped_column(String(2000), nullable=False)
    item_id: Mapped[int] = mapped_column(ForeignKey("items.id", name="fk_comment_item"), nullable=False, index=True)
    author_id: Mapped[int] = mapped_column(ForeignKey("users.id", name="fk_comment_author"), nullable=False)
    created: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    item = relationship("ItemModel", back_populates="comments")
    author = relationship("UserModel")
