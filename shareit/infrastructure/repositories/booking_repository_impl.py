from __future__ import annotations

from datetime import datetime

from sqlalchemy import Select, func, select, update
from sqlalchemy.orm import Session

from shareit.core.entities.booking import Booking, BookingRole, BookingStatus
from shareit.core.pagination import OffsetPager
from shareit.core.repositories.booking_repository import BookingRepository
from shareit.infrastructure.models.models import BookingModel, ItemModel

_SORTABLE_COLUMNS = {
    "id": BookingModel.id,
    "start": BookingModel.start,
    "end": BookingModel.end,
    "status": BookingModel.status,
}


class BookingRepositoryImpl(BookingRepository):
    """
    SQLAlchemy implementation for bookings.

    Writes are flushed, never committed: one create/approve call is one transaction and
    the service layer decides when it ends.
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, booking_id: int) -> Booking | None:
        stmt = self._base_query().where(BookingModel.id == booking_id).execution_options(populate_existing=True)
        row = self._db.execute(stmt).first()
        if row is None:
            return None
        return self._to_entity(*row)

    def save(self, booking: Booking) -> Booking:
        row = None
        if booking.booking_id is not None:
            row = self._db.get(BookingModel, booking.booking_id)
        if row is None:
            row = BookingModel(item_id=booking.item_id, booker_id=booking.booker_id)

        row.start = booking.start
        row.end = booking.end
        row.status = booking.status

        self._db.add(row)
        self._db.flush()

        owner_id = booking.item_owner_id
        if owner_id is None:
            owner_id = self._db.execute(select(ItemModel.owner_id).where(ItemModel.id == row.item_id)).scalar_one()
        return self._to_entity(row, owner_id)

    def update_status(self, booking_id: int, expected: BookingStatus, target: BookingStatus) -> bool:
        stmt = (
            update(BookingModel)
            .where(BookingModel.id == booking_id)
            .where(BookingModel.status == expected)
            .values(status=target)
            .execution_options(synchronize_session=False)
        )
        return self._db.execute(stmt).rowcount == 1

    def count_approved_overlapping(self, item_id: int, start: datetime, end: datetime) -> int:
        stmt = (
            select(func.count(BookingModel.id))
            .where(BookingModel.item_id == item_id)
            .where(BookingModel.status == BookingStatus.APPROVED)
            .where(BookingModel.start < end)
            .where(BookingModel.end > start)
        )
        return int(self._db.execute(stmt).scalar_one() or 0)

    def lock_item(self, item_id: int) -> None:
        if self._db.get_bind().dialect.name == "sqlite":
            # No row locks in SQLite: a no-op write takes the database write lock until commit.
            stmt = (
                update(ItemModel)
                .where(ItemModel.id == item_id)
                .values(available=ItemModel.available)
                .execution_options(synchronize_session=False)
            )
            self._db.execute(stmt)
            return
        self._db.execute(select(ItemModel.id).where(ItemModel.id == item_id).with_for_update())

    def count_started_approved_for_booker(self, item_id: int, booker_id: int, now: datetime) -> int:
        stmt = (
            select(func.count(BookingModel.id))
            .where(BookingModel.item_id == item_id)
            .where(BookingModel.booker_id == booker_id)
            .where(BookingModel.status == BookingStatus.APPROVED)
            .where(BookingModel.start <= now)
        )
        return int(self._db.execute(stmt).scalar_one() or 0)

    def find_all(self, subject_id: int, role: BookingRole, now: datetime, pager: OffsetPager) -> list[Booking]:
        return self._page(self._for_subject(subject_id, role), pager)

    def find_current(self, subject_id: int, role: BookingRole, now: datetime, pager: OffsetPager) -> list[Booking]:
        stmt = self._for_subject(subject_id, role).where(BookingModel.start <= now).where(BookingModel.end > now)
        return self._page(stmt, pager)

    def find_past(self, subject_id: int, role: BookingRole, now: datetime, pager: OffsetPager) -> list[Booking]:
        return self._page(self._for_subject(subject_id, role).where(BookingModel.end <= now), pager)

    def find_future(self, subject_id: int, role: BookingRole, now: datetime, pager: OffsetPager) -> list[Booking]:
        return self._page(self._for_subject(subject_id, role).where(BookingModel.start > now), pager)

    def find_by_status(
            self, subject_id: int, role: BookingRole, status: BookingStatus, pager: OffsetPager
    ) -> list[Booking]:
        return self._page(self._for_subject(subject_id, role).where(BookingModel.status == status), pager)

    def find_last_for_item(self, item_id: int, now: datetime) -> Booking | None:
        stmt = (
            self._base_query()
            .where(BookingModel.item_id == item_id)
            .where(BookingModel.status == BookingStatus.APPROVED)
            .where(BookingModel.start <= now)
            .order_by(BookingModel.start.desc())
            .limit(1)
        )
        row = self._db.execute(stmt).first()
        return self._to_entity(*row) if row is not None else None

    def find_next_for_item(self, item_id: int, now: datetime) -> Booking | None:
        stmt = (
            self._base_query()
            .where(BookingModel.item_id == item_id)
            .where(BookingModel.status == BookingStatus.APPROVED)
            .where(BookingModel.start > now)
            .order_by(BookingModel.start.asc())
            .limit(1)
        )
        row = self._db.execute(stmt).first()
        return self._to_entity(*row) if row is not None else None

    # -----------------------------
    # Internal helpers
    # -----------------------------
    @staticmethod
    def _base_query() -> Select:
        return select(BookingModel, ItemModel.owner_id).join(ItemModel, BookingModel.item_id == ItemModel.id)

    def _for_subject(self, subject_id: int, role: BookingRole) -> Select:
        if role is BookingRole.BOOKER:
            return self._base_query().where(BookingModel.booker_id == subject_id)
        return self._base_query().where(ItemModel.owner_id == subject_id)

    def _page(self, stmt: Select, pager: OffsetPager) -> list[Booking]:
        for order in pager.sort:
            column = _SORTABLE_COLUMNS.get(order.property)
            if column is None:
                raise ValueError(f"Unsupported sort property: {order.property!r}")
            stmt = stmt.order_by(column.desc() if order.is_descending else column.asc())
        stmt = stmt.order_by(BookingModel.id.desc())

        skip, limit = pager.window()
        stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)

        return [self._to_entity(row, owner_id) for row, owner_id in self._db.execute(stmt).all()]

    @staticmethod
    def _to_entity(row: BookingModel, owner_id: int) -> Booking:
        return Booking(
            booking_id=row.id,
            start=row.start,
            end=row.end,
            item_id=row.item_id,
            booker_id=row.booker_id,
            status=BookingStatus(row.status) if not isinstance(row.status, BookingStatus) else row.status,
            item_owner_id=owner_id,
        )
