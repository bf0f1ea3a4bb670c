from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from shareit.core import clock
from shareit.core.entities.booking import BookingRole
from shareit.core.use_cases.approve_booking import ApproveBookingUseCase
from shareit.core.use_cases.create_booking import CreateBookingUseCase
from shareit.core.use_cases.dto import BookingDTO
from shareit.core.use_cases.get_booking import GetBookingUseCase
from shareit.core.use_cases.list_bookings import ListBookingsUseCase
from shareit.infrastructure.database import transaction
from shareit.infrastructure.repositories.booking_repository_impl import BookingRepositoryImpl
from shareit.infrastructure.repositories.item_repository_impl import ItemRepositoryImpl
from shareit.infrastructure.repositories.user_repository_impl import UserRepositoryImpl
from shareit.schemas.models import BookingCreate, BookingOut, Status

logger = logging.getLogger(__name__)


def to_booking_out(dto: BookingDTO) -> BookingOut:
    return BookingOut(
        id=dto.booking_id,
        start=dto.start,
        end=dto.end,
        status=Status(dto.status.value),
        item_id=dto.item_id,
        booker_id=dto.booker_id,
    )


def create_booking_service(booker_id: int, body: BookingCreate, db: Session) -> BookingOut:
    use_case = CreateBookingUseCase(
        booking_repo=BookingRepositoryImpl(db),
        item_repo=ItemRepositoryImpl(db),
        user_repo=UserRepositoryImpl(db),
    )

    with transaction(db):
        dto = use_case.execute(booker_id=booker_id, item_id=body.item_id, start=body.start, end=body.end)

    logger.info("Booking created: id=%s item=%s booker=%s", dto.booking_id, dto.item_id, dto.booker_id)
    return to_booking_out(dto)


def approve_booking_service(owner_id: int, booking_id: int, approved: bool, db: Session) -> BookingOut:
    use_case = ApproveBookingUseCase(
        booking_repo=BookingRepositoryImpl(db),
        item_repo=ItemRepositoryImpl(db),
        clock=clock.now,
    )

    with transaction(db):
        dto = use_case.execute(booking_id=booking_id, caller_id=owner_id, approved=approved)

    logger.info("Booking decided: id=%s status=%s by owner=%s", dto.booking_id, dto.status.value, owner_id)
    return to_booking_out(dto)


def get_booking_service(caller_id: int, booking_id: int, db: Session) -> BookingOut:
    use_case = GetBookingUseCase(booking_repo=BookingRepositoryImpl(db))

    dto = use_case.execute(booking_id=booking_id, caller_id=caller_id)
    return to_booking_out(dto)


def list_bookings_service(
        subject_id: int,
        role: BookingRole,
        state: str | None,
        offset: int | None,
        size: int | None,
        db: Session,
) -> list[BookingOut]:
    use_case = ListBookingsUseCase(booking_repo=BookingRepositoryImpl(db), clock=clock.now)

    dtos = use_case.execute(subject_id=subject_id, role=role, state=state, offset=offset, size=size)

    logger.info(
        "Bookings listed: user=%s role=%s state=%s ids=%s",
        subject_id,
        role.value,
        state,
        [d.booking_id for d in dtos],
    )
    return [to_booking_out(d) for d in dtos]
