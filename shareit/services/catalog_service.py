from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shareit.core import clock
from shareit.core.use_cases.add_comment import AddCommentUseCase
from shareit.core.use_cases.delete_user import DeleteUserUseCase
from shareit.core.use_cases.dto import CommentDTO, ItemDTO, UserDTO
from shareit.core.use_cases.errors import AlreadyExistsError, BadRequestError
from shareit.core.use_cases.get_item import GetItemUseCase
from shareit.core.use_cases.get_user import GetUserUseCase
from shareit.core.use_cases.list_items import ListOwnerItemsUseCase, SearchItemsUseCase
from shareit.core.use_cases.list_users import ListUsersUseCase
from shareit.core.use_cases.register_item import RegisterItemUseCase
from shareit.core.use_cases.register_user import RegisterUserUseCase
from shareit.core.use_cases.update_item import UpdateItemUseCase
from shareit.core.use_cases.update_user import UpdateUserUseCase
from shareit.infrastructure.database import transaction
from shareit.infrastructure.repositories.booking_repository_impl import BookingRepositoryImpl
from shareit.infrastructure.repositories.comment_repository_impl import CommentRepositoryImpl
from shareit.infrastructure.repositories.item_repository_impl import ItemRepositoryImpl
from shareit.infrastructure.repositories.user_repository_impl import UserRepositoryImpl
from shareit.schemas.models import (
    CommentCreate,
    CommentOut,
    ItemCreate,
    ItemOut,
    ItemUpdate,
    UserCreate,
    UserOut,
    UserUpdate,
)
from shareit.services.booking_service import to_booking_out

logger = logging.getLogger(__name__)


def _to_user_out(dto: UserDTO) -> UserOut:
    return UserOut(id=dto.user_id, name=dto.name, email=dto.email)


def _to_comment_out(dto: CommentDTO) -> CommentOut:
    return CommentOut(id=dto.comment_id, text=dto.text, author_name=dto.author_name, created=dto.created)


def _to_item_out(dto: ItemDTO) -> ItemOut:
    return ItemOut(
        id=dto.item_id,
        name=dto.name,
        description=dto.description,
        available=dto.available,
        owner_id=dto.owner_id,
        last_booking=to_booking_out(dto.last_booking) if dto.last_booking else None,
        next_booking=to_booking_out(dto.next_booking) if dto.next_booking else None,
        comments=[_to_comment_out(c) for c in dto.comments],
    )


# -----------------------------
# Users
# -----------------------------
def register_user_service(body: UserCreate, db: Session) -> UserOut:
    use_case = RegisterUserUseCase(user_repo=UserRepositoryImpl(db))

    try:
        with transaction(db):
            dto = use_case.execute(name=body.name, email=str(body.email))
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same email.
        raise AlreadyExistsError("email", f"User with this email already exists: {body.email}") from e

    logger.info("User registered: id=%s", dto.user_id)
    return _to_user_out(dto)


def get_user_service(user_id: int, db: Session) -> UserOut:
    use_case = GetUserUseCase(user_repo=UserRepositoryImpl(db))
    return _to_user_out(use_case.execute(user_id=user_id))


def list_users_service(db: Session) -> list[UserOut]:
    use_case = ListUsersUseCase(user_repo=UserRepositoryImpl(db))
    return [_to_user_out(d) for d in use_case.execute()]


def update_user_service(user_id: int, body: UserUpdate, db: Session) -> UserOut:
    use_case = UpdateUserUseCase(user_repo=UserRepositoryImpl(db))
    email = str(body.email) if body.email is not None else None

    try:
        with transaction(db):
            dto = use_case.execute(user_id=user_id, name=body.name, email=email)
    except IntegrityError as e:
        raise AlreadyExistsError("email", f"User with this email already exists: {email}") from e

    logger.info("User updated: id=%s", dto.user_id)
    return _to_user_out(dto)


def delete_user_service(user_id: int, db: Session) -> None:
    use_case = DeleteUserUseCase(user_repo=UserRepositoryImpl(db))

    try:
        with transaction(db):
            use_case.execute(user_id=user_id)
    except IntegrityError as e:
        raise BadRequestError("id", f"User still owns items, bookings or comments: {user_id}") from e

    logger.info("User deleted: id=%s", user_id)


# -----------------------------
# Items
# -----------------------------
def register_item_service(owner_id: int, body: ItemCreate, db: Session) -> ItemOut:
    use_case = RegisterItemUseCase(item_repo=ItemRepositoryImpl(db), user_repo=UserRepositoryImpl(db))

    with transaction(db):
        dto = use_case.execute(
            owner_id=owner_id,
            name=body.name,
            description=body.description,
            available=body.available,
        )

    logger.info("Item registered: id=%s owner=%s", dto.item_id, dto.owner_id)
    return _to_item_out(dto)


def update_item_service(owner_id: int, item_id: int, body: ItemUpdate, db: Session) -> ItemOut:
    use_case = UpdateItemUseCase(item_repo=ItemRepositoryImpl(db))

    with transaction(db):
        dto = use_case.execute(
            item_id=item_id,
            caller_id=owner_id,
            name=body.name,
            description=body.description,
            available=body.available,
        )

    logger.info("Item updated: id=%s available=%s", dto.item_id, dto.available)
    return _to_item_out(dto)


def get_item_service(caller_id: int, item_id: int, db: Session) -> ItemOut:
    use_case = GetItemUseCase(
        item_repo=ItemRepositoryImpl(db),
        booking_repo=BookingRepositoryImpl(db),
        comment_repo=CommentRepositoryImpl(db),
        clock=clock.now,
    )
    return _to_item_out(use_case.execute(item_id=item_id, caller_id=caller_id))


def list_owner_items_service(owner_id: int, offset: int | None, size: int | None, db: Session) -> list[ItemOut]:
    use_case = ListOwnerItemsUseCase(
        item_repo=ItemRepositoryImpl(db),
        booking_repo=BookingRepositoryImpl(db),
        comment_repo=CommentRepositoryImpl(db),
        clock=clock.now,
    )
    dtos = use_case.execute(owner_id=owner_id, offset=offset, size=size)

    logger.info("Items listed: owner=%s ids=%s", owner_id, [d.item_id for d in dtos])
    return [_to_item_out(d) for d in dtos]


def search_items_service(
        caller_id: int,
        text: str | None,
        offset: int | None,
        size: int | None,
        db: Session,
) -> list[ItemOut]:
    use_case = SearchItemsUseCase(
        item_repo=ItemRepositoryImpl(db),
        booking_repo=BookingRepositoryImpl(db),
        clock=clock.now,
    )
    dtos = use_case.execute(caller_id=caller_id, text=text, offset=offset, size=size)

    logger.info("Items searched: text=%r ids=%s", text, [d.item_id for d in dtos])
    return [_to_item_out(d) for d in dtos]


def add_comment_service(author_id: int, item_id: int, body: CommentCreate, db: Session) -> CommentOut:
    use_case = AddCommentUseCase(
        booking_repo=BookingRepositoryImpl(db),
        comment_repo=CommentRepositoryImpl(db),
        item_repo=ItemRepositoryImpl(db),
        user_repo=UserRepositoryImpl(db),
        clock=clock.now,
    )

    with transaction(db):
        dto = use_case.execute(author_id=author_id, item_id=item_id, text=body.text)

    logger.info("Comment added: id=%s item=%s author=%s", dto.comment_id, item_id, author_id)
    return _to_comment_out(dto)
