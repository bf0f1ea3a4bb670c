from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Response
from sqlalchemy.orm import Session

from shareit.core.entities.booking import BookingRole
from shareit.core.use_cases.errors import (
    AlreadyExistsError,
    BadRequestError,
    BookingServiceError,
    NotFoundError,
)
from shareit.infrastructure.config import settings
from shareit.infrastructure.database import SessionLocal
from shareit.schemas.models import (
    BookingCreate,
    BookingOut,
    CommentCreate,
    CommentOut,
    ItemCreate,
    ItemOut,
    ItemUpdate,
    UserCreate,
    UserOut,
    UserUpdate,
)
from shareit.services.booking_service import (
    approve_booking_service,
    create_booking_service,
    get_booking_service,
    list_bookings_service,
)
from shareit.services.catalog_service import (
    add_comment_service,
    delete_user_service,
    get_item_service,
    get_user_service,
    list_owner_items_service,
    list_users_service,
    register_item_service,
    register_user_service,
    search_items_service,
    update_item_service,
    update_user_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_STATUS_CODES: dict[type[BookingServiceError], int] = {
    NotFoundError: 404,
    BadRequestError: 400,
    AlreadyExistsError: 409,
}


def get_db() -> Session:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def caller_id(user_id: int = Header(alias=settings.user_id_header)) -> int:
    """Identity of the calling user, taken from the sharer header."""
    return user_id


def _http_error(e: BookingServiceError) -> HTTPException:
    status_code = _STATUS_CODES.get(type(e), 400)
    logger.warning("Request failed with %s: %s", status_code, e.errors)
    return HTTPException(status_code=status_code, detail=e.errors)


# -----------------------------
# Users and items
# -----------------------------
@router.post("/users", response_model=UserOut, status_code=201)
def post_users(body: UserCreate, db: Session = Depends(get_db)) -> UserOut:
    """
    Register a user

    Returns:
      - 201 with the created user
      - 409 if the email is already taken
    """
    try:
        return register_user_service(body, db)
    except BookingServiceError as e:
        raise _http_error(e)


@router.get("/users/{user_id}", response_model=UserOut)
def get_users_user_id(user_id: int, db: Session = Depends(get_db)) -> UserOut:
    try:
        return get_user_service(user_id, db)
    except BookingServiceError as e:
        raise _http_error(e)


@router.get("/users", response_model=list[UserOut])
def get_users(db: Session = Depends(get_db)) -> list[UserOut]:
    return list_users_service(db)


@router.patch("/users/{user_id}", response_model=UserOut)
def patch_users_user_id(user_id: int, body: UserUpdate, db: Session = Depends(get_db)) -> UserOut:
    """
    Partial update of name and email

    Returns:
      - 200 with the updated user
      - 404 if the user does not exist
      - 409 if the email is already taken
    """
    try:
        return update_user_service(user_id, body, db)
    except BookingServiceError as e:
        raise _http_error(e)


@router.delete("/users/{user_id}", status_code=204, response_class=Response)
def delete_users_user_id(user_id: int, db: Session = Depends(get_db)) -> Response:
    """
    Returns:
      - 204 once the user is deleted
      - 400 if the user still owns items or has bookings or comments
      - 404 if the user does not exist
    """
    try:
        delete_user_service(user_id, db)
    except BookingServiceError as e:
        raise _http_error(e)
    return Response(status_code=204)


@router.get("/items", response_model=list[ItemOut])
def get_items(
    offset: int = Query(default=0, alias="from", ge=0),
    size: int | None = Query(default=None, ge=1),
    user_id: int = Depends(caller_id),
    db: Session = Depends(get_db),
) -> list[ItemOut]:
    """
    The caller's items in id order, with last/next booking and comments. May be empty
    """
    try:
        return list_owner_items_service(user_id, offset, size, db)
    except BookingServiceError as e:
        raise _http_error(e)


@router.get("/items/search", response_model=list[ItemOut])
def get_items_search(
    text: str | None = Query(default=None),
    offset: int = Query(default=0, alias="from", ge=0),
    size: int | None = Query(default=None, ge=1),
    user_id: int = Depends(caller_id),
    db: Session = Depends(get_db),
) -> list[ItemOut]:
    """
    Available items whose name or description contains the text, ignoring case.
    Blank text finds nothing
    """
    try:
        return search_items_service(user_id, text, offset, size, db)
    except BookingServiceError as e:
        raise _http_error(e)


@router.post("/items/{item_id}/comment", response_model=CommentOut, status_code=201)
def post_items_item_id_comment(
    item_id: int,
    body: CommentCreate,
    user_id: int = Depends(caller_id),
    db: Session = Depends(get_db),
) -> CommentOut:
    """
    Comment on an item the caller has booked

    Returns:
      - 201 with the comment
      - 400 unless the caller has an approved booking of the item that has started
      - 404 if the caller or the item does not exist
    """
    try:
        return add_comment_service(user_id, item_id, body, db)
    except BookingServiceError as e:
        raise _http_error(e)


@router.post("/items", response_model=ItemOut, status_code=201)
def post_items(body: ItemCreate, user_id: int = Depends(caller_id), db: Session = Depends(get_db)) -> ItemOut:
    """
    List an item owned by the caller
    """
    try:
        return register_item_service(user_id, body, db)
    except BookingServiceError as e:
        raise _http_error(e)


@router.patch("/items/{item_id}", response_model=ItemOut)
def patch_items_item_id(
    item_id: int,
    body: ItemUpdate,
    user_id: int = Depends(caller_id),
    db: Session = Depends(get_db),
) -> ItemOut:
    """
    Owner-only partial update; anyone else gets 404
    """
    try:
        return update_item_service(user_id, item_id, body, db)
    except BookingServiceError as e:
        raise _http_error(e)


@router.get("/items/{item_id}", response_model=ItemOut)
def get_items_item_id(item_id: int, user_id: int = Depends(caller_id), db: Session = Depends(get_db)) -> ItemOut:
    try:
        return get_item_service(user_id, item_id, db)
    except BookingServiceError as e:
        raise _http_error(e)


# -----------------------------
# Bookings
# -----------------------------
@router.post("/bookings", response_model=BookingOut, status_code=201)
def post_bookings(body: BookingCreate, user_id: int = Depends(caller_id), db: Session = Depends(get_db)) -> BookingOut:
    """
    Request a booking

    Returns:
      - 201 with the WAITING booking
      - 400 if the item is unavailable or already reserved for the period
      - 404 if the item or the caller does not exist, or the caller owns the item
      - 422 on request validation error
    """
    try:
        return create_booking_service(user_id, body, db)
    except BookingServiceError as e:
        raise _http_error(e)


@router.get("/bookings/owner", response_model=list[BookingOut])
def get_bookings_owner(
    state: str | None = Query(default=None),
    offset: int = Query(default=0, alias="from", ge=0),
    size: int | None = Query(default=None, ge=1),
    user_id: int = Depends(caller_id),
    db: Session = Depends(get_db),
) -> list[BookingOut]:
    """
    Bookings of the caller's items, newest start first
    """
    try:
        return list_bookings_service(user_id, BookingRole.OWNER, state, offset, size, db)
    except BookingServiceError as e:
        raise _http_error(e)


@router.get("/bookings", response_model=list[BookingOut])
def get_bookings(
    state: str | None = Query(default=None),
    offset: int = Query(default=0, alias="from", ge=0),
    size: int | None = Query(default=None, ge=1),
    user_id: int = Depends(caller_id),
    db: Session = Depends(get_db),
) -> list[BookingOut]:
    """
    The caller's own bookings, newest start first

    Returns:
      - 200 with a non-empty page
      - 400 on an unknown state
      - 404 if the page is empty
    """
    try:
        return list_bookings_service(user_id, BookingRole.BOOKER, state, offset, size, db)
    except BookingServiceError as e:
        raise _http_error(e)


@router.get("/bookings/{booking_id}", response_model=BookingOut)
def get_bookings_booking_id(
    booking_id: int,
    user_id: int = Depends(caller_id),
    db: Session = Depends(get_db),
) -> BookingOut:
    """
    Visible to the booker and the item owner; 404 for everyone else
    """
    try:
        return get_booking_service(user_id, booking_id, db)
    except BookingServiceError as e:
        raise _http_error(e)


@router.patch("/bookings/{booking_id}", response_model=BookingOut)
def patch_bookings_booking_id(
    booking_id: int,
    approved: bool = Query(...),
    user_id: int = Depends(caller_id),
    db: Session = Depends(get_db),
) -> BookingOut:
    """
    Approve or reject a WAITING booking (item owner only)
    """
    try:
        return approve_booking_service(user_id, booking_id, approved, db)
    except BookingServiceError as e:
        raise _http_error(e)
