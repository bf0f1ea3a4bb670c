from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shareit.core.entities.booking import Booking, BookingStatus
from shareit.core.entities.comment import Comment
from shareit.core.entities.item import Item
from shareit.core.entities.user import User
from shareit.core.pagination import OffsetPager, Sort
from shareit.infrastructure.repositories.booking_repository_impl import BookingRepositoryImpl
from shareit.infrastructure.repositories.comment_repository_impl import CommentRepositoryImpl
from shareit.infrastructure.repositories.item_repository_impl import ItemRepositoryImpl
from shareit.infrastructure.repositories.user_repository_impl import UserRepositoryImpl

NOW = datetime(2030, 6, 15, 12, 0)
DAY = timedelta(days=1)
BY_ID = OffsetPager.of_offset(0, None, Sort.by("id"))


@pytest.fixture()
def seeded(db: Session) -> dict[str, int]:
    users = UserRepositoryImpl(db)
    items = ItemRepositoryImpl(db)

    owner = users.add(User(name="Owner", email="owner@example.com")).user_id
    booker = users.add(User(name="Booker", email="booker@example.com")).user_id

    def add(name: str, description: str, available: bool = True) -> int:
        return items.add(Item(name=name, description=description, available=available, owner_id=owner)).item_id

    ids = {
        "owner": owner,
        "booker": booker,
        "drill": add("Drill", "cordless, 18V"),
        "saw": add("Hand saw", "for DRILLING? no, cutting"),
        "hidden": add("Old drill", "broken", available=False),
        "percent": add("Ladder", "100% aluminium"),
    }
    db.commit()
    return ids


def test_find_by_owner_in_id_order_with_window(db: Session, seeded: dict[str, int]) -> None:
    repo = ItemRepositoryImpl(db)

    assert [i.item_id for i in repo.find_by_owner(seeded["owner"], BY_ID)] == [
        seeded[k] for k in ("drill", "saw", "hidden", "percent")
    ]
    assert [i.item_id for i in repo.find_by_owner(seeded["owner"], OffsetPager.of_offset(1, 2, Sort.by("id")))] == [
        seeded["saw"], seeded["hidden"]
    ]
    assert repo.find_by_owner(seeded["booker"], BY_ID) == []


@pytest.mark.parametrize(
    "text,expected",
    [
        ("drill", ["drill", "saw"]),  # name, then description; unavailable excluded
        ("DRILL", ["drill", "saw"]),
        ("100%", ["percent"]),
        ("%", ["percent"]),  # literal, not a wildcard
        ("_", []),
    ],
)
def test_search(db: Session, seeded: dict[str, int], text: str, expected: list[str]) -> None:
    found = ItemRepositoryImpl(db).search(text, BY_ID)

    assert [i.item_id for i in found] == [seeded[k] for k in expected]


def test_comments_newest_first_with_author_name(db: Session, seeded: dict[str, int]) -> None:
    repo = CommentRepositoryImpl(db)
    older = repo.add(Comment(text="Works", item_id=seeded["drill"], author_id=seeded["booker"], created=NOW))
    newer = repo.add(Comment(text="Battery died", item_id=seeded["drill"], author_id=seeded["booker"],
                             created=NOW + DAY))
    db.commit()

    comments = repo.find_by_item(seeded["drill"])

    assert older.author_name == "Booker"
    assert [c.comment_id for c in comments] == [newer.comment_id, older.comment_id]
    assert repo.find_by_item(seeded["saw"]) == []


def test_count_started_approved_for_booker(db: Session, seeded: dict[str, int]) -> None:
    bookings = BookingRepositoryImpl(db)

    def add(start: datetime, status: BookingStatus) -> None:
        bookings.save(Booking(start=start, end=start + DAY, item_id=seeded["drill"], booker_id=seeded["booker"],
                              status=status))

    add(NOW - 3 * DAY, BookingStatus.REJECTED)
    add(NOW + DAY, BookingStatus.APPROVED)
    db.commit()
    assert bookings.count_started_approved_for_booker(seeded["drill"], seeded["booker"], NOW) == 0

    add(NOW - 3 * DAY, BookingStatus.APPROVED)
    db.commit()
    assert bookings.count_started_approved_for_booker(seeded["drill"], seeded["booker"], NOW) == 1
    assert bookings.count_started_approved_for_booker(seeded["saw"], seeded["booker"], NOW) == 0


def test_user_update_delete_and_find_all(db: Session, seeded: dict[str, int]) -> None:
    repo = UserRepositoryImpl(db)
    booker = repo.get(seeded["booker"])
    booker.name = "Renamed"

    assert repo.update(booker).name == "Renamed"
    assert repo.delete(seeded["booker"]) is True
    assert repo.delete(seeded["booker"]) is False
    db.commit()

    assert [u.user_id for u in repo.find_all()] == [seeded["owner"]]


def test_storage_refuses_deleting_an_item_owner(db: Session, seeded: dict[str, int]) -> None:
    with pytest.raises(IntegrityError):
        UserRepositoryImpl(db).delete(seeded["owner"])
    db.rollback()
