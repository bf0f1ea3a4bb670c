from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from sqlalchemy.orm import Session
from starlette.testclient import TestClient

from shareit.core.entities.booking import Booking, BookingStatus
from shareit.infrastructure.repositories.booking_repository_impl import BookingRepositoryImpl

HEADER = "X-Sharer-User-Id"

# The pinned clock sits at 2030-06-15 12:00; every request body lies after it.
START = datetime(2030, 7, 1, 10, 0)
DAY = timedelta(days=1)


def _iso(value: datetime) -> str:
    return value.isoformat()


def _as(user_id: int) -> dict[str, str]:
    return {HEADER: str(user_id)}


@pytest.fixture()
def users(client: TestClient) -> dict[str, int]:
    def register(name: str) -> int:
        r = client.post("/users", json={"name": name, "email": f"{name.lower()}@example.com"})
        assert r.status_code == 201, r.text
        return r.json()["id"]

    return {"owner": register("Olga"), "booker": register("Boris"), "stranger": register("Sam")}


@pytest.fixture()
def item_id(client: TestClient, users: dict[str, int]) -> int:
    r = client.post(
        "/items",
        json={"name": "Canoe", "description": "aluminium, two paddles", "available": True},
        headers=_as(users["owner"]),
    )
    assert r.status_code == 201, r.text
    return r.json()["id"]


def _book(client: TestClient, booker: int, item: int, start: datetime, end: datetime):
    return client.post(
        "/bookings",
        json={"itemId": item, "start": _iso(start), "end": _iso(end)},
        headers=_as(booker),
    )


# -----------------------------
# Users and items
# -----------------------------
def test_duplicate_email_is_conflict(client: TestClient, users: dict[str, int]) -> None:
    r = client.post("/users", json={"name": "Other Olga", "email": "olga@example.com"})

    assert r.status_code == 409
    assert "email" in r.json()["detail"]


def test_invalid_email_is_validation_error(client: TestClient) -> None:
    r = client.post("/users", json={"name": "Nobody", "email": "not-an-email"})

    assert r.status_code == 422


def test_get_unknown_user_is_not_found(client: TestClient) -> None:
    assert client.get("/users/999").status_code == 404


def test_item_for_unknown_owner_is_not_found(client: TestClient) -> None:
    r = client.post("/items", json={"name": "Saw", "description": "hand saw", "available": True}, headers=_as(999))

    assert r.status_code == 404


def test_only_owner_updates_item(client: TestClient, users: dict[str, int], item_id: int) -> None:
    denied = client.patch(f"/items/{item_id}", json={"available": False}, headers=_as(users["booker"]))
    allowed = client.patch(f"/items/{item_id}", json={"available": False}, headers=_as(users["owner"]))

    assert denied.status_code == 404
    assert allowed.status_code == 200
    assert allowed.json()["available"] is False
    assert allowed.json()["name"] == "Canoe"


# -----------------------------
# Creating bookings
# -----------------------------
def test_create_booking_returns_waiting(client: TestClient, users: dict[str, int], item_id: int) -> None:
    r = _book(client, users["booker"], item_id, START, START + DAY)

    assert r.status_code == 201, r.text
    body = r.json()
    assert body["status"] == "WAITING"
    assert body["item_id"] == item_id
    assert body["booker_id"] == users["booker"]
    assert datetime.fromisoformat(body["start"]) == START


def test_missing_user_header_is_validation_error(client: TestClient, item_id: int) -> None:
    r = client.post("/bookings", json={"itemId": item_id, "start": _iso(START), "end": _iso(START + DAY)})

    assert r.status_code == 422


@pytest.mark.parametrize(
    "start,end",
    [
        (START + DAY, START),  # end before start
        (START, START),  # empty interval
        (datetime(2000, 1, 1), START),  # start in the past
    ],
)
def test_invalid_interval_is_validation_error(client: TestClient, users: dict[str, int], item_id: int,
                                              start: datetime, end: datetime) -> None:
    assert _book(client, users["booker"], item_id, start, end).status_code == 422


def test_past_check_follows_the_pinned_clock(client: TestClient, clock, users: dict[str, int], item_id: int) -> None:
    # Future by the wall clock, past by the pinned one.
    before_pinned_now = datetime(2030, 6, 1, 10, 0)

    r = _book(client, users["booker"], item_id, before_pinned_now, START)
    assert r.status_code == 422

    clock.set(before_pinned_now - DAY)
    assert _book(client, users["booker"], item_id, before_pinned_now, START).status_code == 201


def test_booking_own_item_is_not_found(client: TestClient, users: dict[str, int], item_id: int) -> None:
    r = _book(client, users["owner"], item_id, START, START + DAY)

    assert r.status_code == 404
    assert "itemId" in r.json()["detail"]


def test_booking_unknown_item_or_booker_is_not_found(client: TestClient, users: dict[str, int], item_id: int) -> None:
    assert _book(client, users["booker"], 999, START, START + DAY).status_code == 404

    r = _book(client, 999, item_id, START, START + DAY)
    assert r.status_code == 404
    assert "bookerId" in r.json()["detail"]


def test_unavailable_item_is_bad_request(client: TestClient, users: dict[str, int], item_id: int) -> None:
    client.patch(f"/items/{item_id}", json={"available": False}, headers=_as(users["owner"]))

    r = _book(client, users["booker"], item_id, START, START + DAY)

    assert r.status_code == 400
    assert "itemId" in r.json()["detail"]


def test_approved_interval_blocks_new_requests(client: TestClient, clock, users: dict[str, int], item_id: int) -> None:
    first = _book(client, users["booker"], item_id, START, START + 2 * DAY).json()
    client.patch(f"/bookings/{first['id']}", params={"approved": "true"}, headers=_as(users["owner"]))

    overlapping = _book(client, users["stranger"], item_id, START + DAY, START + 3 * DAY)
    adjacent = _book(client, users["stranger"], item_id, START + 2 * DAY, START + 3 * DAY)

    assert overlapping.status_code == 400
    assert "item" in overlapping.json()["detail"]
    assert adjacent.status_code == 201


# -----------------------------
# Approving
# -----------------------------
def test_owner_decides_once(client: TestClient, clock, users: dict[str, int], item_id: int) -> None:
    booking_id = _book(client, users["booker"], item_id, START, START + DAY).json()["id"]

    approved = client.patch(f"/bookings/{booking_id}", params={"approved": "true"}, headers=_as(users["owner"]))
    again = client.patch(f"/bookings/{booking_id}", params={"approved": "false"}, headers=_as(users["owner"]))

    assert approved.status_code == 200
    assert approved.json()["status"] == "APPROVED"
    assert again.status_code == 400
    assert "status" in again.json()["detail"]


def test_non_owner_cannot_decide(client: TestClient, clock, users: dict[str, int], item_id: int) -> None:
    booking_id = _book(client, users["booker"], item_id, START, START + DAY).json()["id"]

    for user in ("booker", "stranger"):
        r = client.patch(f"/bookings/{booking_id}", params={"approved": "true"}, headers=_as(users[user]))
        assert r.status_code == 404

    assert client.patch("/bookings/999", params={"approved": "true"}, headers=_as(users["owner"])).status_code == 404


def test_approving_after_end_is_bad_request(client: TestClient, clock, users: dict[str, int], item_id: int) -> None:
    booking_id = _book(client, users["booker"], item_id, START, START + DAY).json()["id"]
    clock.set(START + DAY)

    r = client.patch(f"/bookings/{booking_id}", params={"approved": "true"}, headers=_as(users["owner"]))

    assert r.status_code == 400


def test_second_of_two_overlapping_waiting_bookings_is_refused(
        client: TestClient, clock, users: dict[str, int], item_id: int
) -> None:
    a = _book(client, users["booker"], item_id, START, START + 2 * DAY).json()["id"]
    b = _book(client, users["stranger"], item_id, START + DAY, START + 3 * DAY).json()["id"]

    first = client.patch(f"/bookings/{a}", params={"approved": "true"}, headers=_as(users["owner"]))
    second = client.patch(f"/bookings/{b}", params={"approved": "true"}, headers=_as(users["owner"]))
    rejected = client.patch(f"/bookings/{b}", params={"approved": "false"}, headers=_as(users["owner"]))

    assert first.status_code == 200
    assert second.status_code == 400
    assert rejected.status_code == 200
    assert rejected.json()["status"] == "REJECTED"


# -----------------------------
# Reading
# -----------------------------
def test_booking_visible_to_participants_only(client: TestClient, users: dict[str, int], item_id: int) -> None:
    booking_id = _book(client, users["booker"], item_id, START, START + DAY).json()["id"]

    assert client.get(f"/bookings/{booking_id}", headers=_as(users["booker"])).status_code == 200
    assert client.get(f"/bookings/{booking_id}", headers=_as(users["owner"])).status_code == 200
    assert client.get(f"/bookings/{booking_id}", headers=_as(users["stranger"])).status_code == 404
    assert client.get("/bookings/999", headers=_as(users["owner"])).status_code == 404


def test_lists_by_role_and_state(client: TestClient, clock, users: dict[str, int], item_id: int) -> None:
    early = _book(client, users["booker"], item_id, START, START + DAY).json()["id"]
    late = _book(client, users["booker"], item_id, START + 5 * DAY, START + 6 * DAY).json()["id"]
    client.patch(f"/bookings/{late}", params={"approved": "false"}, headers=_as(users["owner"]))

    mine = client.get("/bookings", headers=_as(users["booker"]))
    owned = client.get("/bookings/owner", params={"state": "ALL"}, headers=_as(users["owner"]))
    waiting = client.get("/bookings", params={"state": "waiting"}, headers=_as(users["booker"]))
    rejected = client.get("/bookings/owner", params={"state": "REJECTED"}, headers=_as(users["owner"]))

    assert [b["id"] for b in mine.json()] == [late, early]
    assert [b["id"] for b in owned.json()] == [late, early]
    assert [b["id"] for b in waiting.json()] == [early]
    assert [b["id"] for b in rejected.json()] == [late]


def test_current_and_past_follow_the_clock(client: TestClient, clock, users: dict[str, int], item_id: int) -> None:
    booking_id = _book(client, users["booker"], item_id, START, START + DAY).json()["id"]

    clock.set(START + timedelta(hours=1))
    current = client.get("/bookings", params={"state": "CURRENT"}, headers=_as(users["booker"]))
    clock.set(START + DAY)
    past = client.get("/bookings", params={"state": "PAST"}, headers=_as(users["booker"]))
    future = client.get("/bookings", params={"state": "FUTURE"}, headers=_as(users["booker"]))

    assert [b["id"] for b in current.json()] == [booking_id]
    assert [b["id"] for b in past.json()] == [booking_id]
    assert future.status_code == 404


def test_list_window_uses_from_and_size(client: TestClient, clock, users: dict[str, int], item_id: int) -> None:
    ids = [
        _book(client, users["booker"], item_id, START + i * DAY, START + (i + 1) * DAY).json()["id"]
        for i in range(4)
    ]

    r = client.get("/bookings", params={"from": 1, "size": 2}, headers=_as(users["booker"]))

    assert r.status_code == 200
    assert [b["id"] for b in r.json()] == [ids[2], ids[1]]


def test_unknown_state_is_bad_request(client: TestClient, users: dict[str, int], item_id: int) -> None:
    _book(client, users["booker"], item_id, START, START + DAY)

    r = client.get("/bookings", params={"state": "UNSUPPORTED_STATUS"}, headers=_as(users["booker"]))

    assert r.status_code == 400
    assert r.json()["detail"] == {"error": "Unknown state: UNSUPPORTED_STATUS"}


def test_empty_list_is_not_found(client: TestClient, users: dict[str, int]) -> None:
    assert client.get("/bookings", headers=_as(users["stranger"])).status_code == 404
    assert client.get("/bookings/owner", headers=_as(users["stranger"])).status_code == 404


@pytest.mark.parametrize("params", [{"from": -1}, {"size": 0}, {"size": "many"}])
def test_invalid_window_is_validation_error(client: TestClient, users: dict[str, int], params: dict) -> None:
    assert client.get("/bookings", params=params, headers=_as(users["booker"])).status_code == 422


def test_item_shows_last_and_next_booking_to_owner(
        client: TestClient, clock, db: Session, users: dict[str, int], item_id: int
) -> None:
    repo = BookingRepositoryImpl(db)
    last = repo.save(Booking(start=START - 20 * DAY, end=START - 19 * DAY, item_id=item_id,
                             booker_id=users["booker"], status=BookingStatus.APPROVED)).booking_id
    db.commit()
    upcoming = _book(client, users["booker"], item_id, START, START + DAY).json()["id"]
    client.patch(f"/bookings/{upcoming}", params={"approved": "true"}, headers=_as(users["owner"]))

    as_owner = client.get(f"/items/{item_id}", headers=_as(users["owner"])).json()
    as_booker = client.get(f"/items/{item_id}", headers=_as(users["booker"])).json()

    assert as_owner["last_booking"]["id"] == last
    assert as_owner["next_booking"]["id"] == upcoming
    assert as_booker["last_booking"] is None
    assert as_booker["next_booking"] is None


# -----------------------------
# Users: update and delete
# -----------------------------
def test_user_update_delete_and_list(client: TestClient, users: dict[str, int]) -> None:
    renamed = client.patch(f"/users/{users['stranger']}", json={"name": "Samuel"})
    taken = client.patch(f"/users/{users['stranger']}", json={"email": "olga@example.com"})
    missing = client.patch("/users/999", json={"name": "Nobody"})

    assert renamed.status_code == 200
    assert renamed.json() == {"id": users["stranger"], "name": "Samuel", "email": "sam@example.com"}
    assert taken.status_code == 409
    assert missing.status_code == 404

    assert client.delete(f"/users/{users['stranger']}").status_code == 204
    assert client.delete(f"/users/{users['stranger']}").status_code == 404
    assert [u["id"] for u in client.get("/users").json()] == [users["owner"], users["booker"]]


def test_deleting_an_item_owner_is_bad_request(client: TestClient, users: dict[str, int], item_id: int) -> None:
    r = client.delete(f"/users/{users['owner']}")

    assert r.status_code == 400
    assert client.get(f"/users/{users['owner']}").status_code == 200


# -----------------------------
# Comments, owner items and search
# -----------------------------
def test_comment_after_approved_booking_has_started(
        client: TestClient, clock, users: dict[str, int], item_id: int
) -> None:
    booking_id = _book(client, users["booker"], item_id, START, START + 2 * DAY).json()["id"]

    def comment(user: str):
        return client.post(f"/items/{item_id}/comment", json={"text": "Paddles were great"}, headers=_as(users[user]))

    assert comment("booker").status_code == 400  # still WAITING
    client.patch(f"/bookings/{booking_id}", params={"approved": "true"}, headers=_as(users["owner"]))
    assert comment("booker").status_code == 400  # not started

    clock.set(START + DAY)
    created = comment("booker")
    stranger = comment("stranger")

    assert created.status_code == 201, created.text
    assert created.json()["author_name"] == "Boris"
    assert datetime.fromisoformat(created.json()["created"]) == START + DAY
    assert stranger.status_code == 400
    assert "comment" in stranger.json()["detail"]

    item = client.get(f"/items/{item_id}", headers=_as(users["stranger"])).json()
    assert [c["text"] for c in item["comments"]] == ["Paddles were great"]


@pytest.mark.parametrize("text", ["", "   ", "x" * 2001])
def test_invalid_comment_text_is_validation_error(client: TestClient, users: dict[str, int], item_id: int,
                                                  text: str) -> None:
    r = client.post(f"/items/{item_id}/comment", json={"text": text}, headers=_as(users["booker"]))

    assert r.status_code == 422


def test_owner_items_list(client: TestClient, clock, users: dict[str, int], item_id: int) -> None:
    second = client.post(
        "/items",
        json={"name": "Life jacket", "description": "adult size", "available": True},
        headers=_as(users["owner"]),
    ).json()["id"]
    booking_id = _book(client, users["booker"], item_id, START, START + DAY).json()["id"]
    client.patch(f"/bookings/{booking_id}", params={"approved": "true"}, headers=_as(users["owner"]))

    mine = client.get("/items", headers=_as(users["owner"]))
    paged = client.get("/items", params={"from": 1, "size": 1}, headers=_as(users["owner"]))
    none = client.get("/items", headers=_as(users["stranger"]))

    assert mine.status_code == 200
    assert [i["id"] for i in mine.json()] == [item_id, second]
    assert mine.json()[0]["next_booking"]["id"] == booking_id
    assert [i["id"] for i in paged.json()] == [second]
    assert none.status_code == 200
    assert none.json() == []


def test_search_finds_available_items(client: TestClient, users: dict[str, int], item_id: int) -> None:
    hidden = client.post(
        "/items",
        json={"name": "Canoe trailer", "description": "fits one canoe", "available": False},
        headers=_as(users["owner"]),
    ).json()["id"]

    found = client.get("/items/search", params={"text": "CANOE"}, headers=_as(users["stranger"]))
    by_description = client.get("/items/search", params={"text": "paddles"}, headers=_as(users["stranger"]))
    blank = client.get("/items/search", params={"text": ""}, headers=_as(users["stranger"]))

    assert found.status_code == 200
    assert [i["id"] for i in found.json()] == [item_id]
    assert hidden not in [i["id"] for i in found.json()]
    assert [i["id"] for i in by_description.json()] == [item_id]
    assert blank.json() == []
