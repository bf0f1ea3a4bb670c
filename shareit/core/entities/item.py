from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Item:
    name: str
    description: str
    available: bool
    owner_id: int
    item_id: int | None = None

    def is_owned_by(self, user_id: int) -> bool:
        return self.owner_id == user_id
