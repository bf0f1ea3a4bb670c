from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class User:
    name: str
    email: str
    user_id: int | None = None
