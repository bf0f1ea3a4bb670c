from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class Comment:
    """
    Feedback on an item from a user who has booked it.
    """
    text: str
    item_id: int
    author_id: int
    created: datetime
    comment_id: int | None = None
    # Loaded from the author for display.
    author_name: str | None = None
