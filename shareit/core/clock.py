from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current instant as a naive UTC datetime, the form every stored instant uses."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


# The service-wide source of "now". Request validation and every use case read it
# through now(); tests replace it to pin time.
current: Clock = utc_now


def now() -> datetime:
    return current()
