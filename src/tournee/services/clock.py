"""Wall clock for the service boundary."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from ..config import settings


def local_now() -> datetime:
    """Current time in the configured timezone."""

    return datetime.now(ZoneInfo(settings.timezone))


def resolve_now(value: Optional[datetime] = None) -> datetime:
    """Wall clock for a request: the injected value read in local time, else the current time.

    Aware values are converted to the configured timezone so hour-of-day
    lookups use local hours. Naive values are kept as given.
    """

    if value is None:
        return local_now()
    if value.tzinfo is None:
        return value
    return value.astimezone(ZoneInfo(settings.timezone))
