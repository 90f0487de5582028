"""Clock helpers shared by the stores and the API."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], int]


def now_millis() -> int:
    """Return the current epoch time in milliseconds."""
    return time.time_ns() // 1_000_000


def iso_from_millis(millis: int) -> str:
    """Format epoch milliseconds as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""

    moment = datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{millis % 1000:03d}Z"


def iso_now() -> str:
    return iso_from_millis(now_millis())


__all__ = ["Clock", "iso_from_millis", "iso_now", "now_millis"]
