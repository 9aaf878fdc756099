"""Time helpers: UTC timestamps for logs, zone-aware clocks for summaries."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Callable
from zoneinfo import ZoneInfo

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return timezone-aware current UTC datetime."""
    return datetime.now(UTC)


def zone_clock(tz_name: str) -> Clock:
    """Return a clock that reads the current time in ``tz_name``."""
    tz = ZoneInfo(tz_name)

    def _now() -> datetime:
        return datetime.now(tz)

    return _now


def fixed_clock(moment: datetime) -> Clock:
    """Return a clock that always reports ``moment``."""
    return lambda: moment


def format_short_date_ja(moment: datetime) -> str:
    """Format a date the way ``toLocaleDateString('ja-JP')`` does: 2024/3/7."""
    return f"{moment.year}/{moment.month}/{moment.day}"
