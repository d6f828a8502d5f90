"""Utility functions for obsid."""

import re
from datetime import date, datetime, timedelta
from typing import Optional

from .date_formats import MONTH_NAMES, WEEKDAY_NAMES
from .exceptions import TimeframeError

_DURATION_RE = re.compile(r"(?:(\d+)h)?(?:(\d+)m)?")


def parse_timeframe(timeframe: str, now: Optional[datetime] = None) -> datetime:
    """Turn a timeframe like "2h", "30m", "1h30m", "today" or "3" into a start time.

    A bare number is a count of hours. "today" and "yesterday" start at
    midnight.
    """
    now = now or datetime.now()
    value = timeframe.strip().lower()
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

    if value == "today":
        return midnight
    if value == "yesterday":
        return midnight - timedelta(days=1)

    if value.isdigit():
        return now - timedelta(hours=int(value))

    match = _DURATION_RE.fullmatch(value)
    if not value or not match:
        raise TimeframeError(
            f"Unsupported timeframe: {timeframe!r}. Use e.g. 30m, 2h, 1h30m, today."
        )
    hours, minutes = match.groups()
    return now - timedelta(hours=int(hours or 0), minutes=int(minutes or 0))


def _clock(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d}{suffix}"


def format_time_range(since: datetime, now: Optional[datetime] = None) -> str:
    """Human-readable span between ``since`` and now."""
    now = now or datetime.now()
    elapsed = now - since

    if elapsed < timedelta(hours=1):
        minutes = int(elapsed.total_seconds() // 60)
        return f"{_clock(since)} - {_clock(now)} ({minutes}m)"

    if since.date() == now.date():
        return f"{_clock(since)} - {_clock(now)}"

    return (
        f"{MONTH_NAMES[since.month - 1][:3]} {since.day} {_clock(since)} - "
        f"{MONTH_NAMES[now.month - 1][:3]} {now.day} {_clock(now)}"
    )


def format_long_date(day: date) -> str:
    """Format a date like "Saturday, July 19, 2025"."""
    return f"{WEEKDAY_NAMES[day.weekday()]}, {MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"


def project_tag(name: str) -> str:
    """Convert a project name to an Obsidian tag body (without the '#')."""
    text = name.lower()
    text = re.sub(r"[-. ]", "_", text)
    return re.sub(r"[^a-z0-9_]", "", text)
