"""Time helpers for restaurant-local formatting."""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from orderdesk.core.config import settings


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_restaurant_local(value: datetime) -> datetime:
    """Convert an instant to the restaurant timezone.

    Naive values are taken to be UTC, matching how timestamps are stored.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(ZoneInfo(settings.restaurant_timezone))


def format_local_hhmm(value: datetime) -> str:
    return to_restaurant_local(value).strftime("%H:%M")


def sunday_based_weekday(value: datetime) -> int:
    """Weekday with 0=Sunday..6=Saturday, the convention used in stored schedules."""
    return value.isoweekday() % 7
