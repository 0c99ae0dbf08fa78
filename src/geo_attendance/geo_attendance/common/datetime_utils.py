from __future__ import annotations

from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: str) -> time:
    """Parse HH:MM or HH:MM:SS into time."""
    parts = value.strip().split(":")
    seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
    return time(int(parts[0]), int(parts[1]), seconds)


def now_local(tz_name: str = "UTC") -> datetime:
    """Current wall-clock time in the reference timezone, as a naive datetime.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(ZoneInfo(tz_name)).replace(tzinfo=None)


def to_reference_time(moment: datetime, tz_name: str) -> datetime:
    """Convert ``moment`` to naive reference-timezone time.

    Naive datetimes are assumed to already be in the reference timezone.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(ZoneInfo(tz_name)).replace(tzinfo=None)


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600.0


def last_day_of_month(year: int, month: int) -> date:
    if month == 12:
        return date(year, 12, 31)
    return date(year, month + 1, 1) - timedelta(days=1)


def add_months(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
