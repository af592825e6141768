from __future__ import annotations

from datetime import date, datetime


def now_local() -> datetime:
    """Current local time; PersonnelManager takes it as its default clock."""
    return datetime.now()


def today_local() -> date:
    return now_local().date()


def inclusive_days(start: date, end: date) -> int:
    """Number of calendar days in [start, end], both ends counted."""
    return (end - start).days + 1
