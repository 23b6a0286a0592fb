from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (expected YYYY-MM-DD): {value!r}")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def require_period(year: int, month: int) -> None:
    if not 1 <= int(month) <= 12:
        raise ValidationError(f"Invalid month: {month}")
    if not 1900 <= int(year) <= 9999:
        raise ValidationError(f"Invalid year: {year}")


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of the month."""
    require_period(year, month)
    last_day = calendar.monthrange(int(year), int(month))[1]
    return date(int(year), int(month), 1), date(int(year), int(month), last_day)


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Every date in [start, end], inclusive."""
    cur = start
    while cur <= end:
        yield cur
        cur += timedelta(days=1)


def count_working_days(start: date, end: date) -> int:
    """Mon-Fri days in [start, end]. No holiday calendar."""
    return sum(1 for d in iter_dates(start, end) if d.weekday() < 5)


def inclusive_days(start: date, end: date) -> int:
    return (end - start).days + 1


def overlap_days(start: date, end: date, window_start: date, window_end: date) -> int:
    """Number of days of [start, end] falling inside [window_start, window_end], never negative."""
    days = (min(end, window_end) - max(start, window_start)).days + 1
    return max(days, 0)


def month_name(month: int) -> str:
    return calendar.month_name[int(month)]
