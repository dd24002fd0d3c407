from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Optional

from ..core.constants import MONTHS
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def to_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def parse_optional_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return parse_iso_date(value)


def parse_timestamp(value) -> Optional[datetime]:
    """Accept datetime objects or ISO strings coming back from the store."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_number(month_name: str) -> int:
    """'January' -> 1."""
    try:
        return MONTHS.index(month_name) + 1
    except ValueError:
        raise ValidationError(f"Invalid month: {month_name!r}")


def month_name(month: int) -> str:
    if not 1 <= int(month) <= 12:
        raise ValidationError(f"Invalid month: {month!r}")
    return MONTHS[int(month) - 1]


def month_bounds(month: int, year: int) -> tuple[str, str]:
    """First and last day of a month as ISO strings (inclusive range)."""
    month_name(month)
    last_day = calendar.monthrange(int(year), int(month))[1]
    return (
        to_iso_date(date(int(year), int(month), 1)),
        to_iso_date(date(int(year), int(month), last_day)),
    )


def months_back(today: date, count: int) -> str:
    """ISO date of the first day of the month `count - 1` months before `today`."""
    index = today.year * 12 + (today.month - 1) - (int(count) - 1)
    return to_iso_date(date(index // 12, index % 12 + 1, 1))
