"""Date manipulation utilities"""

from datetime import date, datetime, timezone
from typing import List, Tuple, Union

DateLike = Union[date, datetime, str]


def as_date(value: DateLike) -> date:
    """
    Normalize a date, datetime or ISO string to a calendar date.

    Time-of-day is dropped so comparisons are date-only.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if "T" in text or " " in text:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return date.fromisoformat(text)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    """Return (year, month) moved by offset calendar months"""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def trailing_months(today: date, count: int) -> List[Tuple[int, int]]:
    """The `count` calendar months ending with today's month, oldest first"""
    return [shift_month(today.year, today.month, -i) for i in range(count - 1, -1, -1)]


_MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def month_label(month: int) -> str:
    """Short English month name, e.g. 3 -> "Mar" (locale independent)"""
    return _MONTH_LABELS[month - 1]
