from __future__ import annotations

import calendar
from datetime import date, datetime, timezone
from typing import Optional, Union

DateLike = Union[date, datetime, str]


def today() -> date:
    return date.today()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_datetime(value: DateLike) -> datetime:
    """
    Normalise a date, datetime or ISO string to a naive UTC datetime.
    Plain dates are taken at midnight.
    """
    if isinstance(value, str):
        # fromisoformat only learned the Z suffix in 3.11
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        value = datetime.fromisoformat(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    return datetime(value.year, value.month, value.day)


def to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return to_datetime(value).date()
    if isinstance(value, date):
        return value
    return to_datetime(value).date()


def to_iso(value: DateLike) -> str:
    """ISO-8601 instant in UTC, e.g. 2025-01-01T00:00:00+00:00."""
    return to_datetime(value).replace(tzinfo=timezone.utc).isoformat()


def calendar_age(birth_date: DateLike, on: Optional[DateLike] = None) -> int:
    """
    Age as a plain calendar-year difference.

    Birthdays later in the year are deliberately ignored: someone born in
    December is a full year older on the 1st of January.
    """
    on_date = to_date(on) if on is not None else today()
    return on_date.year - to_date(birth_date).year


def _add_years(value: datetime, years: int) -> datetime:
    year = value.year + years
    # 29 Feb rolls back to 28 Feb in non-leap years
    day = min(value.day, calendar.monthrange(year, value.month)[1])
    return value.replace(year=year, day=day)


def years_between(start: DateLike, end: DateLike) -> float:
    """
    Real-valued years from start to end.

    Whole years are counted anniversary to anniversary; the remainder is the
    fraction of the following anniversary year that has elapsed.
    """
    start_dt = to_datetime(start)
    end_dt = to_datetime(end)

    whole = end_dt.year - start_dt.year
    anchor = _add_years(start_dt, whole)
    if anchor > end_dt:
        whole -= 1
        anchor = _add_years(start_dt, whole)

    following = _add_years(start_dt, whole + 1)
    span = (following - anchor).total_seconds()
    return whole + (end_dt - anchor).total_seconds() / span
