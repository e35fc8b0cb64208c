"""Calendar arithmetic shared by the offset and diff paths.

Month-overflow rule: clamp to month end. Shifting by months or years keeps
the day-of-month when the target month has it, otherwise the last day of the
target month is used (Jan 31 + 1 month -> Feb 28/29, Feb 29 + 1 year ->
Feb 28). Whole-month differences use the same rule, so shifting the earlier
date forward by ``months_between(a, b)`` months never passes the later date.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import TypeVar
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil.relativedelta import relativedelta

from ksdate.domain.errors import CalendarArithmeticError

_D = TypeVar("_D", date, datetime)


def resolve_timezone(name: str) -> ZoneInfo:
    """Look up an IANA timezone, raising ``ValueError`` for unknown names."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        msg = f"Unknown timezone: {name!r}"
        raise ValueError(msg) from exc


def reference_instant(tz: tzinfo, now: datetime | None = None) -> datetime:
    """Resolve the reference instant for one call in *tz*.

    Naive *now* values are read as wall-clock time in *tz*; aware values
    are converted. Without *now* the current time is used.
    """
    if now is None:
        return datetime.now(tz)
    if now.tzinfo is None:
        return now.replace(tzinfo=tz)
    return now.astimezone(tz)


def add_months(moment: _D, months: int) -> _D:
    """Shift *moment* by *months* calendar months, clamping to month end."""
    try:
        return moment + relativedelta(months=months)
    except (OverflowError, ValueError) as exc:
        msg = f"Shifting {moment.isoformat()} by {months} months leaves the calendar range"
        raise CalendarArithmeticError(msg) from exc


def add_years(moment: _D, years: int) -> _D:
    return add_months(moment, years * 12)


def add_days(moment: _D, days: int) -> _D:
    """Shift the wall-clock date by *days*, keeping time of day and tzinfo."""
    try:
        return moment + timedelta(days=days)
    except OverflowError as exc:
        msg = f"Shifting {moment.isoformat()} by {days} days leaves the calendar range"
        raise CalendarArithmeticError(msg) from exc


def months_between(a: date, b: date) -> int:
    """Whole calendar months between *a* and *b*, regardless of order."""
    earlier, later = sorted((a, b))
    delta = relativedelta(later, earlier)
    months = delta.years * 12 + delta.months
    if months and add_months(earlier, months) > later:
        months -= 1
    return months


def years_between(a: date, b: date) -> int:
    """Whole years between *a* and *b*; a year counts once its anniversary is reached."""
    return months_between(a, b) // 12


def days_between(a: date, b: date) -> int:
    """Calendar days between *a* and *b*, regardless of order."""
    return abs((b - a).days)
