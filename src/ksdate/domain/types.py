"""Calendar unit enums shared by the offset and diff paths."""

from __future__ import annotations

from enum import StrEnum


class OffsetUnit(StrEnum):
    """Calendar unit of an offset token, keyed by its letter."""

    YEARS = "y"
    MONTHS = "m"
    WEEKS = "w"
    DAYS = "d"


class Granularity(StrEnum):
    """Unit a date difference is expressed in."""

    YEARS = "years"
    MONTHS = "months"
    DAYS = "days"
