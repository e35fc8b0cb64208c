"""Error taxonomy for the date core.

Two failure policies:

- Offsets are best-effort. :class:`OffsetParseError` and
  :class:`CalendarArithmeticError` raised while shifting are caught inside
  :func:`ksdate.domain.offsets.resolve_offset`, which then returns the
  unshifted reference instant.
- Diff targets are strict. :class:`DiffParseError` propagates to the host,
  which must render nothing rather than a partial string.
"""

from __future__ import annotations


class DateError(Exception):
    """Base class for every error raised by the date core."""


class OffsetParseError(DateError, ValueError):
    """Offset token does not match ``[+-]?<digits><y|m|w|d>``."""


class DiffParseError(DateError, ValueError):
    """Diff target is not ``YYYY``, ``YYYY-MM`` or ``YYYY-MM-DD``."""

    def __init__(self, token: str) -> None:
        super().__init__("invalid date format")
        self.token = token


class CalendarArithmeticError(DateError, ArithmeticError):
    """Calendar shift left the representable date range."""
