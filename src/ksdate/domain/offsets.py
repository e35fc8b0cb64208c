"""Relative offset tokens — ``-1y``, ``+3d``, ``6m``, ``-2w``.

Offsets are best-effort: :func:`resolve_offset` never raises. A malformed
token or a shift outside the calendar range leaves the reference instant
untouched, so the host always has a date to render.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime

from pydantic import BaseModel

from ksdate.domain.dates import add_days, add_months, add_years
from ksdate.domain.errors import CalendarArithmeticError, OffsetParseError
from ksdate.domain.types import OffsetUnit

logger = logging.getLogger(__name__)

OFFSET_PATTERN: re.Pattern[str] = re.compile(r"([+-]?[0-9]+)([ymwd])", re.IGNORECASE)


class OffsetSpec(BaseModel):
    """A signed number of calendar units."""

    model_config = {"frozen": True}

    magnitude: int
    unit: OffsetUnit


def parse_offset(token: str) -> OffsetSpec:
    """Parse an offset token.

    Examples:
        >>> parse_offset("-20y")
        OffsetSpec(magnitude=-20, unit=<OffsetUnit.YEARS: 'y'>)
        >>> parse_offset("+3D").unit
        <OffsetUnit.DAYS: 'd'>

    Raises:
        OffsetParseError: *token* is not ``[+-]?<digits><y|m|w|d>``.
    """
    match = OFFSET_PATTERN.fullmatch(token)
    if match is None:
        msg = f"Invalid offset token: {token!r}"
        raise OffsetParseError(msg)
    try:
        magnitude = int(match.group(1))
    except ValueError as exc:
        msg = f"Offset magnitude too long: {len(match.group(1))} characters"
        raise OffsetParseError(msg) from exc
    return OffsetSpec(magnitude=magnitude, unit=OffsetUnit(match.group(2).lower()))


def apply_offset(reference: datetime, spec: OffsetSpec) -> datetime:
    """Shift *reference* by *spec* using calendar arithmetic.

    Raises:
        CalendarArithmeticError: the shifted instant is not representable.
    """
    if spec.unit is OffsetUnit.YEARS:
        return add_years(reference, spec.magnitude)
    if spec.unit is OffsetUnit.MONTHS:
        return add_months(reference, spec.magnitude)
    if spec.unit is OffsetUnit.WEEKS:
        return add_days(reference, spec.magnitude * 7)
    return add_days(reference, spec.magnitude)


def resolve_offset(reference: datetime, token: str) -> datetime:
    """Apply *token* to *reference*, falling back to *reference* on any failure."""
    if not token:
        return reference
    try:
        spec = parse_offset(token)
    except OffsetParseError:
        logger.debug("Ignoring malformed offset %r", token)
        return reference
    try:
        return apply_offset(reference, spec)
    except CalendarArithmeticError:
        logger.debug("Offset %r out of range; using reference instant", token, exc_info=True)
        return reference
