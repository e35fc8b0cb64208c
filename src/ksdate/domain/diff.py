"""Date differences — "years since 1999", "days until 2030-12-31".

A diff target is a partial date whose shape implies the granularity:

- ``YYYY`` -> January 1st, counted in years
- ``YYYY-MM`` -> the first of the month, counted in months
- ``YYYY-MM-DD`` -> that day, counted in days

A unit marker in the format hint overrides the granularity and adds a
suffix. The magnitude is always the absolute distance; whether the target
lies in the past or the future is not reported.

Unlike offsets, a malformed target is a hard failure: :class:`DiffParseError`
propagates so the host can render nothing instead of a wrong number.
"""

from __future__ import annotations

import re
from datetime import date, datetime, tzinfo

from pydantic import BaseModel

from ksdate.domain.dates import days_between, months_between, years_between
from ksdate.domain.errors import DiffParseError
from ksdate.domain.types import Granularity
from ksdate.domain.units import DEFAULT_MATCHER, UnitMatcher

# Checked in order; first match wins.
TARGET_PATTERNS: tuple[tuple[re.Pattern[str], Granularity], ...] = (
    (re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})"), Granularity.DAYS),
    (re.compile(r"([0-9]{4})-([0-9]{2})"), Granularity.MONTHS),
    (re.compile(r"([0-9]{4})"), Granularity.YEARS),
)


class DiffTarget(BaseModel):
    """Resolved diff target: midnight of the target day plus implied granularity."""

    model_config = {"frozen": True}

    instant: datetime
    granularity: Granularity

    @property
    def day(self) -> date:
        return self.instant.date()


class DiffResult(BaseModel):
    """Non-negative magnitude with an optional unit suffix."""

    model_config = {"frozen": True}

    magnitude: int
    granularity: Granularity
    suffix: str = ""

    def render(self) -> str:
        return f"{self.magnitude}{self.suffix}"


def parse_diff_target(token: str, tz: tzinfo | None = None) -> DiffTarget:
    """Resolve *token* to a :class:`DiffTarget` at midnight in *tz*.

    Raises:
        DiffParseError: *token* has none of the accepted shapes, or names a
            day that does not exist (``1999-13``, ``2023-02-30``, ``0000``).
    """
    for pattern, granularity in TARGET_PATTERNS:
        match = pattern.fullmatch(token)
        if match is None:
            continue
        parts = [int(group) for group in match.groups()]
        year, month, day = (parts + [1, 1])[:3]
        try:
            instant = datetime(year, month, day, tzinfo=tz)
        except ValueError as exc:
            raise DiffParseError(token) from exc
        return DiffTarget(instant=instant, granularity=granularity)
    raise DiffParseError(token)


def measure(reference: date, target: date, granularity: Granularity) -> int:
    """Absolute calendar distance between two dates in *granularity*."""
    if granularity is Granularity.YEARS:
        return years_between(reference, target)
    if granularity is Granularity.MONTHS:
        return months_between(reference, target)
    return days_between(reference, target)


def calculate_diff(
    reference: datetime,
    token: str,
    format_hint: str = "",
    *,
    matcher: UnitMatcher = DEFAULT_MATCHER,
) -> DiffResult:
    """Structured form of :func:`compute_diff`."""
    target = parse_diff_target(token, reference.tzinfo)
    granularity = target.granularity
    suffix = ""
    hint = matcher.match(format_hint)
    if hint is not None:
        granularity = hint.granularity
        suffix = hint.suffix
    magnitude = measure(reference.date(), target.day, granularity)
    return DiffResult(magnitude=magnitude, granularity=granularity, suffix=suffix)


def compute_diff(
    reference: datetime,
    token: str,
    format_hint: str = "",
    *,
    matcher: UnitMatcher = DEFAULT_MATCHER,
) -> str:
    """Distance between *reference* and the diff target as ``"<n><suffix>"``.

    Examples (reference 2025-10-24):
        ``compute_diff(ref, "2030", "年")`` -> ``"4年"``
        ``compute_diff(ref, "2024-01-01")`` -> ``"662"``

    Raises:
        DiffParseError: *token* is not a valid diff target.
    """
    return calculate_diff(reference, token, format_hint, matcher=matcher).render()
