"""Unit hints — picking a diff granularity and suffix from a format string.

Detection is plain substring matching in a fixed priority order, so any
format containing ``月`` reads as a month request. :class:`UnitMatcher` is
the seam for a stricter matcher.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel

from ksdate.domain.types import Granularity


class UnitHint(BaseModel):
    """Granularity override plus the suffix appended to the number."""

    model_config = {"frozen": True}

    granularity: Granularity
    suffix: str


class UnitMarker(BaseModel):
    """Surface forms that all select the same granularity and suffix."""

    model_config = {"frozen": True}

    forms: tuple[str, ...]
    hint: UnitHint


class UnitMatcher(ABC):
    """Picks a unit hint from a format string."""

    @abstractmethod
    def match(self, format_hint: str) -> UnitHint | None:
        """Return the hint selected by *format_hint*, or None to keep the target's shape."""


DEFAULT_MARKERS: tuple[UnitMarker, ...] = (
    UnitMarker(forms=("年",), hint=UnitHint(granularity=Granularity.YEARS, suffix="年")),
    UnitMarker(
        forms=("ヶ月", "月"),
        hint=UnitHint(granularity=Granularity.MONTHS, suffix="ヶ月"),
    ),
    UnitMarker(forms=("日",), hint=UnitHint(granularity=Granularity.DAYS, suffix="日")),
)


class SubstringUnitMatcher(UnitMatcher):
    """First marker (in priority order) with a form inside the format wins."""

    def __init__(self, markers: tuple[UnitMarker, ...] = DEFAULT_MARKERS) -> None:
        self._markers = markers

    def match(self, format_hint: str) -> UnitHint | None:
        if not format_hint:
            return None
        for marker in self._markers:
            if any(form in format_hint for form in marker.forms):
                return marker.hint
        return None


DEFAULT_MATCHER = SubstringUnitMatcher()
