"""PHP ``date()``-style format rendering.

Shortcode formats are written in the PHP date mini-language (``Y年m月d日``,
``F jS, Y``, ``Y-m-d H:i:s T``). Every ``date()`` letter except the Swatch
beat ``B`` and the expanded years ``X``/``x`` is interpreted; every other
character, including non-ASCII text, is copied verbatim. A backslash
escapes the next character.

Naive moments are treated as UTC for the timezone letters. Weekday and
month names are English; localized names are out of scope.
"""

from __future__ import annotations

import calendar
from collections.abc import Callable
from datetime import datetime, timedelta

_DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def _hour12(moment: datetime) -> int:
    return moment.hour % 12 or 12


def _ordinal_suffix(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def _utcoffset(moment: datetime) -> timedelta:
    return moment.utcoffset() or timedelta(0)


def _format_offset(moment: datetime, separator: str) -> str:
    minutes = int(_utcoffset(moment).total_seconds()) // 60
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}{separator}{minutes:02d}"


def _zone_identifier(moment: datetime) -> str:
    if moment.tzinfo is None:
        return "UTC"
    key = getattr(moment.tzinfo, "key", None)
    return key or moment.tzname() or _format_offset(moment, ":")


def _zone_abbreviation(moment: datetime) -> str:
    if moment.tzinfo is None:
        return "UTC"
    name = moment.tzname()
    # zoneinfo reports numeric abbreviations such as "+03" for zones without one
    if not name or name[0] in "+-":
        return _format_offset(moment, ":")
    return name


def _is_dst(moment: datetime) -> str:
    dst = moment.dst()
    return "1" if dst else "0"


TOKENS: dict[str, Callable[[datetime], str]] = {
    # Day
    "d": lambda m: f"{m.day:02d}",
    "D": lambda m: _DAY_NAMES[m.weekday()][:3],
    "j": lambda m: str(m.day),
    "l": lambda m: _DAY_NAMES[m.weekday()],
    "N": lambda m: str(m.isoweekday()),
    "S": lambda m: _ordinal_suffix(m.day),
    "w": lambda m: str(m.isoweekday() % 7),
    "z": lambda m: str(m.timetuple().tm_yday - 1),
    # Week
    "W": lambda m: f"{m.isocalendar()[1]:02d}",
    # Month
    "F": lambda m: _MONTH_NAMES[m.month - 1],
    "m": lambda m: f"{m.month:02d}",
    "M": lambda m: _MONTH_NAMES[m.month - 1][:3],
    "n": lambda m: str(m.month),
    "t": lambda m: str(calendar.monthrange(m.year, m.month)[1]),
    # Year
    "L": lambda m: "1" if calendar.isleap(m.year) else "0",
    "o": lambda m: str(m.isocalendar()[0]),
    "Y": lambda m: str(m.year),
    "y": lambda m: f"{m.year % 100:02d}",
    # Time
    "a": lambda m: "am" if m.hour < 12 else "pm",
    "A": lambda m: "AM" if m.hour < 12 else "PM",
    "g": lambda m: str(_hour12(m)),
    "G": lambda m: str(m.hour),
    "h": lambda m: f"{_hour12(m):02d}",
    "H": lambda m: f"{m.hour:02d}",
    "i": lambda m: f"{m.minute:02d}",
    "s": lambda m: f"{m.second:02d}",
    "u": lambda m: f"{m.microsecond:06d}",
    "v": lambda m: f"{m.microsecond // 1000:03d}",
    # Timezone
    "e": _zone_identifier,
    "I": _is_dst,
    "O": lambda m: _format_offset(m, ""),
    "P": lambda m: _format_offset(m, ":"),
    "p": lambda m: "Z" if not _utcoffset(m) else _format_offset(m, ":"),
    "T": _zone_abbreviation,
    "Z": lambda m: str(int(_utcoffset(m).total_seconds())),
    # Full date/time
    "c": lambda m: render_php_date(r"Y-m-d\TH:i:sP", m),
    "r": lambda m: render_php_date("D, d M Y H:i:s O", m),
    "U": lambda m: str(int(m.timestamp())),
}


def render_php_date(fmt: str, moment: datetime) -> str:
    """Render *moment* with a PHP ``date()`` format string.

    Examples:
        >>> render_php_date("Y年m月d日", datetime(2025, 10, 24))
        '2025年10月24日'
        >>> render_php_date("F jS, Y", datetime(2025, 10, 22))
        'October 22nd, 2025'
        >>> render_php_date(r"Y\\y n/j", datetime(2025, 1, 5))
        '2025y 1/5'
    """
    out: list[str] = []
    chars = iter(fmt)
    for char in chars:
        if char == "\\":
            out.append(next(chars, ""))
            continue
        token = TOKENS.get(char)
        out.append(token(moment) if token else char)
    return "".join(out)
