"""Shortcode syntax: ``[ksdate format="Y/m/d" offset="-1y" diff="1999"]``.

Attribute parsing follows the usual shortcode grammar: ``name="value"``,
``name='value'`` or a bare ``name=value``, names case-insensitive, unknown
names ignored. ``[[ksdate]]`` escapes a shortcode and yields the literal
``[ksdate]``.

:func:`build_shortcode` is the inverse used by the preview: feeding its
output back through :func:`parse_shortcode_attrs` returns the same values.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from pydantic import BaseModel

SHORTCODE_TAG = "ksdate"

SHORTCODE_PATTERN: re.Pattern[str] = re.compile(
    r"\[(\[?)" + SHORTCODE_TAG + r"(?![\w-])([^\]]*?)/?\](\]?)"
)

_ATTR_PATTERN: re.Pattern[str] = re.compile(
    r'([\w-]+)\s*=\s*"([^"]*)"(?:\s|$)'
    r"|([\w-]+)\s*=\s*'([^']*)'(?:\s|$)"
    r"|([\w-]+)\s*=\s*([^\s'\"]+)(?:\s|$)"
)
_TAG_PATTERN = re.compile(r"<[^>]*>")
_SPACE_PATTERN = re.compile(r"\s+")


class ShortcodeAttrs(BaseModel):
    """Attributes of one invocation. ``format`` is None when not given."""

    model_config = {"frozen": True}

    format: str | None = None
    offset: str = ""
    diff: str = ""


class Shortcode(BaseModel):
    """One shortcode occurrence inside a larger text."""

    model_config = {"frozen": True}

    raw: str
    start: int
    end: int
    attrs: ShortcodeAttrs
    escaped: bool = False


def sanitize_attr(value: str) -> str:
    """Strip markup and collapse whitespace in an attribute value."""
    value = _TAG_PATTERN.sub("", value)
    return _SPACE_PATTERN.sub(" ", value).strip()


def parse_shortcode_attrs(text: str) -> ShortcodeAttrs:
    """Parse the attribute part of a shortcode (or a whole ``[ksdate …]``)."""
    match = SHORTCODE_PATTERN.fullmatch(text.strip())
    if match is not None:
        text = match.group(2)
    text = text.replace("\u00a0", " ").replace("\u200b", " ")

    values: dict[str, str] = {}
    for attr in _ATTR_PATTERN.finditer(text):
        if attr.group(1) is not None:
            name, value = attr.group(1), attr.group(2)
        elif attr.group(3) is not None:
            name, value = attr.group(3), attr.group(4)
        else:
            name, value = attr.group(5), attr.group(6)
        values[name.lower()] = sanitize_attr(value)

    return ShortcodeAttrs(
        format=values.get("format"),
        offset=values.get("offset", ""),
        diff=values.get("diff", ""),
    )


def find_shortcodes(text: str) -> list[Shortcode]:
    """Locate every ``[ksdate …]`` in *text*, in order."""
    found: list[Shortcode] = []
    for match in SHORTCODE_PATTERN.finditer(text):
        found.append(
            Shortcode(
                raw=match.group(0),
                start=match.start(),
                end=match.end(),
                attrs=parse_shortcode_attrs(match.group(2)),
                escaped=bool(match.group(1)) and bool(match.group(3)),
            )
        )
    return found


def expand_shortcodes(text: str, render: Callable[[ShortcodeAttrs], str]) -> str:
    """Replace each shortcode in *text* with ``render(attrs)``."""

    def _replace(match: re.Match[str]) -> str:
        if match.group(1) and match.group(3):
            return match.group(0)[1:-1]
        rendered = render(parse_shortcode_attrs(match.group(2)))
        # A lone leading "[" or trailing "]" belongs to the surrounding text.
        return match.group(1) + rendered + match.group(3)

    return SHORTCODE_PATTERN.sub(_replace, text)


def _quote(name: str, value: str) -> str:
    if "]" in value:
        msg = f"{name} value cannot contain ']': {value!r}"
        raise ValueError(msg)
    if '"' not in value:
        return f'{name}="{value}"'
    if "'" not in value:
        return f"{name}='{value}'"
    msg = f"{name} value cannot contain both quote characters: {value!r}"
    raise ValueError(msg)


def build_shortcode(
    format: str | None = None,
    offset: str = "",
    diff: str = "",
    *,
    default_format: str,
) -> str:
    """Build the shortcode that reproduces a rendering.

    ``format`` is omitted when empty or equal to *default_format*;
    ``offset`` and ``diff`` are omitted when empty.

    Raises:
        ValueError: a value cannot be expressed inside a shortcode.
    """
    parts = [f"[{SHORTCODE_TAG}"]
    if format and format != default_format:
        parts.append(_quote("format", format))
    if offset:
        parts.append(_quote("offset", offset))
    if diff:
        parts.append(_quote("diff", diff))
    return " ".join(parts) + "]"
