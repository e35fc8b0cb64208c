"""ShortcodeService — the host side of ``[ksdate]``.

Resolves "now" once per call, routes each invocation to the diff or the
offset path, and renders shifted instants through a date renderer.

INVARIANT: an invalid diff target renders as an empty string, never as a
partial value. The failure is reported as a warning only.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Any

from ksdate.domain.diff import calculate_diff
from ksdate.domain.errors import DiffParseError
from ksdate.domain.offsets import resolve_offset
from ksdate.domain.shortcode import (
    ShortcodeAttrs,
    expand_shortcodes,
    find_shortcodes,
    sanitize_attr,
)
from ksdate.infrastructure.php_format import render_php_date
from ksdate.services.base import BaseService
from ksdate.services.result import ServiceResult

if TYPE_CHECKING:
    from ksdate.config.settings import KsdateSettings

logger = logging.getLogger(__name__)

DateRenderer = Callable[[str, datetime], str]


class ShortcodeService(BaseService):
    """Render single invocations or expand every shortcode in a text."""

    def __init__(
        self,
        settings: KsdateSettings,
        clock: Callable[[], datetime] | None = None,
        renderer: DateRenderer = render_php_date,
    ) -> None:
        super().__init__(settings, clock)
        self._renderer = renderer

    def render(
        self,
        format: str | None = None,
        offset: str = "",
        diff: str = "",
    ) -> ServiceResult:
        """Render one invocation from its raw attribute values."""
        attrs = ShortcodeAttrs(
            format=sanitize_attr(format) if format is not None else None,
            offset=sanitize_attr(offset),
            diff=sanitize_attr(diff),
        )
        reference = self._reference()
        warnings: list[str] = []
        data = self.render_attrs(reference, attrs, warnings)
        return ServiceResult(
            ok=True,
            op="render",
            data=data,
            warnings=warnings,
            meta=self._meta(reference),
        )

    def expand(self, text: str, *, escape_html: bool = False) -> ServiceResult:
        """Replace every ``[ksdate …]`` in *text* with its rendering.

        All invocations share one reference instant. With *escape_html* the
        rendered values are HTML-escaped; the surrounding text is untouched.
        """
        reference = self._reference()
        warnings: list[str] = []

        def _render(attrs: ShortcodeAttrs) -> str:
            output: str = self.render_attrs(reference, attrs, warnings)["output"]
            return html.escape(output) if escape_html else output

        expanded = expand_shortcodes(text, _render)
        count = sum(1 for shortcode in find_shortcodes(text) if not shortcode.escaped)
        return ServiceResult(
            ok=True,
            op="expand",
            data={"output": expanded, "count": count},
            warnings=warnings,
            meta=self._meta(reference),
        )

    def render_attrs(
        self,
        reference: datetime,
        attrs: ShortcodeAttrs,
        warnings: list[str],
    ) -> dict[str, Any]:
        """Render sanitized *attrs* against *reference*.

        The diff path reads only an explicitly given format as its unit
        hint; the configured default is a date layout, not a unit request.
        """
        if attrs.diff:
            try:
                result = calculate_diff(reference, attrs.diff, attrs.format or "")
            except DiffParseError:
                logger.info("Invalid diff target %r; rendering nothing", attrs.diff)
                warnings.append(f"invalid date format: diff={attrs.diff!r}")
                return {"output": "", "mode": "diff", "diff": attrs.diff, "granularity": None}
            return {
                "output": result.render(),
                "mode": "diff",
                "diff": attrs.diff,
                "granularity": str(result.granularity),
            }

        fmt = attrs.format or self._settings.date.default_format
        shifted = resolve_offset(reference, attrs.offset)
        return {
            "output": self._renderer(fmt, shifted),
            "mode": "date",
            "format": fmt,
            "offset": attrs.offset,
            "shifted": shifted != reference,
            "instant": shifted.isoformat(),
        }
