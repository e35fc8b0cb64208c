"""PreviewService — try a format/offset/diff and get the shortcode for it.

Preview requests must carry a nonce issued by :meth:`PreviewService.issue_nonce`
(signed with ``[preview] secret``, valid for ``[preview] nonce_ttl`` seconds).
Without a configured secret the preview is disabled.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from ksdate.domain.shortcode import ShortcodeAttrs, build_shortcode, sanitize_attr
from ksdate.services._helpers import sign_nonce, verify_nonce
from ksdate.services.base import BaseService
from ksdate.services.result import ServiceResult
from ksdate.services.shortcode import ShortcodeService

if TYPE_CHECKING:
    from ksdate.config.settings import KsdateSettings

logger = logging.getLogger(__name__)

PREVIEW_ACTION = "ksdate_preview"


class PreviewService(BaseService):
    """Authorized preview of a single rendering."""

    def __init__(
        self,
        settings: KsdateSettings,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(settings, clock)
        self._shortcodes = ShortcodeService(settings, clock)

    def issue_nonce(self) -> ServiceResult:
        """Issue a preview nonce valid for the configured lifetime."""
        op = "issue_nonce"
        secret = self._settings.preview.secret
        if not secret:
            return _disabled(op)

        reference = self._reference()
        expires = int(reference.timestamp()) + self._settings.preview.nonce_ttl
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "nonce": sign_nonce(secret, PREVIEW_ACTION, expires),
                "expires": datetime.fromtimestamp(expires, self._settings.tz).isoformat(),
            },
            meta=self._meta(reference),
        )

    def preview(
        self,
        format: str | None = None,
        offset: str = "",
        diff: str = "",
        *,
        nonce: str,
    ) -> ServiceResult:
        """Render one invocation and rebuild the shortcode that reproduces it."""
        op = "preview"
        secret = self._settings.preview.secret
        if not secret:
            return _disabled(op)

        reference = self._reference()
        if not verify_nonce(secret, PREVIEW_ACTION, nonce, int(reference.timestamp())):
            logger.info("Rejected preview request with invalid or expired nonce")
            return ServiceResult.failure(op, "UNAUTHORIZED", "Invalid or expired nonce")

        attrs = ShortcodeAttrs(
            format=sanitize_attr(format) if format is not None else None,
            offset=sanitize_attr(offset),
            diff=sanitize_attr(diff),
        )
        warnings: list[str] = []
        data = self._shortcodes.render_attrs(reference, attrs, warnings)
        if warnings:
            return ServiceResult.failure(
                op, "INVALID_DIFF", "invalid date format", diff=attrs.diff
            )

        try:
            shortcode = build_shortcode(
                attrs.format,
                attrs.offset,
                attrs.diff,
                default_format=self._settings.date.default_format,
            )
        except ValueError as exc:
            return ServiceResult.failure(op, "UNREPRESENTABLE", str(exc))

        return ServiceResult(
            ok=True,
            op=op,
            data={"result": data["output"], "shortcode": shortcode, "mode": data["mode"]},
            meta=self._meta(reference),
        )


def _disabled(op: str) -> ServiceResult:
    return ServiceResult.failure(
        op, "PREVIEW_DISABLED", "Preview is disabled: set [preview] secret in ksdate.toml"
    )
