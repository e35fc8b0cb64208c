"""BaseService — shared foundation for ksdate services.

Every service receives the frozen settings and an optional clock. The clock
is the only source of "now"; each operation reads it once, so all
shortcodes handled in one call agree on the reference instant.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Any

from ksdate.domain.dates import reference_instant

if TYPE_CHECKING:
    from ksdate.config.settings import KsdateSettings

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    *clock* returns the current moment; naive values are read as wall-clock
    time in the configured timezone. Without a clock the system time is used.

    Usage::

        class ShortcodeService(BaseService):
            def render(self, ...) -> ServiceResult:
                reference = self._reference()
                ...
    """

    def __init__(
        self,
        settings: KsdateSettings,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._settings = settings
        self._clock = clock

    def _reference(self) -> datetime:
        """Resolve the reference instant for one operation."""
        now = self._clock() if self._clock is not None else None
        reference = reference_instant(self._settings.tz, now)
        logger.debug("Reference instant %s", reference.isoformat())
        return reference

    def _meta(self, reference: datetime) -> dict[str, Any]:
        return {"reference": reference.isoformat(), "timezone": self._settings.date.timezone}
