"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Holds the settings and the clock, builds services,
and centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

import click

from ksdate.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from ksdate.config.settings import KsdateSettings
    from ksdate.services.preview import PreviewService
    from ksdate.services.result import ServiceResult
    from ksdate.services.shortcode import ShortcodeService


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    *now* pins the reference instant for every service built here
    (``--now``); without it services read the system clock.
    """

    def __init__(self, settings: KsdateSettings, *, now: datetime | None = None) -> None:
        self.settings = settings
        self.now = now

        from ksdate.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def clock(self) -> Callable[[], datetime] | None:
        if self.now is None:
            return None
        pinned = self.now
        return lambda: pinned

    def shortcodes(self) -> ShortcodeService:
        from ksdate.services.shortcode import ShortcodeService

        return ShortcodeService(self.settings, self.clock)

    def preview(self) -> PreviewService:
        from ksdate.services.preview import PreviewService

        return PreviewService(self.settings, self.clock)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
