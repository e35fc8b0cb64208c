"""Command: show the effective configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ksdate.commands._base import KsCommand
from ksdate.services.result import ServiceResult

if TYPE_CHECKING:
    from ksdate.commands._context import AppContext


@click.command(
    "config",
    cls=KsCommand,
    examples="""\
  ksdate config
  ksdate --timezone Asia/Tokyo config
  ksdate --json config""",
)
@click.pass_obj
def config_cmd(app: AppContext) -> None:
    """Show the merged settings (flags, env vars, ksdate.toml, defaults)."""
    settings = app.settings
    preview = settings.preview.model_dump()
    if preview["secret"]:
        preview["secret"] = "********"
    app.emit(
        ServiceResult(
            ok=True,
            op="show_config",
            data={
                "config_path": str(settings.config_path) if settings.config_path else None,
                "date": settings.date.model_dump(),
                "preview": preview,
            },
        )
    )
