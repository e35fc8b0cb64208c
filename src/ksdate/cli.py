"""Root CLI group for ksdate with global flags and command registration."""

from __future__ import annotations

from datetime import datetime

import click
from pydantic import ValidationError

from ksdate import __version__
from ksdate.commands import register_commands
from ksdate.commands._context import AppContext
from ksdate.config.settings import KsdateSettings


def _parse_now(_ctx: click.Context, _param: click.Parameter, value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        msg = f"{value!r} is not an ISO 8601 date or datetime"
        raise click.BadParameter(msg) from exc


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="ksdate")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--timezone", default=None, help="Override the configured timezone.")
@click.option(
    "--now",
    default=None,
    callback=_parse_now,
    help="Pin the reference instant (ISO 8601; naive values use the configured timezone).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    timezone: str | None,
    now: datetime | None,
) -> None:
    """ksdate — dynamic dates and date differences for [ksdate] shortcodes."""
    try:
        settings = KsdateSettings.from_cli(
            config_path=config_path,
            timezone=timezone,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
        )
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc
    ctx.obj = AppContext(settings, now=now)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
