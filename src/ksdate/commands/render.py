"""Command: render one dynamic date or date difference."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ksdate.commands._base import KsCommand

if TYPE_CHECKING:
    from ksdate.commands._context import AppContext


@click.command(
    cls=KsCommand,
    examples="""\
  ksdate render
  ksdate render --format "Y/m/d"
  ksdate render --format "Y年" --offset -1y
  ksdate render --format "Y年n月j日" --offset +14d
  ksdate render --diff 1999 --format 年
  ksdate render --diff 2020-04 --format ヶ月
  ksdate --now 2025-10-24 render --diff 2024-01-01 --format 日""",
)
@click.option("--format", "fmt", default=None, help="PHP-style date format (default from config).")
@click.option("--offset", default="", help="Relative offset such as -1y, -6m, +2w, +7d.")
@click.option("--diff", default="", help="Target date (YYYY, YYYY-MM, YYYY-MM-DD) to count to/from.")
@click.pass_obj
def render(app: AppContext, fmt: str | None, offset: str, diff: str) -> None:
    """Render a date, or the distance to a diff target.

    With --diff the offset is ignored and the format only selects the unit
    (年, ヶ月/月, 日). An invalid --diff prints nothing.
    """
    app.emit(app.shortcodes().render(fmt, offset, diff))
