"""Command: expand [ksdate] shortcodes inside a text."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from ksdate.commands._base import KsCommand

if TYPE_CHECKING:
    from ksdate.commands._context import AppContext


@click.command(
    cls=KsCommand,
    examples="""\
  ksdate expand post.txt
  echo '© [ksdate format="Y"] Example Inc.' | ksdate expand
  ksdate expand page.html --html
  ksdate --json expand post.txt""",
)
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--html", "escape_html", is_flag=True, help="HTML-escape rendered values.")
@click.pass_obj
def expand(app: AppContext, source: TextIO, escape_html: bool) -> None:
    """Replace every [ksdate ...] shortcode in SOURCE (default: stdin)."""
    text = source.read()
    app.emit(app.shortcodes().expand(text, escape_html=escape_html))
