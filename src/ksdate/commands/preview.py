"""Command group: authorized previews with shortcode reconstruction."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ksdate.commands._base import KsGroup

if TYPE_CHECKING:
    from ksdate.commands._context import AppContext

_PREVIEW_EXAMPLES = """\
  ksdate preview nonce
  ksdate preview run --nonce 1761350400-0123abcd --format "Y/m/d" --offset -6m
  ksdate -q preview run --nonce "$(ksdate -q preview nonce)" --diff 2030 --format 年"""


@click.group(cls=KsGroup, examples=_PREVIEW_EXAMPLES)
@click.pass_obj
def preview(app: AppContext) -> None:
    """Preview renderings and get the shortcode that reproduces them."""


@preview.command(
    examples="""\
  ksdate preview nonce
  ksdate -q preview nonce"""
)
@click.pass_obj
def nonce(app: AppContext) -> None:
    """Issue a nonce authorizing preview requests."""
    app.emit(app.preview().issue_nonce())


@preview.command(
    examples="""\
  ksdate preview run --nonce TOKEN
  ksdate preview run --nonce TOKEN --format "Y-m-d H:i:s"
  ksdate preview run --nonce TOKEN --format "Y年" --offset -1y
  ksdate preview run --nonce TOKEN --diff 1999-01 --format ヶ月"""
)
@click.option("--nonce", "token", required=True, help="Nonce from 'ksdate preview nonce'.")
@click.option("--format", "fmt", default=None, help="PHP-style date format (default from config).")
@click.option("--offset", default="", help="Relative offset such as -1y, +7d.")
@click.option("--diff", default="", help="Target date (YYYY, YYYY-MM, YYYY-MM-DD).")
@click.pass_obj
def run(app: AppContext, token: str, fmt: str | None, offset: str, diff: str) -> None:
    """Render a preview and print the matching shortcode."""
    app.emit(app.preview().preview(fmt, offset, diff, nonce=token))
