"""Subcommand modules for ksdate.

Provides register_commands() which uses deferred imports to keep
``ksdate --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the command group and standalone commands on the root CLI group."""
    # --- Groups ---
    from ksdate.commands.preview import preview

    cli.add_command(preview)

    # --- Standalone commands ---
    from ksdate.commands.config_cmd import config_cmd
    from ksdate.commands.expand import expand
    from ksdate.commands.render import render

    cli.add_command(render)
    cli.add_command(expand)
    cli.add_command(config_cmd)
