"""Subcommand modules for nodecfg.

Provides register_commands() which uses deferred imports to keep
``nodecfg --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from nodecfg.commands.daemon import daemon
    from nodecfg.commands.ls import ls
    from nodecfg.commands.pool import pool

    cli.add_command(daemon)
    cli.add_command(pool)
    cli.add_command(ls)
