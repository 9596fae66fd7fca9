"""Command: list candidate config files."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nodecfg.commands._base import NodecfgCommand

if TYPE_CHECKING:
    from nodecfg.commands._context import AppContext


@click.command(
    cls=NodecfgCommand,
    examples="""\
  nodecfg ls
  nodecfg ls ~/.bitcoin
  nodecfg ls /etc -s p2pool -s config.toml
  nodecfg -q ls /etc/p2pool""",
)
@click.argument("directory", required=False, type=click.Path())
@click.option(
    "-s",
    "--select",
    "select",
    multiple=True,
    metavar="NAME",
    help="Enter NAME before listing (repeatable; '..' goes up).",
)
@click.pass_obj
def ls(app: AppContext, directory: str | None, select: tuple[str, ...]) -> None:
    """List a directory: parent entry, then directories, then files."""
    from nodecfg.services.browse import BrowseService

    app.emit(BrowseService().list_directory(directory, select))
