"""Command: resolve a bitcoin.conf."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nodecfg.commands._base import NodecfgCommand
from nodecfg.domain.types import DAEMON_NETWORK_SCOPES

if TYPE_CHECKING:
    from nodecfg.commands._context import AppContext


@click.command(
    cls=NodecfgCommand,
    examples="""\
  nodecfg daemon ~/.bitcoin/bitcoin.conf
  nodecfg daemon bitcoin.conf --scope test --scope signet
  nodecfg -v daemon bitcoin.conf
  nodecfg --json daemon bitcoin.conf""",
)
@click.argument("path", type=click.Path(dir_okay=False))
@click.option(
    "--scope",
    "scopes",
    multiple=True,
    type=click.Choice(DAEMON_NETWORK_SCOPES),
    help="Network section to consult, in order. Repeatable.",
)
@click.pass_obj
def daemon(app: AppContext, path: str, scopes: tuple[str, ...]) -> None:
    """Resolve a bitcoin.conf against the known daemon keys.

    Without --scope the [resolve] daemon_scopes setting is used.
    """
    from nodecfg.services.resolve import ResolveService

    svc = ResolveService(daemon_scopes=scopes or app.settings.resolve.daemon_scopes)
    app.emit(svc.resolve_daemon(path))
