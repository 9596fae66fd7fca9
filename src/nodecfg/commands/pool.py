"""Command: resolve a p2pool config."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nodecfg.commands._base import NodecfgCommand

if TYPE_CHECKING:
    from nodecfg.commands._context import AppContext


@click.command(
    cls=NodecfgCommand,
    examples="""\
  nodecfg pool config.toml
  P2POOL_STRATUM_PORT=4444 nodecfg pool config.toml
  nodecfg -q pool config.toml | grep ^stratum.""",
)
@click.argument("path", type=click.Path(dir_okay=False))
@click.pass_obj
def pool(app: AppContext, path: str) -> None:
    """Resolve a p2pool TOML file with P2POOL_* environment overrides."""
    from nodecfg.services.resolve import ResolveService

    svc = ResolveService(pool_env_prefix=app.settings.resolve.pool_env_prefix)
    app.emit(svc.resolve_pool(path))
