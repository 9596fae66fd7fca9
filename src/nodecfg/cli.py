"""Root CLI group for nodecfg with global flags and command registration."""

from __future__ import annotations

import click

from nodecfg import __version__
from nodecfg.commands import register_commands
from nodecfg.commands._base import NodecfgGroup
from nodecfg.commands._context import AppContext
from nodecfg.config.settings import NodecfgSettings


@click.group(
    cls=NodecfgGroup,
    invoke_without_command=True,
    examples="""\
  nodecfg daemon ~/.bitcoin/bitcoin.conf
  nodecfg --json pool /etc/p2pool/config.toml
  nodecfg ls ~/.bitcoin""",
)
@click.version_option(version=__version__, prog_name="nodecfg")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal key=value output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override nodecfg.toml path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """nodecfg — inspect effective bitcoind and p2pool configuration."""
    # Unset flags are left out so NODECFG_* env and nodecfg.toml still apply.
    flags = {
        "json_output": json_output,
        "quiet": quiet,
        "verbose": verbose,
        "log_json": log_json,
    }
    settings = NodecfgSettings.from_cli(
        config_path=config_path,
        **{k: v for k, v in flags.items() if v},
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
