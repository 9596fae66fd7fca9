"""AppContext — shared Click context for all commands.

Created once by the root group and handed to subcommands via
``@click.pass_obj``. Owns result emission: stdout on success, stderr
and exit code 1 on failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from nodecfg.config.logging import configure_logging
from nodecfg.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from nodecfg.config.settings import NodecfgSettings
    from nodecfg.services.result import ServiceResult


class AppContext:
    """Settings plus output routing for one CLI invocation."""

    def __init__(self, settings: NodecfgSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr unless they
          are already part of the JSON payload.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
