from nodecfg.cli import cli

cli()
