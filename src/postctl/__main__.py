from postctl.cli import cli

cli()
