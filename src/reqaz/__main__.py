from reqaz.cli import cli

cli()
