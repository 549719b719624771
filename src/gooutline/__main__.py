from gooutline.cli import cli

cli()
