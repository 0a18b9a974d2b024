"""
Entry point for python -m bwtpress
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from bwtpress.cli import compress, decompress, info, bench, save, list_items, load, delete
from bwtpress.config import Settings


def configure_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version='1.0.0')
@click.option('--verbose', '-v', is_flag=True, help='Log pipeline stages and timings')
@click.pass_context
def cli(ctx, verbose):
    """bwtpress - BWT + MTF + RLE byte-stream compression"""
    settings = Settings.from_env()
    settings.verbose = settings.verbose or verbose
    configure_logging(settings.verbose)
    ctx.obj = settings


cli.add_command(compress)
cli.add_command(decompress)
cli.add_command(info)
cli.add_command(bench)
cli.add_command(save)
cli.add_command(list_items)
cli.add_command(load)
cli.add_command(delete)

if __name__ == '__main__':
    cli()
