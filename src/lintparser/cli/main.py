"""lintparser CLI - lintparser command."""

import click

from lintparser.cli.check import check_command
from lintparser.cli.parse import parse_command
from lintparser.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="lintparser")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """lintparser - structured reports from the build tool's check pass."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(check_command, name="check")
cli.add_command(parse_command, name="parse")


if __name__ == "__main__":
    cli()
