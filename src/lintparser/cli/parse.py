"""lintparser parse command - parse already captured check output."""

from __future__ import annotations

from typing import TextIO

import click

from lintparser.cli.utils import echo_report
from lintparser.core.errors import LintParserError
from lintparser.lint.parsers import parse_check_output


@click.command()
@click.argument("source", default="-", type=click.File("r", encoding="utf-8"))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def parse_command(source: TextIO, as_json: bool) -> None:
    """Parse the stderr of a check run.

    SOURCE is a file holding the captured output, or - for stdin (default).
    """
    try:
        report = parse_check_output(source.read())
    except LintParserError as e:
        raise click.ClickException(str(e)) from e

    echo_report(report, as_json=as_json)
