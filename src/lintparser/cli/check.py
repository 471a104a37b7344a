"""lintparser check command - run the check pass and report its problems."""

from __future__ import annotations

from pathlib import Path

import click

from lintparser.cli.utils import echo_report, find_crate_root
from lintparser.config import load_config
from lintparser.core.errors import LintParserError
from lintparser.core.logging import configure_logging
from lintparser.lint.ops import CheckOps


@click.command()
@click.argument("path", default=None, required=False, type=click.Path(exists=True, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def check_command(ctx: click.Context, path: Path | None, as_json: bool) -> None:
    """Run the check pass and list the problems it found.

    PATH is the crate root. If not specified, auto-detects by walking
    up from the current directory to find Cargo.toml.
    """
    crate_root = find_crate_root(path)

    try:
        config = load_config(crate_root)
        if not (ctx.obj or {}).get("verbose"):
            configure_logging(config=config.logging)
        report = CheckOps(crate_root, config.check).run()
    except LintParserError as e:
        raise click.ClickException(str(e)) from e

    echo_report(report, as_json=as_json)
