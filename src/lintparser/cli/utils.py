"""CLI utilities."""

import json
from pathlib import Path

import click

from lintparser.lint.models import CheckReport, Verdict


def find_crate_root(start_path: Path | None = None) -> Path:
    """Find the crate root (directory holding Cargo.toml) from the given path.

    Walks up the directory tree looking for a Cargo.toml manifest.
    If start_path is None, uses the current working directory.

    Raises:
        click.ClickException: If no manifest is found
    """
    if start_path is None:
        start_path = Path.cwd()

    current = start_path.resolve()

    while current != current.parent:
        if (current / "Cargo.toml").exists():
            return current
        current = current.parent

    if (current / "Cargo.toml").exists():
        return current

    raise click.ClickException(
        f"No Cargo.toml found in {start_path} or any parent directory.\n"
        "Run from within a crate, or pass its path: lintparser check PATH"
    )


def echo_report(report: CheckReport, *, as_json: bool = False) -> None:
    """Print a check report."""
    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    if report.verdict == Verdict.PERFECT:
        click.echo("No problems found")
        return

    click.echo("Error:" if report.verdict == Verdict.ERROR else "Warning:")
    for problem in report.problems:
        click.echo(f"- {problem}")
