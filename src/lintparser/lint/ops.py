"""Check operations - run the build tool's check pass and parse its stderr."""

from __future__ import annotations

import os
import subprocess
import time
from pathlib import Path

from lintparser.config.models import CheckConfig
from lintparser.core.errors import CheckError
from lintparser.core.logging import get_logger
from lintparser.lint.models import CheckReport
from lintparser.lint.parsers import COMPILE_ERROR_LINE, parse_check_output

log = get_logger("lint.ops")


class CheckOps:
    """Runs the configured check command in a directory.

    The command's stderr is the diagnostic stream; findings are reported there
    whether the check passes or fails.
    """

    def __init__(self, directory: Path, config: CheckConfig | None = None) -> None:
        self._directory = directory
        self._config = config or CheckConfig()

    def run(self) -> CheckReport:
        """Run the check and parse its diagnostics.

        Raises:
            CheckError: The command could not be run, timed out, produced
                non-UTF-8 output or failed without reporting compile errors.
            ParseError: The diagnostic stream does not follow the line grammar.
            AttachmentError: A help/note has no warning or error to attach to.
        """
        stderr = self._capture_stderr()
        report = parse_check_output(stderr)
        log.info(
            "check.finished",
            directory=str(self._directory),
            verdict=report.verdict.value,
            problems=len(report.problems),
        )
        return report

    def _capture_stderr(self) -> str:
        cmd = self._config.command
        env = {**os.environ, **self._config.env} if self._config.env else None
        log.debug("check.run", command=cmd, directory=str(self._directory))
        start_time = time.time()

        try:
            result = subprocess.run(
                cmd,
                cwd=self._directory,
                capture_output=True,
                timeout=self._config.timeout_sec,
                env=env,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise CheckError.timeout(cmd, e.timeout) from e
        except OSError as e:
            # Missing executable, missing directory, permission denied
            raise CheckError.spawn_failed(cmd, str(e)) from e

        try:
            stderr = result.stderr.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CheckError.invalid_output(cmd, str(e)) from e

        log.debug(
            "check.exited",
            returncode=result.returncode,
            duration_seconds=round(time.time() - start_time, 3),
        )

        # A failed build still ran the check: the sentinel marks compile errors
        if result.returncode != 0 and COMPILE_ERROR_LINE not in stderr.splitlines():
            raise CheckError.invalid_directory(str(self._directory), result.returncode, stderr)

        return stderr


def cargo_check(directory: Path | None = None, *, config: CheckConfig | None = None) -> CheckReport:
    """Run ``cargo check`` (or the configured command) and report the found problems.

    Args:
        directory: Directory to run in (default: current working directory).
        config: Check command configuration (default: ``cargo check``).
    """
    return CheckOps(directory or Path.cwd(), config).run()
