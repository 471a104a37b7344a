"""Parsers for the build tool's diagnostic stream.

The stream is made of header lines in the grammar

    path:line:col: line:col level: message

each followed by continuation lines that either extend the message or are
visual aids (source excerpts, carets, connector bars). Parsing happens in
three stages:

- parse_check_line(): one header line -> (Severity, Problem)
- line_is_visual_aid(): classify one continuation line
- parse_check_output(): aggregate a whole stderr buffer into a CheckReport
"""

from __future__ import annotations

import logging
from enum import Enum, auto

from lintparser.core.errors import AttachmentError, ParseError
from lintparser.lint.models import CheckReport, Problem, Severity

logger = logging.getLogger(__name__)

# Printed by the build tool once the diagnostic section is over
COMPILE_ERROR_LINE = "error: aborting due to previous error"

# Source excerpt + pointer lines emitted right after every warning header
WARNING_LOCATION_LINES = 2


class LineParseState(Enum):
    """Field currently being captured by parse_check_line()."""

    FILE = auto()
    START_LINE = auto()
    START_COL = auto()
    END_LINE = auto()
    END_COL = auto()
    LEVEL = auto()
    FIRST_MESSAGE_LINE = auto()


# =============================================================================
# Line Field Parser
# =============================================================================


def _parse_number(line: str, text: str, field: str, line_number: int | None) -> int:
    if not (text.isascii() and text.isdigit()):
        raise ParseError.invalid_number(line, field, text, line_number)
    return int(text)


def _parse_level(line: str, text: str, line_number: int | None) -> Severity:
    try:
        return Severity(text)
    except ValueError:
        raise ParseError.unknown_level(line, text, line_number) from None


def parse_check_line(line: str, line_number: int | None = None) -> tuple[Severity, Problem]:
    """Parse a diagnostic header line.

    Single left-to-right pass; each state consumes characters up to its
    delimiter. EndLine and Level capture the run right before their ``:``,
    EndCol is terminated by whitespace.

    Args:
        line: The header line, without line terminator.
        line_number: 1-based position in the stream, reported in errors.

    Returns:
        The level keyword and a Problem with empty help/notes.

    Raises:
        ParseError: On a malformed number, an unknown level, or a line that
            ends before the message starts.
    """
    state = LineParseState.FILE
    filepath = ""
    start_line = start_col = end_line = end_col = 0
    severity = Severity.WARNING
    start = 0

    for i, ch in enumerate(line):
        if state is LineParseState.FILE:
            if ch == ":":
                filepath = line[:i]
                if not filepath:
                    raise ParseError.incomplete_line(line, line_number)
                state = LineParseState.START_LINE
                start = i + 1
        elif state is LineParseState.START_LINE:
            if ch == ":":
                start_line = _parse_number(line, line[start:i], "start_line", line_number)
                state = LineParseState.START_COL
                start = i + 1
        elif state is LineParseState.START_COL:
            if ch == ":":
                start_col = _parse_number(line, line[start:i], "start_col", line_number)
                state = LineParseState.END_LINE
                start = i + 1
        elif state is LineParseState.END_LINE:
            if ch.isspace():
                start = i + 1
            elif ch == ":":
                end_line = _parse_number(line, line[start:i], "end_line", line_number)
                state = LineParseState.END_COL
                start = i + 1
        elif state is LineParseState.END_COL:
            if ch.isspace():
                if i == start:
                    start = i + 1
                else:
                    end_col = _parse_number(line, line[start:i], "end_col", line_number)
                    state = LineParseState.LEVEL
                    start = i + 1
        elif state is LineParseState.LEVEL:
            if ch.isspace():
                start = i + 1
            elif ch == ":":
                severity = _parse_level(line, line[start:i], line_number)
                state = LineParseState.FIRST_MESSAGE_LINE
        elif not ch.isspace():
            problem = Problem.create(filepath, start_line, start_col, end_line, end_col, line[i:])
            return severity, problem

    raise ParseError.incomplete_line(line, line_number)


# =============================================================================
# Continuation Classifier
# =============================================================================


def line_is_visual_aid(line: str) -> bool:
    """Whether a continuation line is decoration with no diagnostic text.

    Counts ``:`` up to the first whitespace. Fewer than three before the
    whitespace means a source excerpt or marker line. Three (a
    ``path:line:col:`` prefix), a fourth ``:`` before any whitespace, or no
    whitespace at all mean real content.
    """
    colons = 0
    for ch in line:
        if ch.isspace():
            return colons < 3
        if ch == ":":
            colons += 1
            if colons > 3:
                return False
    return False


# =============================================================================
# Diagnostic Aggregator
# =============================================================================


def _is_header_of(line: str, filepath: str) -> bool:
    """Whether ``line`` opens another diagnostic for ``filepath``.

    Requires ``filepath:line:col:`` with numeric line and column, so location
    lines such as ``src/lib.rs:5`` do not qualify.
    """
    prefix = filepath + ":"
    if not line.startswith(prefix):
        return False
    fields = line[len(prefix) :].split(":", 2)
    return len(fields) == 3 and all(f.isascii() and f.isdigit() for f in fields[:2])


def _consume_continuation(lines: list[str], pos: int, problem: Problem, *, skip: int = 0) -> int:
    """Fold the lines after a header into ``problem``'s message.

    The first ``skip`` lines are dropped as visual aids unless one of them is
    the sentinel or another header for the same file. Once a visual aid has
    been seen, later plain lines of the same diagnostic are dropped too.

    Returns:
        Index of the first line that does not belong to this diagnostic
        (the next header, the sentinel, or ``len(lines)``).
    """
    after_visual_aid = False
    while pos < len(lines):
        line = lines[pos]
        if line == COMPILE_ERROR_LINE:
            return pos
        if skip > 0:
            if _is_header_of(line, problem.filepath):
                return pos
            skip -= 1
            after_visual_aid = True
            pos += 1
            continue
        visual_aid = line_is_visual_aid(line)
        if not visual_aid and line.startswith(problem.filepath):
            return pos
        if visual_aid:
            after_visual_aid = True
        elif not after_visual_aid:
            problem.span.message += "\n" + line
        pos += 1
    return pos


def parse_check_output(text: str) -> CheckReport:
    """Parse the complete stderr of one check run.

    Warnings and errors become problems; help and note diagnostics are
    attached to the most recent problem. Reading stops at the
    ``COMPILE_ERROR_LINE`` sentinel.

    Raises:
        ParseError: A header line does not follow the grammar.
        AttachmentError: A help/note comes before any warning or error.
    """
    lines = text.splitlines()
    problems: list[Problem] = []
    has_error = False
    pos = 0

    while pos < len(lines):
        line = lines[pos]
        if line == COMPILE_ERROR_LINE:
            break
        line_number = pos + 1
        severity, problem = parse_check_line(line, line_number)
        logger.debug("Line %d: %s in %s", line_number, severity.value, problem.filepath)

        skip = WARNING_LOCATION_LINES if severity is Severity.WARNING else 0
        pos = _consume_continuation(lines, pos + 1, problem, skip=skip)

        if severity.is_attachment:
            if not problems:
                raise AttachmentError.orphan(severity.value, line, line_number)
            owner = problems[-1]
            if severity is Severity.HELP:
                owner.help.append(problem.span)
            else:
                owner.notes.append(problem.span)
        else:
            has_error = has_error or severity is Severity.ERROR
            problems.append(problem)

    if has_error:
        report = CheckReport.error(problems)
    elif problems:
        report = CheckReport.warning(problems)
    else:
        report = CheckReport.perfect()

    logger.debug("Parsed %d problems, verdict %s", len(problems), report.verdict.value)
    return report
