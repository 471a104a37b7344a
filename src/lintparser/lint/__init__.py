"""Lint module - diagnostic stream parsing and the check runner."""

from lintparser.lint.models import CheckReport, Note, Problem, Severity, Span, Verdict
from lintparser.lint.ops import CheckOps, cargo_check
from lintparser.lint.parsers import (
    COMPILE_ERROR_LINE,
    line_is_visual_aid,
    parse_check_line,
    parse_check_output,
)

__all__ = [
    "COMPILE_ERROR_LINE",
    "CheckOps",
    "CheckReport",
    "Note",
    "Problem",
    "Severity",
    "Span",
    "Verdict",
    "cargo_check",
    "line_is_visual_aid",
    "parse_check_line",
    "parse_check_output",
]
