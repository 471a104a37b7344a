"""Tests for lint/parsers.py module.

Covers:
- parse_check_line()
- line_is_visual_aid()
- parse_check_output()
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import pytest

from lintparser.core.errors import AttachmentError, ErrorCode, ParseError
from lintparser.lint.models import CheckReport, Severity, Span, Verdict
from lintparser.lint.parsers import (
    COMPILE_ERROR_LINE,
    line_is_visual_aid,
    parse_check_line,
    parse_check_output,
)

WARNING_HEADER = "src/lib.rs:5:1: 5:10 warning: unused variable: `x`"

RUSTC_OUTPUT = """\
src/lib.rs:2:9: 2:10 warning: unused variable: `x`, #[warn(unused_variables)] on by default
src/lib.rs:2     let x = 5;
                     ^
src/lib.rs:5:5: 5:8 error: unresolved name `foo` [E0425]
src/lib.rs:5     foo();
                 ^~~
src/lib.rs:5:5: 5:8 help: run `rustc --explain E0425` to see a detailed explanation
error: aborting due to previous error
"""


class TestParseCheckLine:
    """Tests for parse_check_line."""

    def test_warning_header(self) -> None:
        """All fields are captured from a well-formed header."""
        severity, problem = parse_check_line(WARNING_HEADER)
        assert severity == Severity.WARNING
        assert problem.filepath == "src/lib.rs"
        assert problem.span == Span(5, 1, 5, 10, "unused variable: `x`")
        assert problem.help == []
        assert problem.notes == []

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            ("warning", Severity.WARNING),
            ("error", Severity.ERROR),
            ("help", Severity.HELP),
            ("note", Severity.NOTE),
        ],
    )
    def test_levels(self, level: str, expected: Severity) -> None:
        """Each level keyword maps to its severity."""
        severity, _ = parse_check_line(f"a.rs:1:2: 3:4 {level}: message")
        assert severity == expected

    def test_multi_digit_coordinates(self) -> None:
        """Coordinates with several digits parse as integers."""
        _, problem = parse_check_line("src/deep/mod.rs:120:33: 145:7 error: mismatched types")
        span = problem.span
        assert (span.start_line, span.start_col, span.end_line, span.end_col) == (120, 33, 145, 7)
        assert problem.filepath == "src/deep/mod.rs"

    def test_whitespace_before_end_col(self) -> None:
        """Whitespace between end line and end column is skipped."""
        _, problem = parse_check_line("a.rs:1:2: 3:  4 note: spaced")
        assert problem.span.end_line == 3
        assert problem.span.end_col == 4
        assert problem.span.message == "spaced"

    def test_message_directly_after_level(self) -> None:
        """Message may start right after the level colon."""
        _, problem = parse_check_line("a.rs:1:2: 3:4 error:oops")
        assert problem.span.message == "oops"

    def test_message_keeps_colons(self) -> None:
        """Colons inside the message are not delimiters."""
        _, problem = parse_check_line("a.rs:1:2: 3:4 error: expected `;`, found `let`: here")
        assert problem.span.message == "expected `;`, found `let`: here"

    @pytest.mark.parametrize(
        ("line", "field"),
        [
            ("src/lib.rs:x:1: 5:10 warning: m", "start_line"),
            ("src/lib.rs:5:-1: 5:10 warning: m", "start_col"),
            ("src/lib.rs:5:1: :10 warning: m", "end_line"),
            ("src/lib.rs:5:1: 5:1a warning: m", "end_col"),
        ],
    )
    def test_invalid_number(self, line: str, field: str) -> None:
        """Malformed numeric fields are fatal."""
        with pytest.raises(ParseError) as exc_info:
            parse_check_line(line)
        assert exc_info.value.code == ErrorCode.PARSE_INVALID_NUMBER
        assert exc_info.value.details["field"] == field

    @pytest.mark.parametrize("level", ["lint", "Warning", "ERROR", "warn"])
    def test_unknown_level(self, level: str) -> None:
        """Level must be an exact, case-sensitive keyword."""
        with pytest.raises(ParseError) as exc_info:
            parse_check_line(f"a.rs:1:2: 3:4 {level}: message")
        assert exc_info.value.code == ErrorCode.PARSE_UNKNOWN_LEVEL
        assert exc_info.value.details["level"] == level

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "no delimiters at all",
            "src/lib.rs:5:1",
            "src/lib.rs:5:1: 5:10",
            "src/lib.rs:5:1: 5:10 warning",
            "src/lib.rs:5:1: 5:10 warning:",
            "src/lib.rs:5:1: 5:10 warning:   ",
            ":5:1: 5:10 warning: no path",
            COMPILE_ERROR_LINE,
        ],
    )
    def test_incomplete_line(self, line: str) -> None:
        """Lines ending before the message starts fail explicitly."""
        with pytest.raises(ParseError) as exc_info:
            parse_check_line(line)
        assert exc_info.value.code == ErrorCode.PARSE_INCOMPLETE_LINE

    def test_line_number_in_details(self) -> None:
        """The stream position is reported with the error."""
        with pytest.raises(ParseError) as exc_info:
            parse_check_line("garbage", line_number=7)
        assert exc_info.value.details == {"line": "garbage", "line_number": 7}


class TestLineIsVisualAid:
    """Tests for line_is_visual_aid."""

    @pytest.mark.parametrize(
        "line",
        [
            "src/lib.rs:5     let x = 5;",
            "                 ^",
            "                 ^~~",
            "   |",
            "src/lib.rs:5:1 x",
            " ",
        ],
    )
    def test_decorative_lines(self, line: str) -> None:
        """Whitespace before a third colon marks decoration."""
        assert line_is_visual_aid(line) is True

    @pytest.mark.parametrize(
        "line",
        [
            "src/lib.rs:5:1: 5:10 help: try this",
            "other.rs:1:2: more",
            "a:b:c:d:e",
            "a:b:c:d e",
            "plain",
            "",
        ],
    )
    def test_content_lines(self, line: str) -> None:
        """Headers, colon-rich and whitespace-free lines are content."""
        assert line_is_visual_aid(line) is False


class TestParseCheckOutput:
    """Tests for parse_check_output."""

    def test_empty_input(self) -> None:
        """Empty buffer is a perfect check."""
        report = parse_check_output("")
        assert report == CheckReport.perfect()
        assert report.problems == []

    def test_single_warning(self) -> None:
        """Warning header followed by its two location lines."""
        text = f"{WARNING_HEADER}\nsrc/lib.rs:5 let x = 1;\n             ^\n"
        report = parse_check_output(text)
        assert report.verdict == Verdict.WARNING
        assert len(report.problems) == 1
        problem = report.problems[0]
        assert problem.span == Span(5, 1, 5, 10, "unused variable: `x`")

    def test_warning_location_lines_always_skipped(self) -> None:
        """The two lines after a warning never extend its message."""
        report = parse_check_output(f"{WARNING_HEADER}\nfirst\nsecond")
        assert report.problems[0].span.message == "unused variable: `x`"

    def test_warning_followed_by_help(self) -> None:
        """A help header right after a warning attaches to it."""
        text = f"{WARNING_HEADER}\nsrc/lib.rs:5:1: 5:10 help: prefix it with an underscore"
        report = parse_check_output(text)
        assert report.verdict == Verdict.WARNING
        assert len(report.problems) == 1
        assert report.problems[0].help == [Span(5, 1, 5, 10, "prefix it with an underscore")]

    @pytest.mark.parametrize(
        "location",
        [
            "src/lib.rs:5\n    ^",
            "src/lib.rs.orig\nsecond",
            "src/lib.rs:5: let x = 1;\n             ^",
        ],
    )
    def test_location_lines_naming_the_file_skipped(self, location: str) -> None:
        """Location lines that start with the filepath are not headers."""
        report = parse_check_output(f"{WARNING_HEADER}\n{location}")
        assert report.verdict == Verdict.WARNING
        assert len(report.problems) == 1
        assert report.problems[0].span.message == "unused variable: `x`"

    @pytest.mark.parametrize(
        "location",
        [
            "",
            "src/lib.rs:5 let x = 1;\n",
        ],
    )
    def test_sentinel_inside_warning_location_lines(self, location: str) -> None:
        """The sentinel ends the stream even before both location lines are read."""
        text = f"{WARNING_HEADER}\n{location}{COMPILE_ERROR_LINE}\nx.rs:1:1: 1:2 error: y\n"
        report = parse_check_output(text)
        assert report.verdict == Verdict.WARNING
        assert [p.filepath for p in report.problems] == ["src/lib.rs"]

    def test_consecutive_warnings(self) -> None:
        """Location skip does not swallow the next header."""
        text = f"{WARNING_HEADER}\nsrc/lib.rs:6:1: 6:4 warning: unused import"
        report = parse_check_output(text)
        assert [p.span.start_line for p in report.problems] == [5, 6]

    @pytest.mark.parametrize(
        "text",
        [
            "a.rs:1:1: 1:2 error: first\na.rs:2:1: 2:2 warning: second",
            "a.rs:1:1: 1:2 warning: first\na.rs:2:1: 2:2 error: second",
        ],
    )
    def test_error_overrides_warning(self, text: str) -> None:
        """Any error makes the verdict ERROR; all problems are kept in order."""
        report = parse_check_output(text)
        assert report.verdict == Verdict.ERROR
        assert [p.span.message for p in report.problems] == ["first", "second"]

    def test_rustc_stream(self) -> None:
        """Realistic stream with excerpts, a help line and the sentinel."""
        report = parse_check_output(RUSTC_OUTPUT)
        assert report.verdict == Verdict.ERROR
        warning, error = report.problems
        assert warning.span.message == (
            "unused variable: `x`, #[warn(unused_variables)] on by default"
        )
        assert warning.help == []
        assert error.span == Span(5, 5, 5, 8, "unresolved name `foo` [E0425]")
        assert error.help == [
            Span(5, 5, 5, 8, "run `rustc --explain E0425` to see a detailed explanation")
        ]

    def test_nothing_after_sentinel(self) -> None:
        """Lines after the sentinel are never parsed."""
        text = "\n".join(
            [
                "a.rs:1:1: 1:2 warning: kept",
                "x",
                "y",
                COMPILE_ERROR_LINE,
                "a.rs:9:1: 9:2 error: ignored",
                "not a header at all",
            ]
        )
        report = parse_check_output(text)
        assert report.verdict == Verdict.WARNING
        assert [p.span.message for p in report.problems] == ["kept"]

    def test_sentinel_after_visual_aids(self) -> None:
        """The sentinel ends the stream even inside a diagnostic's excerpt."""
        text = "\n".join(
            [
                "a.rs:1:1: 1:2 error: kept",
                "a.rs:1 fn main() {",
                "       ^",
                COMPILE_ERROR_LINE,
                "a.rs:9:1: 9:2 error: ignored",
            ]
        )
        report = parse_check_output(text)
        assert len(report.problems) == 1

    def test_sentinel_only(self) -> None:
        """Sentinel without diagnostics is perfect."""
        assert parse_check_output(COMPILE_ERROR_LINE).is_perfect

    @pytest.mark.parametrize("level", ["help", "note"])
    def test_attachment_without_owner(self, level: str) -> None:
        """Help/note before any warning or error fails."""
        text = f"a.rs:1:1: 1:2 {level}: orphan\na.rs:2:1: 2:2 error: late owner"
        with pytest.raises(AttachmentError) as exc_info:
            parse_check_output(text)
        assert exc_info.value.code == ErrorCode.PARSE_ORPHAN_ATTACHMENT
        assert exc_info.value.details["line_number"] == 1
        assert exc_info.value.details["severity"] == level

    def test_errors_keep_their_type_through_context_managers(self) -> None:
        """Parse failures raised inside a context manager stay typed."""

        @contextmanager
        def scope() -> Iterator[None]:
            yield

        with pytest.raises(AttachmentError):
            with scope():
                parse_check_output("a.rs:1:1: 1:2 help: orphan")
        with pytest.raises(ParseError):
            with scope():
                parse_check_output("a.rs:x:1: 1:2 error: bad")

    def test_invalid_header_is_fatal(self) -> None:
        """A bad header anywhere aborts the whole parse."""
        text = "a.rs:1:1: 1:2 error: fine\na.rs:2:1: 2:2 fatal: bad"
        with pytest.raises(ParseError) as exc_info:
            parse_check_output(text)
        assert exc_info.value.details["line_number"] == 2

    def test_message_continuation(self) -> None:
        """Plain lines extend the message, joined with line breaks."""
        text = "a.rs:1:1: 1:2 error: mismatched types\nexpected=u32\nother.rs:3:4: found i64"
        report = parse_check_output(text)
        assert report.problems[0].span.message == (
            "mismatched types\nexpected=u32\nother.rs:3:4: found i64"
        )

    def test_visual_aid_not_appended(self) -> None:
        """Decorative lines never reach the message."""
        text = "a.rs:1:1: 1:2 error: bad\na.rs:1 let x;\n      ^"
        report = parse_check_output(text)
        assert report.problems[0].span.message == "bad"

    def test_plain_line_after_visual_aid_suppressed(self) -> None:
        """A plain line right after a visual aid is decoration too."""
        text = "a.rs:1:1: 1:2 error: bad\n   |\nsuppressed"
        report = parse_check_output(text)
        assert report.problems[0].span.message == "bad"

    def test_plain_lines_after_two_visual_aids_suppressed(self) -> None:
        """Once a visual aid is seen, later plain lines stay suppressed."""
        text = "a.rs:1:1: 1:2 error: bad\n   |\n   ^\nfirst\nsecond\na.rs:2:1: 2:2 note: kept"
        report = parse_check_output(text)
        problem = report.problems[0]
        assert problem.span.message == "bad"
        assert problem.notes == [Span(2, 1, 2, 2, "kept")]

    def test_attachments_go_to_latest_owner(self) -> None:
        """Help/notes attach to the most recent warning or error only."""
        text = "\n".join(
            [
                "a.rs:1:1: 1:2 error: first",
                "a.rs:2:1: 2:2 error: second",
                "a.rs:2:1: 2:2 note: about second",
            ]
        )
        first, second = parse_check_output(text).problems
        assert first.notes == []
        assert [n.message for n in second.notes] == ["about second"]

    def test_attachment_order_preserved(self) -> None:
        """Help and note lists keep encounter order."""
        text = "\n".join(
            [
                "a.rs:1:1: 1:2 error: owner",
                "a.rs:1:1: 1:2 help: h1",
                "a.rs:1:1: 1:2 note: n1",
                "a.rs:1:1: 1:2 help: h2",
                "a.rs:1:1: 1:2 note: n2",
            ]
        )
        problem = parse_check_output(text).problems[0]
        assert [h.message for h in problem.help] == ["h1", "h2"]
        assert [n.message for n in problem.notes] == ["n1", "n2"]

    def test_idempotent(self) -> None:
        """Parsing the same buffer twice gives equal reports."""
        assert parse_check_output(RUSTC_OUTPUT) == parse_check_output(RUSTC_OUTPUT)

    def test_crlf_line_endings(self) -> None:
        """Windows line endings do not leak into messages."""
        report = parse_check_output("a.rs:1:1: 1:2 error: bad\r\nnext\r\n")
        assert report.problems[0].span.message == "bad\nnext"
