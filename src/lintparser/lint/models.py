"""Lint models - spans, problems and check reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(Enum):
    """Level keyword of a diagnostic header line."""

    WARNING = "warning"
    ERROR = "error"
    HELP = "help"
    NOTE = "note"

    @property
    def is_attachment(self) -> bool:
        """Help and note diagnostics attach to the previous warning or error."""
        return self in (Severity.HELP, Severity.NOTE)


class Verdict(Enum):
    """Overall classification of a check run."""

    PERFECT = "perfect"
    WARNING = "warning"
    ERROR = "error"


@dataclass(slots=True)
class Span:
    """A source region plus the message reported for it.

    Columns are counted in characters. The message may hold several lines.
    """

    start_line: int
    start_col: int
    end_line: int
    end_col: int
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_line": self.start_line,
            "start_col": self.start_col,
            "end_line": self.end_line,
            "end_col": self.end_col,
            "message": self.message,
        }

    def __str__(self) -> str:
        return (
            f"{self.start_line}:{self.start_col}: "
            f"{self.end_line}:{self.end_col}: {self.message}"
        )


Note = Span


@dataclass
class Problem:
    """A warning or error found in a file, with its help and note spans."""

    filepath: str
    span: Span
    help: list[Span] = field(default_factory=list)
    notes: list[Span] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        filepath: str,
        start_line: int,
        start_col: int,
        end_line: int,
        end_col: int,
        message: str,
        help: list[Span] | None = None,  # noqa: A002
        notes: list[Span] | None = None,
    ) -> Problem:
        return cls(
            filepath=filepath,
            span=Span(start_line, start_col, end_line, end_col, message),
            help=list(help or []),
            notes=list(notes or []),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "filepath": self.filepath,
            **self.span.to_dict(),
            "help": [h.to_dict() for h in self.help],
            "notes": [n.to_dict() for n in self.notes],
        }

    def __str__(self) -> str:
        parts = [f"{self.filepath}:{self.span}"]
        parts.extend(f" (help: {h})" for h in self.help)
        parts.extend(f" (note: {n})" for n in self.notes)
        return "".join(parts)


@dataclass
class CheckReport:
    """Result of parsing one check run's diagnostic stream.

    ``problems`` holds every warning and error in encounter order, also when
    the verdict is ERROR.
    """

    verdict: Verdict
    problems: list[Problem] = field(default_factory=list)

    @property
    def is_perfect(self) -> bool:
        return self.verdict == Verdict.PERFECT

    @property
    def has_errors(self) -> bool:
        return self.verdict == Verdict.ERROR

    @classmethod
    def perfect(cls) -> CheckReport:
        return cls(verdict=Verdict.PERFECT)

    @classmethod
    def warning(cls, problems: list[Problem]) -> CheckReport:
        return cls(verdict=Verdict.WARNING, problems=problems)

    @classmethod
    def error(cls, problems: list[Problem]) -> CheckReport:
        return cls(verdict=Verdict.ERROR, problems=problems)

    def to_dict(self) -> dict[str, Any]:
        return {
            "verdict": self.verdict.value,
            "problems": [p.to_dict() for p in self.problems],
        }
