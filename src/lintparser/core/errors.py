"""lintparser error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Parse (diagnostic stream grammar)
- 4xxx: Check (running the external check command)
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Parse (3xxx)
    PARSE_INVALID_NUMBER = 3001
    PARSE_UNKNOWN_LEVEL = 3002
    PARSE_INCOMPLETE_LINE = 3003
    PARSE_ORPHAN_ATTACHMENT = 3004

    # Check (4xxx)
    CHECK_INVALID_DIRECTORY = 4001
    CHECK_SPAWN_FAILED = 4002
    CHECK_INVALID_OUTPUT = 4003
    CHECK_TIMEOUT = 4004


@dataclass(eq=False)
class LintParserError(Exception):
    """Base error with structured context.

    Not frozen: contextlib and the traceback machinery assign attributes
    such as ``__traceback__`` on the instance.
    """

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'PARSE_UNKNOWN_LEVEL')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


def _line_details(line: str, line_number: int | None) -> dict[str, Any]:
    details: dict[str, Any] = {"line": line}
    if line_number is not None:
        details["line_number"] = line_number
    return details


class ConfigError(LintParserError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class ParseError(LintParserError):
    """A diagnostic header line that does not follow the line grammar.

    Fatal for the whole stream: no per-line recovery is attempted.
    """

    @classmethod
    def invalid_number(
        cls, line: str, field: str, text: str, line_number: int | None = None
    ) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_INVALID_NUMBER,
            message=f"Invalid {field.replace('_', ' ')} {text!r} in line: {line!r}",
            details={**_line_details(line, line_number), "field": field, "text": text},
        )

    @classmethod
    def unknown_level(
        cls, line: str, level: str, line_number: int | None = None
    ) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_UNKNOWN_LEVEL,
            message=f"Unknown diagnostic level {level!r} in line: {line!r}",
            details={**_line_details(line, line_number), "level": level},
        )

    @classmethod
    def incomplete_line(cls, line: str, line_number: int | None = None) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_INCOMPLETE_LINE,
            message=f"The line could not be parsed: {line!r}",
            details=_line_details(line, line_number),
        )


class AttachmentError(LintParserError):
    """A help/note diagnostic with no warning or error to attach to."""

    @classmethod
    def orphan(cls, severity: str, line: str, line_number: int | None = None) -> "AttachmentError":
        return cls(
            code=ErrorCode.PARSE_ORPHAN_ATTACHMENT,
            message=f"Found a {severity} before any warning or error: {line!r}",
            details={**_line_details(line, line_number), "severity": severity},
        )


class CheckError(LintParserError):
    """The external check command did not run meaningfully."""

    @classmethod
    def invalid_directory(cls, directory: str, returncode: int, stderr: str) -> "CheckError":
        return cls(
            code=ErrorCode.CHECK_INVALID_DIRECTORY,
            message=f"Check command failed in {directory} (exit status {returncode})",
            details={"directory": directory, "returncode": returncode, "stderr": stderr},
        )

    @classmethod
    def spawn_failed(cls, command: list[str], reason: str) -> "CheckError":
        return cls(
            code=ErrorCode.CHECK_SPAWN_FAILED,
            message=f"Could not run {' '.join(command)}: {reason}",
            details={"command": command, "reason": reason},
        )

    @classmethod
    def invalid_output(cls, command: list[str], reason: str) -> "CheckError":
        return cls(
            code=ErrorCode.CHECK_INVALID_OUTPUT,
            message=f"Invalid UTF-8 returned by {' '.join(command)}: {reason}",
            details={"command": command, "reason": reason},
        )

    @classmethod
    def timeout(cls, command: list[str], timeout_sec: float) -> "CheckError":
        return cls(
            code=ErrorCode.CHECK_TIMEOUT,
            message=f"{' '.join(command)} did not finish within {timeout_sec}s",
            details={"command": command, "timeout_sec": timeout_sec},
        )
