"""Core module exports."""

from lintparser.core.errors import (
    AttachmentError,
    CheckError,
    ConfigError,
    ErrorCode,
    LintParserError,
    ParseError,
)
from lintparser.core.logging import configure_logging, get_logger

__all__ = [
    # Errors
    "AttachmentError",
    "CheckError",
    "ConfigError",
    "ErrorCode",
    "LintParserError",
    "ParseError",
    # Logging
    "configure_logging",
    "get_logger",
]
