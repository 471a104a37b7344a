"""Config module exports."""

from lintparser.config.loader import LintParserSettings, load_config
from lintparser.config.models import (
    CheckConfig,
    LintParserConfig,
    LoggingConfig,
    LogOutputConfig,
)

__all__ = [
    "load_config",
    "CheckConfig",
    "LintParserConfig",
    "LintParserSettings",
    "LoggingConfig",
    "LogOutputConfig",
]
