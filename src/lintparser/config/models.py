"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (LINTPARSER__SECTION__KEY)
3. Repo YAML (.lintparser/config.yaml)
4. Global YAML (~/.config/lintparser/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    LINTPARSER__<SECTION>__<KEY>=<VALUE>

Examples:
    LINTPARSER__LOGGING__LEVEL=DEBUG
    LINTPARSER__CHECK__EXECUTABLE=/opt/rust/bin/cargo
    LINTPARSER__CHECK__TIMEOUT_SEC=120
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        LINTPARSER__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every parsed diagnostic header.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class CheckConfig(BaseModel):
    """External check command configuration.

    Env vars:
        LINTPARSER__CHECK__EXECUTABLE: Build tool executable (default: cargo)
        LINTPARSER__CHECK__TIMEOUT_SEC: Kill the check after this many seconds
    """

    executable: str = Field(
        default="cargo",
        description="Build tool executable, looked up on PATH unless absolute.",
    )
    args: list[str] = Field(
        default_factory=lambda: ["check"],
        description="Arguments that run the static-check pass.",
    )
    timeout_sec: float | None = Field(
        default=None,
        description="Timeout for the check command. None waits indefinitely.",
    )
    env: dict[str, str] = Field(
        default_factory=dict,
        description="Extra environment variables for the check command.",
    )

    @field_validator("executable")
    @classmethod
    def validate_executable(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Executable must not be empty")
        return v

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v

    @property
    def command(self) -> list[str]:
        return [self.executable, *self.args]


class LintParserConfig(BaseModel):
    """Root configuration for lintparser.

    All settings can be configured via:
    1. Environment variables: LINTPARSER__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    check: CheckConfig = Field(default_factory=CheckConfig)
