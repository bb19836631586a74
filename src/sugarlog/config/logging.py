"""
Logging Configuration.

Environment-driven defaults for every logger built by ``with_options``.
"""

from enum import Enum

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"


class LogFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


_LEVEL_ALIASES = {"warning": "warn", "critical": "fatal"}


def normalize_level(value: object) -> object:
    """Lower-case a level name and fold stdlib spellings onto ours."""
    if isinstance(value, str):
        lowered = value.strip().lower()
        return _LEVEL_ALIASES.get(lowered, lowered)
    return value


class LoggingSettings(BaseSettings):
    """Default logger configuration read from the environment."""

    model_config = SettingsConfigDict(
        env_prefix="SUGARLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    level: LogLevel = Field(default=LogLevel.INFO, description="Minimum log level")
    format: LogFormat = Field(default=LogFormat.JSON, description="Output encoding")
    output_paths: str = Field(default="stdout", description="Comma-separated outputs (stdout, stderr, file paths)")
    stacktrace_level: LogLevel = Field(default=LogLevel.FATAL, description="Minimum level carrying a stack trace")
    disable_caller: bool = Field(default=False, description="Omit the caller location")
    hash_secret: SecretStr | None = Field(
        default=None,
        description="Secret for the process-wide HMAC hasher used by with_hashed_field",
    )

    @field_validator("level", "stacktrace_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: object) -> object:
        return normalize_level(value)

    @property
    def output_path_list(self) -> list[str]:
        return [p.strip() for p in self.output_paths.split(",") if p.strip()]
