"""
Build configuration for a single logger.

``LogConfig`` describes everything the pipeline builder needs: level,
encoding, outputs, stack trace policy and the encoder key layout. Instances
are frozen; derive variants with ``model_copy(update=...)``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .logging import LogLevel, normalize_level

if TYPE_CHECKING:
    from .logging import LoggingSettings

LevelEncoding = Literal["lowercase", "capital", "lowercase_color", "capital_color"]
TimeEncoding = Literal["iso8601", "rfc3339", "epoch", "epoch_millis"]
DurationEncoding = Literal["seconds", "millis", "nanos", "string"]
CallerEncoding = Literal["short", "full"]


class EncoderConfig(BaseModel):
    """Key names and value encodings of an emitted record.

    An empty key omits that field from the output.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    message_key: str = "msg"
    level_key: str = "level"
    time_key: str = "time"
    name_key: str = "logger"
    caller_key: str = "caller"
    function_key: str = ""
    stacktrace_key: str = "stacktrace"
    line_ending: str = "\n"
    encode_level: LevelEncoding = "lowercase"
    encode_time: TimeEncoding = "iso8601"
    encode_duration: DurationEncoding = "seconds"
    encode_caller: CallerEncoding = "short"
    console_separator: str = "\t"


class LogConfig(BaseModel):
    """Full configuration of a logger build."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    level: LogLevel = LogLevel.INFO
    encoding: str = "json"
    output_paths: list[str] = Field(default_factory=lambda: ["stdout"])
    error_output_paths: list[str] = Field(default_factory=lambda: ["stderr"])
    disable_caller: bool = False
    disable_stacktrace: bool = False
    stacktrace_level: LogLevel = LogLevel.FATAL
    initial_fields: dict[str, Any] = Field(default_factory=dict)
    encoder: EncoderConfig = Field(default_factory=EncoderConfig)

    @field_validator("level", "stacktrace_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: object) -> object:
        return normalize_level(value)

    @classmethod
    def from_settings(cls, settings: LoggingSettings) -> LogConfig:
        return cls(
            level=settings.level,
            encoding=settings.format.value,
            output_paths=settings.output_path_list or ["stdout"],
            disable_caller=settings.disable_caller,
            stacktrace_level=settings.stacktrace_level,
        )


def default_config() -> LogConfig:
    """Configuration used when no ``with_config`` option is given."""
    from . import settings

    return LogConfig.from_settings(settings.logging)
