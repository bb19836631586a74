"""
Sugarlog Configuration Module.

Two layers:

* ``settings`` - environment driven defaults (pydantic-settings), one
  sub-settings object per concern with its own env prefix.
* ``LogConfig`` / ``EncoderConfig`` - the full, programmatic build
  configuration handed to ``with_config``. ``LogConfig.from_settings`` turns
  the environment defaults into a build configuration.

Usage:
    from sugarlog.config import settings

    settings.logging.level  # LogLevel.INFO
    settings.logging.format  # LogFormat.JSON
"""

from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict

from .encoder import EncoderConfig, LogConfig, default_config
from .logging import LogFormat, LoggingSettings, LogLevel


class Settings(BaseSettings):
    """Composite settings aggregating the configuration domains."""

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


# Singleton instance
settings = Settings()

__all__ = [
    "EncoderConfig",
    "LogConfig",
    "LogFormat",
    "LogLevel",
    "LoggingSettings",
    "Settings",
    "default_config",
    "settings",
]
