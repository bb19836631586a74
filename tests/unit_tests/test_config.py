"""
Build configuration and environment settings.
"""

from types import SimpleNamespace

import pytest
from pydantic import ValidationError

import sugarlog.config
from sugarlog.config import EncoderConfig, LogConfig, LoggingSettings, LogLevel, default_config


class TestLogConfig:
    def test_defaults(self):
        config = LogConfig()
        assert config.level is LogLevel.INFO
        assert config.encoding == "json"
        assert config.output_paths == ["stdout"]
        assert config.stacktrace_level is LogLevel.FATAL
        assert config.encoder == EncoderConfig()
        assert config.encoder.encode_time == "iso8601"
        assert config.encoder.encode_caller == "short"

    @pytest.mark.parametrize(
        ("raw", "level"),
        [("WARNING", LogLevel.WARN), ("critical", LogLevel.FATAL), (" Debug ", LogLevel.DEBUG)],
    )
    def test_level_aliases(self, raw, level):
        assert LogConfig(level=raw).level is level

    def test_unknown_level_rejected(self):
        with pytest.raises(ValidationError):
            LogConfig(level="verbose")

    def test_frozen(self):
        config = LogConfig()
        with pytest.raises(ValidationError):
            config.level = LogLevel.DEBUG

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            EncoderConfig(msg_key="m")

    def test_from_settings(self):
        settings = LoggingSettings(level="error", format="console", output_paths="stderr, /tmp/x.log")
        config = LogConfig.from_settings(settings)
        assert config.level is LogLevel.ERROR
        assert config.encoding == "console"
        assert config.output_paths == ["stderr", "/tmp/x.log"]


class TestLoggingSettings:
    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("SUGARLOG_LEVEL", "warning")
        monkeypatch.setenv("SUGARLOG_FORMAT", "console")
        monkeypatch.setenv("SUGARLOG_DISABLE_CALLER", "true")
        settings = LoggingSettings()
        assert settings.level is LogLevel.WARN
        assert settings.format.value == "console"
        assert settings.disable_caller is True

    def test_empty_output_paths_fall_back_to_stdout(self):
        config = LogConfig.from_settings(LoggingSettings(output_paths=" , "))
        assert config.output_paths == ["stdout"]

    def test_default_config_reads_settings(self, monkeypatch):
        fake = SimpleNamespace(logging=LoggingSettings(level="debug"))
        monkeypatch.setattr(sugarlog.config, "settings", fake)
        assert default_config().level is LogLevel.DEBUG
