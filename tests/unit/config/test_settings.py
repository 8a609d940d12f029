"""
Tests for LogkitSettings and its conversion into sink builders.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from logkit.config import (
    ConsoleSinkSettings,
    FileSinkSettings,
    LogkitSettings,
    MetricsSettings,
    RotationSettings,
)
from logkit.logging.handlers import ConsoleSink, FileSink
from logkit.logging.levels import Level
from logkit.logging.sinks import ConsoleSinkBuilder, FileSinkBuilder


@pytest.mark.unit
class TestDefaults:
    """Test default settings."""

    def test_default_settings(self, clean_environment):
        settings = LogkitSettings()

        assert settings.console.enabled is True
        assert settings.console.level == Level.INFO
        assert settings.file.enabled is False
        assert settings.file.path == Path("logs/logkit.log")
        assert settings.file.rotation == RotationSettings()
        assert settings.metrics.enabled is False

    def test_rotation_defaults(self):
        rotation = RotationSettings()

        assert rotation.max_size == 20
        assert rotation.max_age == 30
        assert rotation.max_backups == 50
        assert rotation.compress is False

    def test_metrics_defaults(self):
        metrics = MetricsSettings()

        assert metrics.port == 9100
        assert metrics.addr == "0.0.0.0"
        assert metrics.sample_interval == 5.0


@pytest.mark.unit
class TestValidation:
    """Test field validators."""

    @pytest.mark.parametrize("value,expected", [
        ("debug", Level.DEBUG),
        ("WARNING", Level.WARN),
        (40, Level.ERROR),
    ])
    def test_level_parsing(self, value, expected):
        assert ConsoleSinkSettings(level=value).level == expected

    def test_unknown_level_rejected(self):
        with pytest.raises(ValidationError, match="level"):
            FileSinkSettings(level="chatty")

    @pytest.mark.parametrize("field,value", [
        ("max_size", 0),
        ("max_age", -1),
        ("max_backups", -2),
    ])
    def test_rotation_bounds(self, field, value):
        with pytest.raises(ValidationError):
            RotationSettings(**{field: value})

    def test_empty_path_rejected(self):
        with pytest.raises(ValidationError):
            FileSinkSettings(path="")

    def test_metrics_bounds(self):
        with pytest.raises(ValidationError):
            MetricsSettings(port=70000)
        with pytest.raises(ValidationError):
            MetricsSettings(sample_interval=0)


@pytest.mark.unit
class TestEnvironment:
    """Test LOGKIT_* environment overrides."""

    def test_nested_environment_variables(self, clean_environment):
        clean_environment.setenv("LOGKIT_CONSOLE__LEVEL", "debug")
        clean_environment.setenv("LOGKIT_FILE__ENABLED", "true")
        clean_environment.setenv("LOGKIT_FILE__PATH", "/var/log/app/app.log")
        clean_environment.setenv("LOGKIT_FILE__ROTATION__MAX_SIZE", "5")
        clean_environment.setenv("LOGKIT_FILE__ROTATION__COMPRESS", "true")
        clean_environment.setenv("LOGKIT_METRICS__PORT", "9200")

        settings = LogkitSettings()

        assert settings.console.level == Level.DEBUG
        assert settings.file.enabled is True
        assert settings.file.path == Path("/var/log/app/app.log")
        assert settings.file.rotation.max_size == 5
        assert settings.file.rotation.compress is True
        assert settings.file.rotation.max_age == 30
        assert settings.metrics.port == 9200

    def test_invalid_environment_value(self, clean_environment):
        clean_environment.setenv("LOGKIT_CONSOLE__LEVEL", "shouting")

        with pytest.raises(ValidationError):
            LogkitSettings()


@pytest.mark.unit
class TestSinkBuilders:
    """Test LogkitSettings.sink_builders()."""

    def test_default_is_console_only(self, clean_environment):
        builders = LogkitSettings().sink_builders()

        assert len(builders) == 1
        assert isinstance(builders[0], ConsoleSinkBuilder)

    def test_both_sinks(self, clean_environment, temp_dir, console_stream, monkeypatch):
        monkeypatch.setattr("sys.stdout", console_stream)
        settings = LogkitSettings(
            console=ConsoleSinkSettings(level="debug"),
            file=FileSinkSettings(
                enabled=True,
                level="warn",
                path=temp_dir / "svc.log",
                rotation=RotationSettings(max_size=2, max_age=3, max_backups=4, compress=True),
            ),
        )

        console_builder, file_builder = settings.sink_builders()
        console_sink, file_sink = console_builder.build(), file_builder.build()
        try:
            assert isinstance(file_builder, FileSinkBuilder)
            assert isinstance(console_sink, ConsoleSink)
            assert console_sink.level == Level.DEBUG
            assert isinstance(file_sink, FileSink)
            assert file_sink.level == Level.WARN
            assert file_sink.baseFilename == str(temp_dir / "svc.log")
            assert file_sink.maxBytes == 2 * 1024 * 1024
            assert file_sink.rotation.max_age == 3
            assert file_sink.rotation.max_backups == 4
            assert file_sink.rotation.compress is True
        finally:
            file_sink.close()

    def test_everything_disabled(self, clean_environment):
        settings = LogkitSettings(console=ConsoleSinkSettings(enabled=False))

        assert settings.sink_builders() == []
