"""
Settings models for logkit.

Pydantic models describing which sinks to build and how the health
monitor runs. LogkitSettings reads overrides from ``LOGKIT_*``
environment variables, with ``__`` separating nested fields
(``LOGKIT_FILE__ROTATION__MAX_SIZE=5``).
"""

from pathlib import Path
from typing import Any, List

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import (
    DEFAULT_LOG_COMPRESS,
    DEFAULT_LOG_FILE_PATH,
    DEFAULT_LOG_MAX_AGE_DAYS,
    DEFAULT_LOG_MAX_BACKUPS,
    DEFAULT_LOG_MAX_SIZE_MB,
    DEFAULT_METRICS_ADDR,
    DEFAULT_METRICS_PORT,
    DEFAULT_SAMPLE_INTERVAL_SECONDS,
)
from ..exceptions import InvalidConfigurationError
from ..logging.config import (
    with_log_file_path,
    with_log_level,
    with_max_backups,
    with_rotate_settings,
)
from ..logging.levels import Level, parse_level
from ..logging.sinks import SinkBuilder, with_console_core, with_file_core


def _coerce_level(value: Any) -> Level:
    try:
        return parse_level(value)
    except InvalidConfigurationError as e:
        raise ValueError(e.message) from e


class RotationSettings(BaseModel):
    """Rotation thresholds for the file sink."""

    max_size: int = Field(
        DEFAULT_LOG_MAX_SIZE_MB, ge=1, description="Maximum file size in MB before rotating"
    )
    max_age: int = Field(
        DEFAULT_LOG_MAX_AGE_DAYS, ge=0, description="Days to keep rotated files (0 = forever)"
    )
    max_backups: int = Field(
        DEFAULT_LOG_MAX_BACKUPS, ge=0, description="Rotated files to keep (0 = all)"
    )
    compress: bool = Field(DEFAULT_LOG_COMPRESS, description="Gzip rotated files")


class ConsoleSinkSettings(BaseModel):
    """Console sink configuration."""

    enabled: bool = Field(True, description="Write colorized records to stdout")
    level: Level = Field(Level.INFO, description="Minimum level")

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: Any) -> Level:
        return _coerce_level(v)


class FileSinkSettings(BaseModel):
    """File sink configuration."""

    enabled: bool = Field(False, description="Write JSON records to a rotating file")
    level: Level = Field(Level.INFO, description="Minimum level")
    path: Path = Field(Path(DEFAULT_LOG_FILE_PATH), description="Log file path")
    rotation: RotationSettings = Field(default_factory=RotationSettings)

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: Any) -> Level:
        return _coerce_level(v)

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: Path) -> Path:
        if str(v).strip() in ("", "."):
            raise ValueError("path must name a file")
        return v.expanduser()


class MetricsSettings(BaseModel):
    """Health monitor and Prometheus exposition configuration."""

    enabled: bool = Field(False, description="Run the health monitor")
    port: int = Field(DEFAULT_METRICS_PORT, ge=1, le=65535, description="Metrics server port")
    addr: str = Field(DEFAULT_METRICS_ADDR, description="Metrics server bind address")
    sample_interval: float = Field(
        DEFAULT_SAMPLE_INTERVAL_SECONDS, gt=0, description="Seconds between health samples"
    )


class LogkitSettings(BaseSettings):
    """Top-level settings, overridable through the environment."""

    console: ConsoleSinkSettings = Field(default_factory=ConsoleSinkSettings)
    file: FileSinkSettings = Field(default_factory=FileSinkSettings)
    metrics: MetricsSettings = Field(default_factory=MetricsSettings)

    model_config = SettingsConfigDict(
        env_prefix="LOGKIT_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    def sink_builders(self) -> List[SinkBuilder]:
        """Builders for every enabled sink."""
        builders: List[SinkBuilder] = []

        if self.console.enabled:
            builders.append(with_console_core(with_log_level(self.console.level)))

        if self.file.enabled:
            rotation = self.file.rotation
            builders.append(
                with_file_core(
                    with_log_file_path(str(self.file.path)),
                    with_rotate_settings(rotation.max_size, rotation.max_age, rotation.compress),
                    with_max_backups(rotation.max_backups),
                    with_log_level(self.file.level),
                )
            )

        return builders
