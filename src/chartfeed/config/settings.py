"""Typed configuration models using pydantic-settings."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

try:
    from pydantic_settings import TomlConfigSettingsSource

    _HAS_TOML = True
except ImportError:
    _HAS_TOML = False


class IngestSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="INGEST_")

    assume_millis: bool = Field(
        default=False,
        description="Treat all-digit date cells as epoch milliseconds",
    )
    delimiter: str = Field(default=",", min_length=1, max_length=1)
    encoding: str = Field(default="utf8", description="Encoding passed to the CSV reader")
    preview_rows: int = Field(default=10, ge=0, description="Raw rows shown by `inspect`")


class IndicatorSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="INDICATOR_")

    sma_period: int = Field(default=20, ge=1, description="Default SMA window length")


class AppSettings(BaseSettings):
    """Top-level settings composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        toml_file="config.toml",
    )

    ingest: IngestSettings = Field(default_factory=IngestSettings)
    indicator: IndicatorSettings = Field(default_factory=IndicatorSettings)
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False, description="Render logs as JSON lines")

    @classmethod
    def settings_customise_sources(cls, settings_cls, **kwargs):  # type: ignore[override]
        sources = (
            kwargs["init_settings"],
            kwargs["env_settings"],
            kwargs["dotenv_settings"],
        )
        if _HAS_TOML:
            sources += (TomlConfigSettingsSource(settings_cls),)
        return sources
