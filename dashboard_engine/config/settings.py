"""
Marketplace Dashboard Engine
Centralized Configuration Management

Pydantic settings with environment variable support for the analytics
engine: default comparison baselines, projection reference periods,
presentation defaults and logging.
"""

import re
from functools import lru_cache
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Analytics Engine Configuration"""

    model_config = SettingsConfigDict(env_prefix="ENGINE_")

    # Comparison baselines selected when a view opens
    day_baseline: str = Field(default="d7", description="Default baseline for the live-day view")
    month_baseline: str = Field(default="m1", description="Default baseline for the month view")

    # Baselines whose curve shapes the projection of a live period
    day_projection_reference: str = Field(default="d7", description="Reference baseline for intraday projection")
    month_projection_reference: str = Field(default="m1", description="Reference baseline for month projection")

    # Presentation
    unknown_color: str = Field(default="#E2E8F0", description="Map colour for regions without data")
    drill_root_label: str = Field(default="Todas as Categorias", description="Root breadcrumb label")

    @field_validator("day_baseline", "day_projection_reference")
    @classmethod
    def validate_day_key(cls, v: str) -> str:
        """Day baselines are "d<days back>" keys"""
        key = v.strip().lower()
        if not re.fullmatch(r"d\d+", key):
            raise ValueError(f"Day baseline must look like d7, got {v!r}")
        return key

    @field_validator("month_baseline", "month_projection_reference")
    @classmethod
    def validate_month_key(cls, v: str) -> str:
        """Month baselines are "m<months back>" keys"""
        key = v.strip().lower()
        if not re.fullmatch(r"m\d+", key):
            raise ValueError(f"Month baseline must look like m1, got {v!r}")
        return key

    @field_validator("unknown_color")
    @classmethod
    def validate_color(cls, v: str) -> str:
        if not re.fullmatch(r"#[0-9A-Fa-f]{6}", v.strip()):
            raise ValueError(f"unknown_color must be a #RRGGBB hex colour, got {v!r}")
        return v.strip()


class MonitoringSettings(BaseSettings):
    """Logging Configuration"""

    model_config = SettingsConfigDict(env_prefix="")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL", description="Logging level")
    log_format: str = Field(default="json", description="Log format: json or console")
    log_file: Optional[str] = Field(default=None, description="Log file path")

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        fmt = v.strip().lower()
        if fmt not in ("json", "console"):
            raise ValueError("log_format must be json or console")
        return fmt


class Settings(BaseSettings):
    """
    Main Application Settings

    Aggregates all configuration sections and provides a single entry point
    for accessing engine configuration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = Field(default="dashboard-engine", alias="APP_NAME", description="Application name")
    app_env: str = Field(default="development", alias="APP_ENV", description="Environment")
    debug: bool = Field(default=False, alias="DEBUG", description="Debug mode")

    # Version
    version: str = Field(default="1.0.0", description="Engine version")

    # Subsystem configurations
    engine: EngineSettings = Field(default_factory=EngineSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value"""
        allowed = ["development", "staging", "production", "testing"]
        if v.lower() not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v.lower()

    @property
    def is_production(self) -> bool:
        """Check if running in production"""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development"""
        return self.app_env == "development"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
