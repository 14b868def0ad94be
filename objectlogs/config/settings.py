from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseSettings):
    """API server configuration settings."""

    model_config = SettingsConfigDict(env_prefix="API_", env_file=".env", extra="ignore")

    host: str = Field(default="0.0.0.0", description="API server host")
    port: int = Field(default=8000, description="API server port")
    workers: int = Field(default=1, description="Number of worker processes")
    reload: bool = Field(default=False, description="Enable auto-reload on code changes")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )


class AnalyzerSettings(BaseSettings):
    """Object log analyzer configuration settings."""

    model_config = SettingsConfigDict(env_prefix="ANALYZER_", env_file=".env", extra="ignore")

    default_days: int = Field(
        default=7,
        ge=1,
        description="Day threshold pre-filled in the form",
    )
    log_dir: Path = Field(
        default=Path("logs"),
        description="Directory scanned by the directory analysis endpoint",
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding of the log files",
    )
    validate_log_dir: bool = Field(
        default=False,
        description="Validate that the log directory exists (set to True for production)",
    )

    @model_validator(mode="after")
    def validate_log_dir_exists(self) -> "AnalyzerSettings":
        """Ensure the log directory exists if validation is enabled."""
        if self.validate_log_dir and not self.log_dir.is_dir():
            raise ValueError(f"Log directory not found: {self.log_dir}")
        return self


class Settings(BaseSettings):
    """Main application settings.

    This class aggregates all configuration sections and provides
    a single point of access for application configuration.

    Configuration precedence (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values

    Example .env file:
        APP_NAME=Object Log Analyzer
        APP_DEBUG=true
        API_PORT=8080
        ANALYZER_LOG_DIR=/var/log/objects
        ANALYZER_DEFAULT_DAYS=3
    """

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    name: str = Field(default="Object Log Analyzer", description="Application name")
    version: str = Field(default="0.1.0", description="Application version")
    description: str = Field(
        default="Created, deleted and modified object reports from XML and JSON logs",
        description="Application description",
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )

    # Sub-configurations
    api: APISettings = Field(default_factory=APISettings)
    analyzer: AnalyzerSettings = Field(default_factory=AnalyzerSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function is cached to ensure we only parse configuration once.
    Use this function throughout the application to access settings.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
