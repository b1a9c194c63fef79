"""
Configuration Settings.

This module defines the library configuration using Pydantic's BaseSettings.
It automatically loads all configuration from environment variables and .env file
without explicit dotenv loading.
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", alias="CONFINEMENT_LOG_LEVEL", description="Console logging level")
    format: str = Field(
        default="detailed", alias="CONFINEMENT_LOG_FORMAT", description="Log format (simple, detailed or json)"
    )
    enable_file: bool = Field(
        default=False, alias="CONFINEMENT_ENABLE_FILE_LOGGING", description="Also write logs to a file"
    )
    file_dir: str = Field(default="logs", alias="CONFINEMENT_LOG_FILE_DIR", description="Directory for log files")

    model_config = {"populate_by_name": True}


class HostConfig(BaseModel):
    """Local host lookup configuration."""

    search_path: Optional[str] = Field(
        default=None,
        alias="CONFINEMENT_SEARCH_PATH",
        description="Search path used to locate binaries (defaults to the PATH environment variable)",
    )
    fact_env_prefix: str = Field(
        default="FACTER_",
        alias="CONFINEMENT_FACT_ENV_PREFIX",
        description="Environment variables with this prefix override host facts",
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Library settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    # =====================================================================
    # Pydantic Configuration
    # =====================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    # =====================================================================
    # Logging Configuration
    # =====================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="CONFINEMENT_LOG_LEVEL",
    )
    log_format: str = Field(
        default="detailed",
        description="Logging format (simple, detailed, json)",
        alias="CONFINEMENT_LOG_FORMAT",
    )
    enable_file_logging: bool = Field(
        default=False,
        description="Write logs to a file in addition to the console",
        alias="CONFINEMENT_ENABLE_FILE_LOGGING",
    )
    log_file_dir: str = Field(
        default="logs",
        description="Directory that receives the log file when file logging is enabled",
        alias="CONFINEMENT_LOG_FILE_DIR",
    )

    # =====================================================================
    # Host Lookup Configuration
    # =====================================================================
    search_path: Optional[str] = Field(
        default=None,
        description="Search path used by binary lookups; PATH when unset",
        alias="CONFINEMENT_SEARCH_PATH",
    )
    fact_env_prefix: str = Field(
        default="FACTER_",
        description="Prefix of environment variables that override host facts",
        alias="CONFINEMENT_FACT_ENV_PREFIX",
    )

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def logging(self) -> LoggingConfig:
        """Get logging configuration from environment variables."""
        return LoggingConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def host(self) -> HostConfig:
        """Get host lookup configuration from environment variables."""
        return HostConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
