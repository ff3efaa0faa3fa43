"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from myhome.shared import EnumDatabaseBackend, EnumEnvironment, EnumLogLevel
from myhome.shared.env import load_secret_file_variables


class DatabaseSettings(BaseSettings):
    """Node store configuration settings."""

    backend: EnumDatabaseBackend = Field(
        default=EnumDatabaseBackend.SQLITE,
        description="Store holding nodes and their status rows",
    )
    sqlite_path: str = Field(
        default="myhome.db", description="SQLite database file (or :memory:)"
    )
    mongo_uri: str = Field(
        default="mongodb://localhost:27017/myhome",
        description="MongoDB connection URI",
    )
    database_name: str = Field(
        default="myhome", description="Name of the MongoDB database"
    )

    model_config = SettingsConfigDict(
        env_prefix="DB_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Secret files (``DB_MONGO_URI_FILE`` and friends) are resolved first so
    their values are visible to the settings classes.
    """
    load_secret_file_variables()
    return AppSettings()
