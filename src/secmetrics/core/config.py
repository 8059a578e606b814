"""
Configuration management for the Secmetrics dashboard.

Uses Pydantic Settings for environment variable validation and type safety.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from secmetrics import DEFAULT_CONFIG


class DataConfig(BaseSettings):
    """Dataset locations."""

    edr_path: str = Field(
        default=DEFAULT_CONFIG["edr_path"],
        description="Path to the EDR alerts CSV file"
    )
    vulnerabilities_path: str = Field(
        default=DEFAULT_CONFIG["vulnerabilities_path"],
        description="Path to the vulnerability records CSV file"
    )

    class Config:
        env_prefix = "SECMETRICS_DATA_"


class ServerConfig(BaseSettings):
    """Web UI server configuration."""

    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the web UI to"
    )
    port: int = Field(
        default=8080,
        ge=1,
        le=65535,
        description="Port to listen on"
    )
    reload: bool = Field(
        default=False,
        description="Enable uvicorn auto-reload (development only)"
    )

    class Config:
        env_prefix = "SECMETRICS_"


class AppConfig(BaseSettings):
    """Main application configuration."""

    log_level: str = Field(
        default=DEFAULT_CONFIG["log_level"],
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # Nested configurations
    data: DataConfig = Field(default_factory=DataConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


# Global config instance
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the global configuration instance.

    Lazily loads configuration on first access.

    Returns:
        AppConfig: The global configuration instance
    """
    global _config
    if _config is None:
        _config = AppConfig(
            data=DataConfig(),
            server=ServerConfig(),
        )
    return _config


def reload_config() -> AppConfig:
    """
    Reload configuration from environment variables.

    Useful for testing or when environment changes.

    Returns:
        AppConfig: The reloaded configuration instance
    """
    global _config
    _config = None
    return get_config()
