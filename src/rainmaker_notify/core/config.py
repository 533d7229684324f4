"""
Configuration management for RainMaker Notify.

Uses Pydantic Settings for environment variable validation and type safety.
"""

import os
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from .. import DEFAULT_CONFIG


class StorageConfig(BaseSettings):
    """Shared local storage configuration."""
    
    base_dir: str = Field(
        default=DEFAULT_CONFIG["storage_dir"],
        validate_default=True,
        description="Directory holding one database file per storage suite"
    )
    app_group: str = Field(
        default=DEFAULT_CONFIG["app_group"],
        description="Suite shared by the app and the notification extension"
    )
    notification_limit: int = Field(
        default=DEFAULT_CONFIG["notification_limit"],
        ge=1,
        description="Maximum number of notifications kept in history"
    )
    
    @field_validator("base_dir")
    @classmethod
    def expand_base_dir(cls, v: str) -> str:
        """Expand ~ so every process resolves the same directory."""
        return os.path.expanduser(v)
    
    class Config:
        env_prefix = "RAINMAKER_STORAGE_"


class AppConfig(BaseSettings):
    """Main application configuration."""
    
    log_level: str = Field(
        default=DEFAULT_CONFIG["log_level"],
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    
    # Nested configurations
    storage: StorageConfig = Field(default_factory=StorageConfig)
    
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
        env_prefix = "RAINMAKER_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


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
        _config = AppConfig(storage=StorageConfig())
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
