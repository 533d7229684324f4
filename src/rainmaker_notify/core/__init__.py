"""
Core configuration and logging helpers.
"""

from .config import AppConfig, StorageConfig, get_config, reload_config
from .logging import setup_logging

__all__ = ["AppConfig", "StorageConfig", "get_config", "reload_config", "setup_logging"]
