"""
RainMaker Notify - local notification store for RainMaker device events

This package keeps the client-side state that the RainMaker app and its
notification-delivery extension share: a bounded history of delivered
notifications, a cache of the user's nodes and node groups, and the
classifier that turns cloud push payloads into user-facing messages.

Main modules:
- storage: shared key-value store and the typed stores built on it
- notifications: push payload parsing, event classification, persistence
- models: notification, node and node group data models
- cli: operational CLI (rmnotify)
"""

__version__ = "0.1.0"
__author__ = "RainMaker Notify Team"

import os
from typing import Dict, Any

# Environment configuration defaults
DEFAULT_CONFIG: Dict[str, Any] = {
    "storage_dir": "~/.rainmaker/storage",
    "app_group": "group.com.espressif.rainmaker.softap",
    "notification_limit": 200,
    "log_level": "INFO",
}


def get_storage_dir() -> str:
    """
    Get the local storage directory from environment or configuration.
    
    Priority order:
    1. RAINMAKER_STORAGE_BASE_DIR environment variable
    2. Default fallback (~/.rainmaker/storage)
    
    Both the app and the notification extension must resolve the same
    directory, otherwise they will not see each other's data.
    
    Returns:
        str: Absolute path of the storage directory
    """
    path = os.getenv("RAINMAKER_STORAGE_BASE_DIR", DEFAULT_CONFIG["storage_dir"])
    return os.path.expanduser(path)


__all__ = ["__version__", "__author__", "DEFAULT_CONFIG", "get_storage_dir"]
