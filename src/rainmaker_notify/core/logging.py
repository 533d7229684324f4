"""
Logging setup shared by the CLI and embedding applications.
"""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s %(message)s"


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger.
    
    Args:
        level: Level name; defaults to the configured log level
    """
    if level is None:
        from .config import get_config
        level = get_config().log_level
    
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)
    logging.getLogger(__name__).debug(f"Logging configured at {level.upper()}")
