"""
Logging setup for applications embedding the engine.

The library itself only creates module loggers; it never configures
handlers on import.
"""

import logging
from typing import Optional

from .config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure root logging for scripts and services using the engine.

    Args:
        level: Log level name. Defaults to Settings.LOG_LEVEL.
    """
    level_name = (level or get_settings().LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
    logging.getLogger("eeat_engine").debug(f"Logging configured at {level_name}")
