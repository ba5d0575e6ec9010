"""Utility modules for the E-E-A-T engine."""

from .config import Settings, get_settings
from .logging import configure_logging
from .text import count_words, strip_tags

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "count_words",
    "strip_tags",
]
