"""Configuration and logging shared by the whole library."""

from .config import Settings, settings
from .logging import get_logger, log_query_info, setup_logging

__all__ = [
    "Settings",
    "get_logger",
    "log_query_info",
    "settings",
    "setup_logging",
]
