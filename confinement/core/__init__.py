"""Ambient configuration and logging setup for the confinement engine."""

from .config import Settings, settings
from .logging_config import get_logger, setup_logging

__all__ = [
    "Settings",
    "settings",
    "get_logger",
    "setup_logging",
]
