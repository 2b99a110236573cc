"""Configuration management."""

from .settings import DatabaseType, Settings
from .logging import setup_logging

__all__ = ["DatabaseType", "Settings", "setup_logging"]
