"""Configuration for modelgen."""

from .logging import get_logger, setup_logging
from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings", "get_logger", "setup_logging"]
