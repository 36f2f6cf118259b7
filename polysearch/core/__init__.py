"""
Core module providing foundational components.

This module contains the configuration loader, centralized logging setup,
and custom exception hierarchy. It has no internal dependencies.
"""

from .config_loader import get_config, Config, DatabaseConfig, SearchConfig, SearchModeConfig
from .logger import get_logger
from .exceptions import (
    FulltextSearchError,
    ConfigurationError,
    DatabaseError,
    UnknownTypeError
)

__all__ = [
    "get_config",
    "Config",
    "DatabaseConfig",
    "SearchConfig",
    "SearchModeConfig",
    "get_logger",
    "FulltextSearchError",
    "ConfigurationError",
    "DatabaseError",
    "UnknownTypeError"
]
