"""
Core utilities shared across the dashboard.

Provides configuration, exceptions and breakdown arithmetic.
"""

from .breakdown import BreakdownEntry, compute_breakdown, safe_rate
from .config import AppConfig, DataConfig, ServerConfig, get_config, reload_config
from .exceptions import DataLoadError, SecmetricsError

__all__ = [
    "AppConfig",
    "BreakdownEntry",
    "DataConfig",
    "DataLoadError",
    "SecmetricsError",
    "ServerConfig",
    "compute_breakdown",
    "get_config",
    "reload_config",
    "safe_rate",
]
