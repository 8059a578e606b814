"""
Secmetrics - Custom Exceptions
"""

from typing import Optional


class SecmetricsError(Exception):
    """Base exception for Secmetrics."""


class DataLoadError(SecmetricsError):
    """A dataset could not be read or parsed."""

    def __init__(self, source: str, path: str, reason: Optional[str] = None):
        detail = f"Failed to load {source} data from {path}"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(detail)
        self.source = source
        self.path = path
        self.reason = reason
