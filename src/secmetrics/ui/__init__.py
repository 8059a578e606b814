"""
User interface module.

Provides the chart builders, the dashboard view models and the web UI.
"""

__all__ = ["api", "charts", "http_server", "views"]
