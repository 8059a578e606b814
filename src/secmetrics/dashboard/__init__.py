"""
Dashboard module.

Runs the load-and-aggregate cycle and holds its result.
"""

__all__ = ["models", "service"]
