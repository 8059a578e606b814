"""
EDR alert metrics module.

Summarizes endpoint detection & response alerts into dashboard KPIs.
"""

__all__ = ["models", "aggregator"]
