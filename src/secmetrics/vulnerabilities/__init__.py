"""
Vulnerability management metrics module.

Summarizes vulnerability records into remediation and exposure KPIs.
"""

__all__ = ["models", "aggregator"]
