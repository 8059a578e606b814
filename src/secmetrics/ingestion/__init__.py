"""
Dataset ingestion module.

Loads the EDR and vulnerability CSV exports into typed records.
"""

__all__ = ["loader"]
