"""Domain models and types for the staking reward converter.

The models here are plain in-memory (Pydantic) structures shared by the
importers, the date filter and the exporters.
"""

__all__ = [
    "coins",
    "date_filter",
    "errors",
    "reward",
]
