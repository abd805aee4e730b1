"""
Pydantic models for finance tracker data structures.
"""

from finance_tracker_mcp.models.category import (
    LEGACY_CATEGORY_NAMES,
    Category,
    CategoryType,
    legacy_category_name,
)
from finance_tracker_mcp.models.record import EXPENSE, INCOME, Record, classify

__all__ = [
    "Record",
    "Category",
    "CategoryType",
    "classify",
    "INCOME",
    "EXPENSE",
    "LEGACY_CATEGORY_NAMES",
    "legacy_category_name",
]
