"""
Row decoder for finance tracker SQLite data.

Converts between stored rows and the pydantic models.
"""

import sqlite3
from datetime import datetime
from typing import Optional, Tuple

from finance_tracker_mcp.core.exceptions import StoreError
from finance_tracker_mcp.models.category import Category, CategoryType
from finance_tracker_mcp.models.record import Record

# Fixed width so that stored timestamps sort lexicographically.
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"


def encode_timestamp(value: datetime) -> str:
    """
    Encode a naive UTC datetime for storage.

    Args:
        value: Naive UTC datetime

    Returns:
        Fixed-width ISO-8601 string
    """
    return value.strftime(TIMESTAMP_FORMAT)


def decode_timestamp(value: str) -> datetime:
    """
    Decode a stored timestamp.

    Raises:
        StoreError: If the stored value is malformed
    """
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except (TypeError, ValueError) as e:
        raise StoreError(f"Malformed timestamp in database: {value!r}") from e


def decode_record(row: sqlite3.Row) -> Record:
    """Build a Record from a row of the records table."""
    return Record(
        record_id=row["id"],
        amount=float(row["amount"]),
        category_id=row["category_id"],
        date=decode_timestamp(row["date"]),
        description=row["description"],
    )


def decode_category(row: sqlite3.Row, prefix: str = "") -> Optional[Category]:
    """
    Build a Category from a row.

    Args:
        row: Row from the categories table or a records/categories join
        prefix: Column prefix used by the join ("" for plain category rows)

    Returns:
        Category, or None when the joined category is absent
    """
    category_id = row[f"{prefix}id"]
    if category_id is None:
        return None

    return Category(
        category_id=category_id,
        name=row[f"{prefix}name"],
        type=CategoryType(row[f"{prefix}type"]),
        icon=row[f"{prefix}icon"],
        color=row[f"{prefix}color"],
    )


def decode_record_with_category(row: sqlite3.Row) -> Tuple[Record, Optional[Category]]:
    """Split a records/categories join row into its two models."""
    return decode_record(row), decode_category(row, prefix="cat_")
