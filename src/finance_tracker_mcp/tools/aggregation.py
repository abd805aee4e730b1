"""
Aggregation of records into summary totals.

Every split by income/expense goes through ``classify``; a category's own
``type`` flag is never consulted.
"""

from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional, Tuple

from finance_tracker_mcp.models.category import Category
from finance_tracker_mcp.models.record import EXPENSE, INCOME, Record, classify


def aggregate_by_category(
    rows: Iterable[Tuple[Record, Optional[Category]]],
) -> List[Dict[str, Any]]:
    """
    Count and sum records per category, split by income/expense.

    Records without a resolvable category are left out. Types with no
    records are omitted rather than reported empty.

    Args:
        rows: (record, category) pairs, already filtered by date

    Returns:
        List of {"type", "categories": [{"categoryId", "categoryName",
        "count", "totalAmount"}]}, one entry per observed type
    """
    groups: Dict[Tuple[str, str], Dict[str, Any]] = {}

    for record, category in rows:
        if category is None:
            continue

        key = (classify(record.amount), category.category_id)
        group = groups.get(key)
        if group is None:
            group = groups[key] = {
                "categoryId": category.category_id,
                "categoryName": category.name,
                "count": 0,
                "totalAmount": 0,
            }
        group["count"] += 1
        group["totalAmount"] += record.amount

    by_type: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
    for (record_type, _), group in groups.items():
        by_type[record_type].append(group)

    return [
        {"type": record_type, "categories": categories}
        for record_type, categories in by_type.items()
    ]


def _sum(records: Iterable[Record], record_type: Optional[str] = None) -> float:
    return sum(
        record.amount
        for record in records
        if record_type is None or classify(record.amount) == record_type
    )


def total_income(records: Iterable[Record]) -> float:
    """Sum of non-negative amounts, 0 when there are none."""
    return _sum(records, INCOME)


def total_expense(records: Iterable[Record]) -> float:
    """Sum of negative amounts, 0 when there are none."""
    return _sum(records, EXPENSE)


def total_balance(records: Iterable[Record]) -> float:
    """Sum of all amounts regardless of sign."""
    return _sum(records)
