#!/usr/bin/env python3
"""
Populate a finance tracker database with demo records.

Creates the schema and default categories if needed, then inserts one
month of income and expense records tagged with the default category
names.
"""

import argparse
import sys
from datetime import datetime, timedelta
from pathlib import Path

from finance_tracker_mcp.core.database import FinanceDatabase
from finance_tracker_mcp.models.category import legacy_category_name

# (day offset, amount, tag, description)
DEMO_RECORDS = [
    (0, 42000, "plat", "Monthly salary"),
    (1, -12500, "bydleni", "Rent"),
    (2, -860, "jidlo", "Groceries"),
    (3, -320, "doprava", "Public transport pass"),
    (5, -1299, "elektronika", "Headphones"),
    (8, -540, "jidlo", "Groceries"),
    (10, 2500, "bonus", "Quarterly bonus"),
    (12, -450, "zabava", "Cinema"),
    (15, -210, "kava", "Coffee beans"),  # not a known tag, stored as 'ostatni'
    (20, -990, "sport", "Gym membership"),
    (25, 1500, "investice", "Dividends"),
]


def seed_demo_data(db_path: Path, month_start: datetime) -> int:
    """Insert the demo records starting at month_start."""
    db = FinanceDatabase(db_path)
    db.initialize()
    db.seed_default_categories()

    inserted = 0
    for offset, amount, tag, description in DEMO_RECORDS:
        category = db.get_category_by_name(legacy_category_name(tag))
        db.add_record(
            amount=float(amount),
            category_id=category.category_id if category else None,
            date=month_start + timedelta(days=offset),
            description=description,
        )
        inserted += 1
        print(f"Added: {amount:>8} {legacy_category_name(tag)}")

    db.close()
    return inserted


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("db_path", type=Path, help="Path to SQLite database")
    parser.add_argument(
        "--month",
        default=datetime.now().strftime("%Y-%m"),
        help="Month to fill, YYYY-MM (default: current month)",
    )
    args = parser.parse_args()

    if not args.db_path.parent.is_dir():
        print(f"Error: directory {args.db_path.parent} does not exist")
        sys.exit(1)

    count = seed_demo_data(args.db_path, datetime.strptime(args.month, "%Y-%m"))
    print(f"\nSuccessfully added {count} records to {args.db_path}")
