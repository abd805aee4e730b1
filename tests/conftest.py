"""
Pytest configuration and fixtures for finance-tracker-mcp tests.
"""

from pathlib import Path
from typing import Dict, Generator

import pytest

from finance_tracker_mcp.core.database import FinanceDatabase
from finance_tracker_mcp.tools.tools import FinanceTools


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path to a fresh SQLite database file."""
    return tmp_path / "finance.db"


@pytest.fixture
def database(db_path: Path) -> Generator[FinanceDatabase, None, None]:
    """Initialized database without seeded categories."""
    db = FinanceDatabase(db_path)
    db.initialize()
    yield db
    db.close()


@pytest.fixture
def seeded_database(database: FinanceDatabase) -> FinanceDatabase:
    """Database with the default categories."""
    database.seed_default_categories()
    return database


@pytest.fixture
def tools(seeded_database: FinanceDatabase) -> FinanceTools:
    """FinanceTools over the seeded database."""
    return FinanceTools(seeded_database)


@pytest.fixture
def january_records(tools: FinanceTools) -> Dict[str, dict]:
    """
    One salary and two food expenses in January 2024.

    Returns:
        Created records keyed by a short label
    """
    return {
        "salary": tools.new_record(amount=1000, category="plat", date="2024-01-05"),
        "lunch": tools.new_record(amount=-200, category="jidlo", date="2024-01-10"),
        "snack": tools.new_record(amount=-50, category="jidlo", date="2024-01-20"),
    }
