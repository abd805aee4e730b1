"""
Database abstraction layer for finance tracker data.

Stores records and categories in SQLite and provides filtered
access with proper error handling.
"""

import logging
import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from finance_tracker_mcp.core.decoder import (
    decode_category,
    decode_record,
    decode_record_with_category,
    encode_timestamp,
)
from finance_tracker_mcp.core.exceptions import (
    CategoryNotFoundError,
    DatabaseNotFoundError,
    InvalidInputError,
    RecordNotFoundError,
    StoreError,
)
from finance_tracker_mcp.models.category import (
    DEFAULT_CATEGORY_NAME,
    EXPENSE_CATEGORY_NAMES,
    INCOME_CATEGORY_NAMES,
    Category,
    CategoryType,
)
from finance_tracker_mcp.models.record import Record
from finance_tracker_mcp.utils.date_utils import DateRange, utc_now

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".finance-tracker" / "finance.db"

# (name, type) pairs created on startup when missing
DEFAULT_CATEGORIES: Tuple[Tuple[str, CategoryType], ...] = (
    tuple((name, CategoryType.INCOME) for name in INCOME_CATEGORY_NAMES)
    + tuple((name, CategoryType.EXPENSE) for name in EXPENSE_CATEGORY_NAMES)
    + ((DEFAULT_CATEGORY_NAME, CategoryType.EXPENSE),)
)

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS categories (
        id     TEXT    PRIMARY KEY,
        name   TEXT    NOT NULL UNIQUE,
        icon   TEXT,
        color  TEXT,
        type   INTEGER NOT NULL CHECK(type IN (0, 1))
    );

    CREATE TABLE IF NOT EXISTS records (
        id           TEXT PRIMARY KEY,
        amount       REAL NOT NULL,
        category_id  TEXT REFERENCES categories(id) ON DELETE SET NULL,
        date         TEXT NOT NULL,
        description  TEXT CHECK(description IS NULL OR length(description) <= 500)
    );

    CREATE INDEX IF NOT EXISTS idx_records_date        ON records(date);
    CREATE INDEX IF NOT EXISTS idx_records_category_id ON records(category_id);
"""

_RECORD_COLUMNS = "r.id, r.amount, r.category_id, r.date, r.description"
_JOINED_CATEGORY_COLUMNS = (
    "c.id AS cat_id, c.name AS cat_name, c.icon AS cat_icon, "
    "c.color AS cat_color, c.type AS cat_type"
)


def _new_id() -> str:
    return uuid.uuid4().hex


def _validation_message(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        parts.append(f"{location}: {item['msg']}" if location else item["msg"])
    return "; ".join(parts)


def _build(model: Any, **data: Any) -> Any:
    """Instantiate a model, reporting validation failures as client input errors."""
    try:
        return model(**data)
    except ValidationError as e:
        raise InvalidInputError(_validation_message(e)) from e


def _date_clause(date_range: Optional[DateRange]) -> Tuple[str, List[Any]]:
    """
    Translate a date range into a WHERE fragment.

    Returns:
        Tuple of (sql, params); sql is empty when the range is unbounded
    """
    if date_range is None or date_range.is_unbounded:
        return "", []

    conditions = []
    params: List[Any] = []
    if date_range.start is not None:
        conditions.append("r.date >= ?")
        params.append(encode_timestamp(date_range.start))
    if date_range.end is not None:
        conditions.append("r.date <= ?")
        params.append(encode_timestamp(date_range.end))
    return "WHERE " + " AND ".join(conditions), params


class FinanceDatabase:
    """
    Abstraction layer for storing and querying records and categories.

    The connection is opened lazily and reused for the lifetime of the
    instance.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize database handle.

        Args:
            db_path: Path to the SQLite database file.
                    If None, uses ~/.finance-tracker/finance.db.
        """
        if db_path is None:
            db_path = DEFAULT_DB_PATH

        self.db_path = Path(db_path)
        self._conn: Optional[sqlite3.Connection] = None

    def is_available(self) -> bool:
        """Check if the database location exists and is accessible."""
        return self.db_path.parent.is_dir()

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            if not self.is_available():
                raise DatabaseNotFoundError(
                    f"Database directory not found: {self.db_path.parent}"
                )
            try:
                self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
                self._conn.row_factory = sqlite3.Row
                self._conn.execute("PRAGMA foreign_keys = ON")
            except sqlite3.Error as e:
                raise StoreError(f"Cannot open database {self.db_path}: {e}") from e
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Run statements atomically, translating sqlite errors."""
        conn = self.get_connection()
        try:
            yield conn
            conn.commit()
        except sqlite3.IntegrityError as e:
            conn.rollback()
            if "UNIQUE" in str(e):
                raise InvalidInputError("A category with this name already exists") from e
            raise InvalidInputError(str(e)) from e
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(str(e)) from e
        except Exception:
            conn.rollback()
            raise

    def _query(self, sql: str, params: Sequence[Any] = ()) -> List[sqlite3.Row]:
        try:
            return self.get_connection().execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

    def initialize(self) -> None:
        """Create the schema if it does not exist yet."""
        with self._transaction() as conn:
            conn.executescript(_SCHEMA)
        logger.info(f"Database ready at {self.db_path}")

    def seed_default_categories(
        self, defaults: Sequence[Tuple[str, CategoryType]] = DEFAULT_CATEGORIES
    ) -> int:
        """
        Create each default category unless one with that name exists.

        Safe to run repeatedly.

        Returns:
            Number of categories created
        """
        created = 0
        with self._transaction() as conn:
            for name, category_type in defaults:
                cursor = conn.execute(
                    "INSERT OR IGNORE INTO categories(id, name, type) VALUES (?, ?, ?)",
                    (_new_id(), name, int(category_type)),
                )
                created += cursor.rowcount
        logger.info(f"Seeded {created} default categories")
        return created

    # Records

    def get_records(self, date_range: Optional[DateRange] = None) -> List[Record]:
        """
        Get records matching a date range.

        Args:
            date_range: Inclusive range on record date; None matches all

        Returns:
            List of records, sorted by date descending
        """
        where, params = _date_clause(date_range)
        rows = self._query(
            f"SELECT {_RECORD_COLUMNS} FROM records r {where} "
            "ORDER BY r.date DESC, r.rowid DESC",
            params,
        )
        return [decode_record(row) for row in rows]

    def get_records_with_categories(
        self, date_range: Optional[DateRange] = None
    ) -> List[Tuple[Record, Optional[Category]]]:
        """
        Get records matching a date range joined with their category.

        Returns:
            List of (record, category) pairs, category None when unresolved
        """
        where, params = _date_clause(date_range)
        rows = self._query(
            f"SELECT {_RECORD_COLUMNS}, {_JOINED_CATEGORY_COLUMNS} "
            "FROM records r LEFT JOIN categories c ON c.id = r.category_id "
            f"{where} ORDER BY r.date DESC, r.rowid DESC",
            params,
        )
        return [decode_record_with_category(row) for row in rows]

    def get_record(self, record_id: str) -> Optional[Record]:
        rows = self._query(
            f"SELECT {_RECORD_COLUMNS} FROM records r WHERE r.id = ?", (record_id,)
        )
        return decode_record(rows[0]) if rows else None

    def add_record(
        self,
        amount: float,
        category_id: Optional[str],
        date: Optional[Any] = None,
        description: Optional[str] = None,
    ) -> Record:
        """
        Insert a new record.

        Args:
            amount: Signed amount (>= 0 income, < 0 expense)
            category_id: Id of an existing category
            date: Naive UTC datetime; defaults to now
            description: Optional text, at most 500 characters

        Raises:
            InvalidInputError: If a field is invalid or the category is unknown
        """
        record = _build(
            Record,
            record_id=_new_id(),
            amount=amount,
            category_id=category_id,
            date=date if date is not None else utc_now(),
            description=description,
        )
        self._require_category(record.category_id)

        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO records(id, amount, category_id, date, description) "
                "VALUES (?, ?, ?, ?, ?)",
                (
                    record.record_id,
                    record.amount,
                    record.category_id,
                    encode_timestamp(record.date),
                    record.description,
                ),
            )
        logger.debug(f"Created record {record.record_id}")
        return record

    def update_record(self, record_id: str, fields: Dict[str, Any]) -> Record:
        """
        Overwrite only the supplied fields of a record.

        Args:
            record_id: Record to update
            fields: Subset of amount, category_id, date, description

        Raises:
            RecordNotFoundError: If the record does not exist
            InvalidInputError: If a supplied value is invalid
        """
        existing = self.get_record(record_id)
        if existing is None:
            raise RecordNotFoundError(f"Record not found: {record_id}")

        data = existing.model_dump(exclude={"type"})
        data.update(fields)
        record = _build(Record, **data)
        if "category_id" in fields and record.category_id is not None:
            self._require_category(record.category_id)

        with self._transaction() as conn:
            conn.execute(
                "UPDATE records SET amount = ?, category_id = ?, date = ?, description = ? "
                "WHERE id = ?",
                (
                    record.amount,
                    record.category_id,
                    encode_timestamp(record.date),
                    record.description,
                    record_id,
                ),
            )
        logger.debug(f"Updated record {record_id}: {sorted(fields)}")
        return record

    def delete_record(self, record_id: str) -> None:
        """
        Delete a record by id.

        Raises:
            RecordNotFoundError: If the record does not exist
        """
        with self._transaction() as conn:
            cursor = conn.execute("DELETE FROM records WHERE id = ?", (record_id,))
        if cursor.rowcount == 0:
            raise RecordNotFoundError(f"Record not found: {record_id}")
        logger.debug(f"Deleted record {record_id}")

    # Categories

    def get_categories(self) -> List[Category]:
        """Get all categories ordered by name."""
        rows = self._query("SELECT id, name, icon, color, type FROM categories ORDER BY name")
        return [decode_category(row) for row in rows]

    def get_category(self, category_id: str) -> Optional[Category]:
        rows = self._query(
            "SELECT id, name, icon, color, type FROM categories WHERE id = ?",
            (category_id,),
        )
        return decode_category(rows[0]) if rows else None

    def get_category_by_name(self, name: str) -> Optional[Category]:
        rows = self._query(
            "SELECT id, name, icon, color, type FROM categories WHERE name = ?",
            (name,),
        )
        return decode_category(rows[0]) if rows else None

    def _require_category(self, category_id: Optional[str]) -> None:
        if category_id is None:
            raise InvalidInputError("A category is required")
        if self.get_category(category_id) is None:
            raise InvalidInputError(f"Unknown category: {category_id}")

    def add_category(
        self,
        name: str,
        category_type: CategoryType,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Category:
        """
        Insert a new category.

        Raises:
            InvalidInputError: If a field is invalid or the name is taken
        """
        category = _build(
            Category,
            category_id=_new_id(),
            name=name,
            type=category_type,
            icon=icon,
            color=color,
        )
        with self._transaction() as conn:
            conn.execute(
                "INSERT INTO categories(id, name, icon, color, type) VALUES (?, ?, ?, ?, ?)",
                (
                    category.category_id,
                    category.name,
                    category.icon,
                    category.color,
                    int(category.type),
                ),
            )
        logger.debug(f"Created category {category.name} ({category.category_id})")
        return category

    def update_category(self, category_id: str, fields: Dict[str, Any]) -> Category:
        """
        Overwrite only the supplied fields of a category.

        Raises:
            CategoryNotFoundError: If the category does not exist
            InvalidInputError: If a supplied value is invalid or the name is taken
        """
        existing = self.get_category(category_id)
        if existing is None:
            raise CategoryNotFoundError(f"Category not found: {category_id}")

        data = existing.model_dump()
        data.update(fields)
        category = _build(Category, **data)

        with self._transaction() as conn:
            conn.execute(
                "UPDATE categories SET name = ?, icon = ?, color = ?, type = ? WHERE id = ?",
                (
                    category.name,
                    category.icon,
                    category.color,
                    int(category.type),
                    category_id,
                ),
            )
        logger.debug(f"Updated category {category_id}: {sorted(fields)}")
        return category

    def delete_category(self, category_id: str) -> int:
        """
        Delete a category and clear the reference on its records.

        Records are kept; only their category reference is removed.

        Returns:
            Number of records whose category was cleared

        Raises:
            CategoryNotFoundError: If the category does not exist
        """
        with self._transaction() as conn:
            orphaned = conn.execute(
                "UPDATE records SET category_id = NULL WHERE category_id = ?",
                (category_id,),
            ).rowcount
            cursor = conn.execute("DELETE FROM categories WHERE id = ?", (category_id,))
            if cursor.rowcount == 0:
                raise CategoryNotFoundError(f"Category not found: {category_id}")
        logger.debug(f"Deleted category {category_id}, cleared {orphaned} records")
        return orphaned
