"""
MCP tool definitions for finance tracker data.

Exposes record/category storage and the aggregation reports through the
Model Context Protocol.
"""

import logging
from typing import Any, Dict, List, Optional

from finance_tracker_mcp.core.database import FinanceDatabase
from finance_tracker_mcp.core.exceptions import InvalidInputError
from finance_tracker_mcp.models.category import CategoryType
from finance_tracker_mcp.tools.aggregation import (
    aggregate_by_category,
    total_balance,
    total_expense,
    total_income,
)
from finance_tracker_mcp.utils.date_utils import (
    DateRange,
    build_date_range,
    build_period_range,
    parse_date_value,
)

logger = logging.getLogger(__name__)

# Wire argument name -> keyword argument name, per tool
ARGUMENT_ALIASES: Dict[str, Dict[str, str]] = {
    "new_record": {"categoryId": "category_id"},
    "edit_record": {"id": "record_id", "categoryId": "category_id"},
    "delete_record": {"id": "record_id"},
    "new_category": {"type": "category_type"},
    "edit_category": {"id": "category_id", "type": "category_type"},
    "delete_category": {"id": "category_id"},
    # get_balance takes its range from startDate/endDate, not start_date/end_date
    "get_balance": {"startDate": "start_date", "endDate": "end_date"},
}

_RECORD_FIELDS = {"amount", "category_id", "category", "date", "description"}
_CATEGORY_FIELDS = {"name", "icon", "color", "category_type"}


def _dump(model: Any) -> Dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


def _require(value: Any, field: str) -> Any:
    if value is None or value == "":
        raise InvalidInputError(f"{field} is required")
    return value


def _parse_amount(value: Any) -> float:
    _require(value, "amount")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"amount must be a number, got {value!r}")
    return float(value)


def _parse_category_type(value: Any) -> CategoryType:
    """Accept 0 (expense) or 1 (income); anything else is rejected."""
    if isinstance(value, str) and value.strip() in ("0", "1"):
        value = int(value)
    if isinstance(value, bool) or value not in (0, 1):
        raise InvalidInputError(f"type must be 0 (expense) or 1 (income), got {value!r}")
    return CategoryType(value)


class FinanceTools:
    """Collection of MCP tools for managing and reporting on finance records."""

    def __init__(self, database: FinanceDatabase):
        """
        Initialize tools with a database connection.

        Args:
            database: FinanceDatabase instance
        """
        self.db = database

    def call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """
        Invoke a tool with wire-format arguments.

        Arguments not declared in the tool's schema are ignored.

        Raises:
            InvalidInputError: If the tool name is unknown
        """
        schema = next((s for s in create_tool_schemas() if s["name"] == name), None)
        if schema is None:
            raise InvalidInputError(f"Unknown tool: {name}")

        declared = schema["inputSchema"]["properties"]
        aliases = ARGUMENT_ALIASES.get(name, {})
        kwargs = {}
        for key, value in (arguments or {}).items():
            if key not in declared:
                logger.debug(f"Ignoring undeclared argument {key!r} for {name}")
                continue
            kwargs[aliases.get(key, key)] = value

        return getattr(self, name)(**kwargs)

    def _resolve_range(
        self,
        start_date: Any = None,
        end_date: Any = None,
        period: Optional[str] = None,
    ) -> DateRange:
        if period:
            return build_period_range(period)
        return build_date_range(start_date, end_date)

    def _resolve_category(self, category_id: Any, category: Any) -> Optional[str]:
        """
        Turn a categoryId or a category id/name into a category id.

        Returns:
            Category id, or None when neither is given
        """
        if category_id is not None:
            return category_id
        if category is None:
            return None

        if self.db.get_category(category) is not None:
            return category
        by_name = self.db.get_category_by_name(category)
        if by_name is None:
            raise InvalidInputError(f"Unknown category: {category}")
        return by_name.category_id

    # Records

    def get_records(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        period: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        List records in a date range.

        Args:
            start_date: Include records dated >= this
            end_date: Include records dated <= this
            period: Period shorthand (this_month, last_30_days, ytd, etc.)

        Returns:
            Dict with record count and records sorted by date descending
        """
        records = self.db.get_records(self._resolve_range(start_date, end_date, period))
        return {
            "count": len(records),
            "records": [_dump(record) for record in records],
        }

    def new_record(
        self,
        amount: Any = None,
        category_id: Optional[str] = None,
        category: Optional[str] = None,
        date: Any = None,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a record.

        Args:
            amount: Signed amount (>= 0 income, < 0 expense)
            category_id: Id of an existing category
            category: Category id or name, used when category_id is absent
            date: Record date; defaults to now
            description: Optional text, at most 500 characters

        Returns:
            The created record

        Raises:
            InvalidInputError: If amount or category is missing or invalid
        """
        record = self.db.add_record(
            amount=_parse_amount(amount),
            category_id=_require(self._resolve_category(category_id, category), "category"),
            date=parse_date_value(date),
            description=description,
        )
        return _dump(record)

    def edit_record(self, record_id: Optional[str] = None, **fields: Any) -> Dict[str, Any]:
        """
        Update the supplied fields of a record; other fields are untouched.

        Supplying a null category clears the record's category.

        Raises:
            InvalidInputError: If a supplied value is invalid
            RecordNotFoundError: If the record does not exist
        """
        _require(record_id, "id")
        unknown = set(fields) - _RECORD_FIELDS
        if unknown:
            raise InvalidInputError(f"Unknown record fields: {sorted(unknown)}")

        update: Dict[str, Any] = {}
        if "amount" in fields:
            update["amount"] = _parse_amount(fields["amount"])
        if "category_id" in fields or "category" in fields:
            update["category_id"] = self._resolve_category(
                fields.get("category_id"), fields.get("category")
            )
        if "date" in fields:
            update["date"] = _require(parse_date_value(fields["date"]), "date")
        if "description" in fields:
            update["description"] = fields["description"]

        return _dump(self.db.update_record(record_id, update))

    def delete_record(self, record_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Delete a record.

        Raises:
            RecordNotFoundError: If the record does not exist
        """
        self.db.delete_record(_require(record_id, "id"))
        return {"message": "record deleted"}

    # Categories

    def get_categories(self) -> Dict[str, Any]:
        """List all categories."""
        categories = self.db.get_categories()
        return {
            "count": len(categories),
            "categories": [_dump(category) for category in categories],
        }

    def new_category(
        self,
        name: Optional[str] = None,
        category_type: Any = None,
        icon: Optional[str] = None,
        color: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a category.

        Raises:
            InvalidInputError: If name is missing or taken, or type is not 0/1
        """
        category = self.db.add_category(
            name=_require(name, "name"),
            category_type=_parse_category_type(category_type),
            icon=icon,
            color=color,
        )
        return _dump(category)

    def edit_category(self, category_id: Optional[str] = None, **fields: Any) -> Dict[str, Any]:
        """
        Update the supplied fields of a category.

        Raises:
            InvalidInputError: If a supplied value is invalid
            CategoryNotFoundError: If the category does not exist
        """
        _require(category_id, "id")
        unknown = set(fields) - _CATEGORY_FIELDS
        if unknown:
            raise InvalidInputError(f"Unknown category fields: {sorted(unknown)}")

        update = {key: value for key, value in fields.items() if key != "category_type"}
        if "name" in update:
            _require(update["name"], "name")
        if "category_type" in fields:
            update["type"] = _parse_category_type(fields["category_type"])

        return _dump(self.db.update_category(category_id, update))

    def delete_category(self, category_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Delete a category, clearing the category of its records.

        Raises:
            CategoryNotFoundError: If the category does not exist
        """
        cleared = self.db.delete_category(_require(category_id, "id"))
        return {"message": "category deleted", "records_updated": cleared}

    # Reports

    def get_record_count_by_category(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        period: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Count and sum records per category, split by income/expense.

        Returns:
            One {"type", "categories"} entry per type that has records
        """
        rows = self.db.get_records_with_categories(
            self._resolve_range(start_date, end_date, period)
        )
        return aggregate_by_category(rows)

    def get_income(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        period: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Sum of income (amount >= 0) in a date range."""
        records = self.db.get_records(self._resolve_range(start_date, end_date, period))
        return {"total_income": total_income(records)}

    def get_expense(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        period: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Sum of expenses (amount < 0) in a date range."""
        records = self.db.get_records(self._resolve_range(start_date, end_date, period))
        return {"total_expense": total_expense(records)}

    def get_balance(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Net balance (sum of all amounts) in a date range.

        Over the wire the range comes from startDate/endDate.
        """
        records = self.db.get_records(self._resolve_range(start_date, end_date))
        return {"total_balance": total_balance(records)}


_DATE_PROPERTY = {
    "type": "string",
    "description": "ISO-8601 date or timestamp (YYYY-MM-DD or YYYY-MM-DDTHH:MM:SS)",
}

_RANGE_PROPERTIES = {
    "start_date": dict(_DATE_PROPERTY, description="Include records dated >= this (inclusive)"),
    "end_date": dict(_DATE_PROPERTY, description="Include records dated <= this (inclusive)"),
    "period": {
        "type": "string",
        "description": (
            "Period shorthand overriding start_date/end_date: this_month, "
            "last_month, last_7_days, last_30_days, last_90_days, ytd, "
            "this_year, last_year"
        ),
    },
}


def create_tool_schemas() -> List[Dict[str, Any]]:
    """
    Create MCP tool schemas for all tools.

    Returns:
        List of tool schema definitions
    """
    return [
        {
            "name": "get_records",
            "description": "List records in an optional date range, newest first.",
            "inputSchema": {"type": "object", "properties": dict(_RANGE_PROPERTIES)},
        },
        {
            "name": "get_categories",
            "description": "List all categories.",
            "inputSchema": {"type": "object", "properties": {}},
        },
        {
            "name": "new_record",
            "description": (
                "Create a record. Positive or zero amounts are income, "
                "negative amounts are expenses."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "amount": {"type": "number", "description": "Signed amount"},
                    "categoryId": {"type": "string", "description": "Category id"},
                    "category": {
                        "type": "string",
                        "description": "Category id or name (used when categoryId is absent)",
                    },
                    "date": dict(_DATE_PROPERTY, description="Record date (default: now)"),
                    "description": {
                        "type": "string",
                        "description": "Optional note (max 500 characters)",
                        "maxLength": 500,
                    },
                },
                "required": ["amount"],
            },
        },
        {
            "name": "edit_record",
            "description": "Update the given fields of a record; other fields are kept.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "id": {"type": "string", "description": "Record id"},
                    "amount": {"type": "number", "description": "Signed amount"},
                    "categoryId": {
                        "type": ["string", "null"],
                        "description": "Category id (null clears it)",
                    },
                    "category": {
                        "type": ["string", "null"],
                        "description": "Category id or name (null clears it)",
                    },
                    "date": _DATE_PROPERTY,
                    "description": {
                        "type": ["string", "null"],
                        "description": "Note (max 500 characters)",
                        "maxLength": 500,
                    },
                },
                "required": ["id"],
            },
        },
        {
            "name": "delete_record",
            "description": "Delete a record by id.",
            "inputSchema": {
                "type": "object",
                "properties": {"id": {"type": "string", "description": "Record id"}},
                "required": ["id"],
            },
        },
        {
            "name": "new_category",
            "description": "Create a category. type is 0 for expense, 1 for income.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "Unique category name"},
                    "type": {"type": "integer", "enum": [0, 1]},
                    "icon": {"type": "string"},
                    "color": {"type": "string"},
                },
                "required": ["name", "type"],
            },
        },
        {
            "name": "edit_category",
            "description": "Update the given fields of a category.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "id": {"type": "string", "description": "Category id"},
                    "name": {"type": "string"},
                    "type": {"type": "integer", "enum": [0, 1]},
                    "icon": {"type": ["string", "null"]},
                    "color": {"type": ["string", "null"]},
                },
                "required": ["id"],
            },
        },
        {
            "name": "delete_category",
            "description": (
                "Delete a category. Its records are kept with their category cleared."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {"id": {"type": "string", "description": "Category id"}},
                "required": ["id"],
            },
        },
        {
            "name": "get_record_count_by_category",
            "description": (
                "Count and sum records per category, grouped into income and "
                "expense by the sign of each amount. Records without a category "
                "are not included."
            ),
            "inputSchema": {"type": "object", "properties": dict(_RANGE_PROPERTIES)},
        },
        {
            "name": "get_income",
            "description": "Total income (amounts >= 0) in an optional date range.",
            "inputSchema": {"type": "object", "properties": dict(_RANGE_PROPERTIES)},
        },
        {
            "name": "get_expense",
            "description": "Total expenses (amounts < 0) in an optional date range.",
            "inputSchema": {"type": "object", "properties": dict(_RANGE_PROPERTIES)},
        },
        {
            "name": "get_balance",
            "description": (
                "Net balance (sum of all amounts) in an optional date range given "
                "as startDate/endDate."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "startDate": dict(_DATE_PROPERTY, description="Include records dated >= this"),
                    "endDate": dict(_DATE_PROPERTY, description="Include records dated <= this"),
                },
            },
        },
    ]
