"""
MCP tools and the aggregation engine behind the reports.
"""

from finance_tracker_mcp.tools.aggregation import (
    aggregate_by_category,
    total_balance,
    total_expense,
    total_income,
)
from finance_tracker_mcp.tools.tools import FinanceTools, create_tool_schemas

__all__ = [
    "FinanceTools",
    "create_tool_schemas",
    "aggregate_by_category",
    "total_income",
    "total_expense",
    "total_balance",
]
