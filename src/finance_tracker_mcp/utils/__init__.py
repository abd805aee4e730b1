"""
Utility functions for the finance tracker MCP server.
"""

from finance_tracker_mcp.utils.date_utils import (
    DateRange,
    build_date_range,
    build_period_range,
    get_month_range,
    parse_date_value,
    parse_period,
)

__all__ = [
    "DateRange",
    "build_date_range",
    "build_period_range",
    "parse_date_value",
    "parse_period",
    "get_month_range",
]
