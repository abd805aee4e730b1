"""
Core functionality for the finance tracker MCP server.
"""

from finance_tracker_mcp.core.decoder import (
    decode_category,
    decode_record,
    decode_timestamp,
    encode_timestamp,
)
from finance_tracker_mcp.core.exceptions import (
    CategoryNotFoundError,
    DatabaseNotFoundError,
    FinanceTrackerError,
    InvalidInputError,
    NotFoundError,
    RecordNotFoundError,
    StoreError,
)

__all__ = [
    "decode_category",
    "decode_record",
    "decode_timestamp",
    "encode_timestamp",
    "FinanceTrackerError",
    "InvalidInputError",
    "NotFoundError",
    "RecordNotFoundError",
    "CategoryNotFoundError",
    "StoreError",
    "DatabaseNotFoundError",
]
