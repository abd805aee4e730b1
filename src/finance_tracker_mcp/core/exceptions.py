"""
Custom exceptions for the finance tracker MCP server.
"""


class FinanceTrackerError(Exception):
    """Base exception for finance tracker errors."""

    status = 500


class InvalidInputError(FinanceTrackerError):
    """Raised when a request is missing a required field or carries an invalid value."""

    status = 400


class NotFoundError(FinanceTrackerError):
    """Raised when an update or delete targets an unknown identifier."""

    status = 404


class RecordNotFoundError(NotFoundError):
    """Raised when a record id does not exist."""
    pass


class CategoryNotFoundError(NotFoundError):
    """Raised when a category id does not exist."""
    pass


class StoreError(FinanceTrackerError):
    """Raised when the underlying database fails."""
    pass


class DatabaseNotFoundError(StoreError):
    """Raised when the database location cannot be found."""
    pass
