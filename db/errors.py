"""
db/errors.py
------------
Errors raised by the database layer.

Driver failures (connection refused, constraint violations, syntax
errors) are never wrapped: they surface as the psycopg2 exception the
driver raised. ``DriverError`` names their common base so callers can
tell them apart from ``NotConfiguredError``.
"""

from psycopg2 import Error as DriverError


class NotConfiguredError(RuntimeError):
    """Raised when an operation is attempted without a live connection pool."""

    def __init__(self, message: str = "pool not configured"):
        super().__init__(message)


class EmptyPayloadError(ValueError):
    """Raised when insert/update is given a payload with no columns."""

    def __init__(self, operation: str, table: str):
        super().__init__(f"{operation} on '{table}' requires at least one column")
        self.operation = operation
        self.table = table


__all__ = ["DriverError", "EmptyPayloadError", "NotConfiguredError"]
