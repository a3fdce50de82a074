"""
models/query.py
---------------
Value objects passed between the SQL builder and the executor.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Statement:
    """
    A SQL template paired with its positional bind parameters.

    Attributes:
        sql: Statement text using the driver's ``%s`` placeholders.
        params: Values for the placeholders, in placeholder order.
    """
    sql: str
    params: tuple = ()

    def __str__(self) -> str:
        return self.sql


@dataclass
class QueryResult:
    """Rows returned by a statement plus the driver's affected-row count."""
    rows: list[dict[str, Any]] = field(default_factory=list)
    rowcount: int = -1

    def first(self):
        """Returns the first row, or None when the statement matched nothing."""
        return self.rows[0] if self.rows else None
