"""
db/sql_builder.py
-----------------
Builds the SQL for each table helper operation.

Every function returns a Statement whose ``params`` line up with the
``%s`` placeholders of its ``sql``. Table and column names are inserted
verbatim and must come from trusted code; they are neither quoted nor
validated.
"""

from typing import Any, Mapping

from db.errors import EmptyPayloadError
from models.query import Statement

PLACEHOLDER = "%s"


def build_delete_all(table: str) -> Statement:
    return Statement(f"DELETE FROM {table}")


def build_delete_by_id(table: str, record_id: Any) -> Statement:
    """Requires the table to have a column named "id"."""
    return Statement(f"DELETE FROM {table} WHERE id = {PLACEHOLDER}", (record_id,))


def build_get_all(table: str) -> Statement:
    return Statement(f"SELECT * FROM {table}")


def build_get_by_id(table: str, record_id: Any) -> Statement:
    """Requires the table to have a column named "id"."""
    return Statement(f"SELECT * FROM {table} WHERE id = {PLACEHOLDER}", (record_id,))


def build_insert(table: str, payload: Mapping[str, Any]) -> Statement:
    """
    Build an INSERT returning the generated id.

    Columns follow the payload's key order and the params follow the
    same order, so the n-th placeholder always receives the n-th value.

    Raises:
        EmptyPayloadError: If the payload has no keys.
    """
    if not payload:
        raise EmptyPayloadError("insert", table)
    columns = list(payload)
    cols = ", ".join(columns)
    placeholders = ", ".join(PLACEHOLDER for _ in columns)
    sql = f"INSERT INTO {table} ({cols}) VALUES ({placeholders}) RETURNING id"
    return Statement(sql, tuple(payload[col] for col in columns))


def build_update_by_id(table: str, record_id: Any, payload: Mapping[str, Any]) -> Statement:
    """
    Build an UPDATE of the row with the given id.

    Values are bound like every other statement; nothing from the payload
    is rendered into the SQL text except the column names. The id is the
    last parameter.

    Raises:
        EmptyPayloadError: If the payload has no keys.
    """
    if not payload:
        raise EmptyPayloadError("update", table)
    columns = list(payload)
    assignments = ", ".join(f"{col} = {PLACEHOLDER}" for col in columns)
    sql = f"UPDATE {table} SET {assignments} WHERE id = {PLACEHOLDER}"
    params = tuple(payload[col] for col in columns) + (record_id,)
    return Statement(sql, params)
