"""
repositories/table_repo.py
--------------------------
Generic table helpers: fetch, insert, update and delete rows of any
table by its "id" column.
"""

from typing import Any, Mapping, Optional

from config import PoolConfig
from db import sql_builder
from db.connection import PgConnection
from db.errors import NotConfiguredError
from utils.logger import get_logger

logger = get_logger(__name__)


class TableRepository:
    """CRUD helpers over a PgConnection. Table names are trusted input."""

    def __init__(self, connection: PgConnection):
        self.connection = connection

    @classmethod
    def from_config(cls, config: PoolConfig) -> "TableRepository":
        """Create the connection pool and wrap it."""
        return cls(PgConnection(config))

    async def __aenter__(self) -> "TableRepository":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.disconnect()

    def _require_connection(self) -> None:
        if not self.connection.is_connected:
            raise NotConfiguredError()

    async def get_all(self, table: str) -> list[dict]:
        """Gets all records from a given table."""
        result = await self.connection.execute(sql_builder.build_get_all(table))
        return result.rows

    async def get_by_id(self, table: str, record_id: Any) -> Optional[dict]:
        """
        Gets a record from a given table by id.

        Returns:
            The row as a dict, or None if no row has that id.
        """
        result = await self.connection.execute(sql_builder.build_get_by_id(table, record_id))
        return result.first()

    async def insert(self, table: str, payload: Mapping[str, Any]) -> Any:
        """
        Inserts a record into a given table.

        Args:
            table: Target table; must have a generated "id" column.
            payload: Column name -> value.

        Returns:
            The id generated for the new row.

        Raises:
            NotConfiguredError: If the connection was already closed.
            EmptyPayloadError: If payload is empty.
        """
        self._require_connection()
        result = await self.connection.execute(sql_builder.build_insert(table, payload))
        row = result.first()
        new_id = row["id"] if row else None
        logger.debug(f"Inserted row {new_id} into {table}")
        return new_id

    async def update_by_id(self, table: str, record_id: Any, payload: Mapping[str, Any]) -> int:
        """
        Updates the given columns of a record by id.

        Returns:
            Number of rows updated (0 if the id does not exist).
        """
        self._require_connection()
        statement = sql_builder.build_update_by_id(table, record_id, payload)
        result = await self.connection.execute(statement)
        return result.rowcount

    async def delete_by_id(self, table: str, record_id: Any) -> int:
        """Deletes a record by id. Returns the number of rows deleted."""
        result = await self.connection.execute(sql_builder.build_delete_by_id(table, record_id))
        return result.rowcount

    async def delete_all(self, table: str) -> int:
        """Deletes all records from a given table. Returns the number deleted."""
        result = await self.connection.execute(sql_builder.build_delete_all(table))
        return result.rowcount

    async def query(self, sql: str, *params) -> list[dict]:
        return await self.connection.query(sql, *params)

    def disconnect(self) -> None:
        self.connection.disconnect()
