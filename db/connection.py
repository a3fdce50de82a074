"""
db/connection.py
----------------
Manages a PostgreSQL connection pool and runs statements against it.
Uses psycopg2's ThreadedConnectionPool; blocking driver calls run in a
worker thread so callers can await them concurrently.

Calling disconnect() while statements are still running is not
supported: those statements may fail or complete, and their connections
are closed rather than returned to the pool.
"""

import asyncio
import time
from typing import Optional

import psycopg2
from psycopg2 import pool, extras

from config import PoolConfig
from db.errors import NotConfiguredError
from models.query import QueryResult, Statement
from utils.logger import get_logger

logger = get_logger(__name__)


class PgConnection:
    """Owns one connection pool and executes statements on it."""

    def __init__(self, config: PoolConfig):
        """
        Create the connection pool.

        Args:
            config: Connection and pool settings.

        Raises:
            psycopg2.OperationalError: If the database is unreachable while
                opening the initial connections.
        """
        self.config = config
        self.debug = config.debug
        self._idle_timeout: Optional[float] = (
            config.idle_timeout_millis / 1000 if config.idle_timeout_millis else None
        )
        self._last_used: dict[int, float] = {}
        try:
            self._pool: Optional[pool.ThreadedConnectionPool] = pool.ThreadedConnectionPool(
                config.min_pool_size,
                config.max_pool_size,
                **config.connect_kwargs(),
            )
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool for '{config.database}': {e}")
            raise
        logger.info(f"Database connection pool initialized for '{config.database}'.")

    async def __aenter__(self) -> "PgConnection":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.disconnect()

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    def log(self, message: str) -> None:
        if self.debug:
            logger.info(message)

    def _require_pool(self) -> pool.ThreadedConnectionPool:
        pg_pool = self._pool
        if pg_pool is None:
            raise NotConfiguredError()
        return pg_pool

    def _is_stale(self, conn) -> bool:
        last_used = self._last_used.pop(id(conn), None)
        return (
            self._idle_timeout is not None
            and last_used is not None
            and time.monotonic() - last_used > self._idle_timeout
        )

    def _acquire(self, pg_pool: pool.ThreadedConnectionPool):
        """Borrow a connection, replacing any that are closed or have idled too long."""
        conn = pg_pool.getconn()
        while self._is_stale(conn) or conn.closed:
            logger.debug("Replacing closed or idle pooled connection.")
            pg_pool.putconn(conn, close=True)
            conn = pg_pool.getconn()
        return conn

    def _release(self, pg_pool: pool.ThreadedConnectionPool, conn) -> None:
        if pg_pool.closed:
            # disconnect() ran while this statement was in flight
            conn.close()
            return
        if conn.closed:
            self._last_used.pop(id(conn), None)
            pg_pool.putconn(conn, close=True)
            return
        self._last_used[id(conn)] = time.monotonic()
        pg_pool.putconn(conn)
        if conn.closed:
            # the pool closes connections returned above minconn
            self._last_used.pop(id(conn), None)

    def _run(self, pg_pool: pool.ThreadedConnectionPool, statement: Statement) -> QueryResult:
        conn = self._acquire(pg_pool)
        try:
            with conn.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(statement.sql, statement.params or None)
                rows = [dict(row) for row in cur.fetchall()] if cur.description is not None else []
                rowcount = cur.rowcount
            conn.commit()
            return QueryResult(rows=rows, rowcount=rowcount)
        except Exception as e:
            if not conn.closed:
                conn.rollback()
            # str(e) can echo bound values in the server DETAIL line
            pgcode = getattr(e, "pgcode", None)
            logger.error(f"Query failed ({type(e).__name__}, pgcode={pgcode}) | sql = {statement.sql}")
            raise
        finally:
            self._release(pg_pool, conn)

    async def execute(self, statement: Statement) -> QueryResult:
        """
        Run a statement on a pooled connection and commit it.

        Returns:
            QueryResult with the rows as dicts ([] when the statement
            returns none) and the driver's affected-row count.

        Raises:
            NotConfiguredError: If disconnect() has already been called.
            psycopg2.Error: Whatever the driver reported, unchanged.
        """
        pg_pool = self._require_pool()
        self.log(f"query: sql = {statement.sql}")
        return await asyncio.to_thread(self._run, pg_pool, statement)

    async def query(self, sql: str, *params) -> list[dict]:
        """
        Execute arbitrary SQL with positional parameters.
        This is the most general operation and returns the rows, if any.
        """
        result = await self.execute(Statement(sql, tuple(params)))
        return result.rows

    def disconnect(self) -> None:
        """Close all connections in the pool. Safe to call more than once."""
        self.log("disconnecting")
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            self._last_used.clear()
            logger.info("Database connection pool closed.")
