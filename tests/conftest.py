"""Shared test fixtures for the postgresql-easy test suite."""

from unittest.mock import MagicMock, patch

import pytest

from config import PoolConfig


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def pool_config():
    return PoolConfig(database="demo", host="localhost", user="root", password="")


@pytest.fixture
def mock_cursor():
    """Mock RealDictCursor that returns no rows."""
    cursor = MagicMock()
    cursor.fetchall.return_value = []
    cursor.description = [("id",)]
    cursor.rowcount = 0
    return cursor


@pytest.fixture
def mock_conn(mock_cursor):
    """Mock psycopg2 connection whose cursor() context yields mock_cursor."""
    conn = MagicMock()
    conn.closed = 0
    conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    return conn


@pytest.fixture
def mock_pool(mock_conn):
    """Patch ThreadedConnectionPool so every getconn() hands out mock_conn."""
    pg_pool = MagicMock()
    pg_pool.closed = False
    pg_pool.getconn.return_value = mock_conn
    with patch("db.connection.pool.ThreadedConnectionPool", return_value=pg_pool) as pool_cls:
        pg_pool.pool_cls = pool_cls
        yield pg_pool


@pytest.fixture
def pg(pool_config, mock_pool):
    """PgConnection backed by the mocked pool."""
    from db.connection import PgConnection
    return PgConnection(pool_config)
