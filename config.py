"""
config.py
---------
Central configuration module. Loads connection settings from the
environment (and the .env file, if present) into a PoolConfig.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name, "")
    return int(raw) if raw.strip() else default


@dataclass
class PoolConfig:
    """
    Settings for a PostgreSQL connection pool.

    Attributes:
        database: Name of the database to use. Always required.
        host: Server host (driver default: local socket / localhost).
        port: Server port (driver default: 5432).
        user: Role to authenticate as.
        password: Password, if the server requires one.
        max_pool_size: Maximum number of connections kept by the pool.
        min_pool_size: Connections opened eagerly when the pool is created.
        idle_timeout_millis: Time a pooled connection may sit unused before
            it is replaced. 0 or None disables the check.
        debug: Log the SQL text of every statement.
    """
    database: str
    host: Optional[str] = None
    port: Optional[int] = None
    user: Optional[str] = None
    password: Optional[str] = None
    max_pool_size: int = 10
    min_pool_size: int = 1
    idle_timeout_millis: Optional[int] = 30000
    debug: bool = False

    def __post_init__(self):
        if not self.database:
            raise ValueError("PoolConfig.database is required")
        if self.min_pool_size > self.max_pool_size:
            raise ValueError("min_pool_size cannot exceed max_pool_size")

    @classmethod
    def from_env(cls) -> "PoolConfig":
        """Build a config from DB_* environment variables."""
        return cls(
            database=os.getenv("DB_NAME", ""),
            host=os.getenv("DB_HOST") or None,
            port=_env_int("DB_PORT", None),
            user=os.getenv("DB_USER") or None,
            password=os.getenv("DB_PASS") or None,
            max_pool_size=_env_int("DB_MAX_POOL_SIZE", 10),
            min_pool_size=_env_int("DB_MIN_POOL_SIZE", 1),
            idle_timeout_millis=_env_int("DB_IDLE_TIMEOUT_MS", 30000),
            debug=_env_bool("DB_DEBUG"),
        )

    def connect_kwargs(self) -> dict:
        """Keyword arguments for psycopg2.connect, leaving unset options to the driver."""
        kwargs = {
            "dbname": self.database,
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
        }
        return {k: v for k, v in kwargs.items() if v is not None}
