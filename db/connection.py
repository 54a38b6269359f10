"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.

One ``ConnectionPool`` is created when the process starts (``init_pool``)
and closed when it exits (``close_pool``). Repositories receive it through
their constructor and borrow connections with ``pool.connection()``.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2 import pool, extras

from config import (
    DATABASE_URL,
    DB_CONNECT_TIMEOUT,
    DB_POOL_MAX,
    DB_POOL_MIN,
    DB_SSLMODE,
)
from utils.errors import ConfigurationError
from utils.logger import get_logger

logger = get_logger(__name__)

NOT_CONFIGURED_MESSAGE = "Database not configured. Please set DATABASE_URL environment variable."


class ConnectionPool:
    """
    Thread-safe wrapper around psycopg2's ThreadedConnectionPool.

    FastAPI runs synchronous handlers on a worker threadpool that is larger
    than the pool, so borrowers queue on a semaphore for up to
    ``connect_timeout`` seconds instead of failing once ``max_conn``
    connections are out.
    """

    def __init__(self, dsn: str, min_conn: int = 1, max_conn: int = 10,
                 sslmode: str = "", connect_timeout: int = 10):
        if not dsn:
            raise ConfigurationError(NOT_CONFIGURED_MESSAGE)
        kwargs = {"connect_timeout": connect_timeout}
        if sslmode:
            kwargs["sslmode"] = sslmode
        self._pool = pool.ThreadedConnectionPool(min_conn, max_conn, dsn, **kwargs)
        self._slots = threading.BoundedSemaphore(max_conn)
        self._wait_timeout = connect_timeout or None

    def getconn(self):
        """
        Borrow a connection, waiting while all of them are in use.

        Raises:
            psycopg2.pool.PoolError: If none is returned within the timeout.
        """
        if not self._slots.acquire(timeout=self._wait_timeout):
            logger.error("Timed out waiting for a free database connection")
            raise pool.PoolError("connection pool exhausted")
        try:
            return self._pool.getconn()
        except Exception:
            self._slots.release()
            raise

    def putconn(self, conn) -> None:
        try:
            self._pool.putconn(conn)
        finally:
            self._slots.release()

    @contextmanager
    def connection(self) -> Iterator:
        """
        Borrow a connection for the duration of a ``with`` block.

        Commits when the block exits normally, rolls back when it raises,
        and always hands the connection back to the pool.
        """
        conn = self.getconn()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self.putconn(conn)

    @staticmethod
    def dict_cursor(conn):
        """Cursor whose rows are column-name keyed dicts."""
        return conn.cursor(cursor_factory=extras.RealDictCursor)

    def ping(self) -> None:
        """Round-trip a trivial query; raises psycopg2.Error when the database is down."""
        with self.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()

    def closeall(self) -> None:
        self._pool.closeall()


_pool: Optional[ConnectionPool] = None


def init_pool(min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX) -> ConnectionPool:
    """
    Initialize the process-wide connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.

    Raises:
        ConfigurationError: If DATABASE_URL is not set.
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return _pool
    try:
        _pool = ConnectionPool(
            DATABASE_URL, min_conn, max_conn,
            sslmode=DB_SSLMODE, connect_timeout=DB_CONNECT_TIMEOUT,
        )
        logger.info("Database connection pool initialized successfully.")
    except ConfigurationError:
        logger.error("DATABASE_URL not set - database operations will fail")
        raise
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise
    return _pool


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")
