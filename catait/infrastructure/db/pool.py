"""
===============================================================================
CRC CARD: infrastructure/db/pool.py
===============================================================================

Component:
  PostgreSQL connection pool (process singleton)

Responsibilities:
  - Initialize, expose and close the connection pool.
  - Configure connections (statement_timeout).
  - Return an instrumented pool (observability without touching repos).

Collaborators:
  - psycopg_pool.ConnectionPool
  - infrastructure/db/instrumentation.InstrumentedConnectionPool

Principles:
  - Fail fast (double init, use before init)
  - A single global pool
===============================================================================
"""

from __future__ import annotations

import threading
from typing import Optional

from psycopg_pool import ConnectionPool

from ...crosscutting.config import get_settings
from ...crosscutting.logger import logger
from .errors import PoolAlreadyInitializedError, PoolNotInitializedError
from .instrumentation import InstrumentedConnectionPool

_pool: Optional[InstrumentedConnectionPool] = None
_pool_lock = threading.Lock()


def _configure_connection(conn) -> None:
    """Runs once for every new connection created by the pool."""
    timeout_ms = int(get_settings().db_statement_timeout_ms)
    if timeout_ms > 0:
        conn.execute(f"SET statement_timeout = {timeout_ms}")
        conn.commit()


def init_pool(database_url: str, min_size: int, max_size: int):
    """Initialize the pool once per process."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            raise PoolAlreadyInitializedError("The pool is already initialized.")

        logger.info(
            "initializing DB pool",
            extra={"min_size": min_size, "max_size": max_size},
        )

        real_pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            configure=_configure_connection,
            open=True,
        )

        settings = get_settings()
        _pool = InstrumentedConnectionPool(
            real_pool,
            slow_query_seconds=settings.db_slow_query_seconds,
            healthcheck_on_acquire=settings.db_healthcheck_on_acquire,
        )

        logger.info("DB pool initialized")
        return _pool


def get_pool():
    if _pool is None:
        raise PoolNotInitializedError(
            "Pool not initialized. Call init_pool() first."
        )
    return _pool


def close_pool() -> None:
    """Close the pool (idempotent)."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            logger.info("closing DB pool")
            try:
                _pool.close()
            finally:
                _pool = None
            logger.info("DB pool closed")


def reset_pool() -> None:
    """Drop the singleton; used by tests."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            try:
                _pool.close()
            except Exception:
                logger.warning("error closing DB pool during reset", exc_info=True)
        _pool = None
