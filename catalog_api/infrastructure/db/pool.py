"""
===============================================================================
CRC CARD: infrastructure/db/pool.py
===============================================================================

Componente:
  Pool de conexiones PostgreSQL (singleton) + helper transaccional

Responsabilidades:
  - Inicializar, exponer y cerrar el pool de conexiones.
  - Configurar conexiones: statement_timeout.
  - Proveer transaction(): handle transaccional con commit o rollback
    garantizado en toda salida.

Colaboradores:
  - psycopg_pool.ConnectionPool
  - infrastructure/db/instrumentation.InstrumentedConnectionPool

Principios:
  - Fail-fast (doble init, uso sin init)
===============================================================================
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg
from psycopg_pool import ConnectionPool

from ...crosscutting.logger import logger
from .errors import (
    DatabaseConnectionError,
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
)
from .instrumentation import (
    DEFAULT_SLOW_QUERY_SECONDS,
    InstrumentedConnectionPool,
    TimedConnection,
)

_pool: Optional[InstrumentedConnectionPool] = None
_pool_lock = threading.Lock()


def _connection_configurator(statement_timeout_ms: int):
    def configure(conn) -> None:
        # R: cota superior por statement (requests abandonados no retienen la DB).
        if statement_timeout_ms > 0:
            conn.execute(f"SET statement_timeout = {int(statement_timeout_ms)}")
            conn.commit()

    return configure


def init_pool(
    database_url: str,
    min_size: int,
    max_size: int,
    *,
    statement_timeout_ms: int = 0,
    slow_query_seconds: float = DEFAULT_SLOW_QUERY_SECONDS,
) -> InstrumentedConnectionPool:
    """Inicializa el pool (una vez por proceso)."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            raise PoolAlreadyInitializedError("DB pool already initialized.")

        logger.info(
            "initializing DB pool",
            extra={"min_size": min_size, "max_size": max_size},
        )
        real_pool = ConnectionPool(
            conninfo=database_url,
            min_size=min_size,
            max_size=max_size,
            configure=_connection_configurator(statement_timeout_ms),
            open=True,
        )
        _pool = InstrumentedConnectionPool(real_pool, slow_query_seconds=slow_query_seconds)
        return _pool


def get_pool() -> InstrumentedConnectionPool:
    if _pool is None:
        raise PoolNotInitializedError("DB pool not initialized. Call init_pool() first.")
    return _pool


def close_pool() -> None:
    """Cierra el pool (idempotente)."""
    global _pool

    with _pool_lock:
        if _pool is not None:
            logger.info("closing DB pool")
            try:
                _pool.close()
            finally:
                _pool = None


def ping_database() -> bool:
    """SELECT 1 sobre el pool (readiness). False si no hay pool o la DB no responde."""
    if _pool is None:
        return False
    try:
        with _pool.connection() as conn:
            conn.execute("SELECT 1")
    except (psycopg.Error, DatabaseConnectionError) as exc:
        logger.warning("DB ping failed", extra={"error_type": type(exc).__name__})
        return False
    return True


@contextmanager
def transaction(pool=None) -> Iterator[TimedConnection]:
    """
    Handle transaccional: commit al salir sin error, rollback ante cualquier
    excepción (que se re-lanza).
    """
    active_pool = pool if pool is not None else get_pool()
    with active_pool.connection() as conn:
        with conn.transaction():
            yield conn
