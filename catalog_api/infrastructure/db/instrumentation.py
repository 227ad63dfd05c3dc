"""
===============================================================================
CRC CARD: infrastructure/db/instrumentation.py
===============================================================================

Clases:
  - TimedConnection (Proxy)
  - InstrumentedConnectionPool (Facade/Proxy)

Responsabilidades:
  - Medir duración de conn.execute(...) sin tocar repositorios.
  - Loguear slow queries con tipo de statement y tabla, nunca el SQL ni params.
  - Traducir fallas al adquirir conexión a DatabaseConnectionError.

Colaboradores:
  - crosscutting.logger, crosscutting.metrics
  - psycopg_pool.ConnectionPool (pool real)
===============================================================================
"""

from __future__ import annotations

import re
import time
from contextlib import ExitStack, contextmanager
from typing import Any, Iterator

from ...crosscutting.logger import logger
from ...crosscutting.metrics import observe_db_query_duration
from .errors import DatabaseConnectionError

DEFAULT_SLOW_QUERY_SECONDS = 0.25

_TABLE_AFTER_KEYWORD = re.compile(r"\b(?:FROM|INTO|UPDATE)\s+([a-z_]+)", re.IGNORECASE)


def describe_statement(sql: Any) -> tuple[str, str]:
    """(kind, table) de baja cardinalidad: ("SELECT", "movies"), ("SET", "-")."""
    text = str(sql).lstrip()
    kind = text.split(None, 1)[0].upper() if text else "UNKNOWN"
    match = _TABLE_AFTER_KEYWORD.search(text)
    return kind, (match.group(1).lower() if match else "-")


class TimedConnection:
    """Envuelve execute(); transaction(), commit(), etc. van directo al conn real."""

    def __init__(self, inner_conn, *, slow_query_seconds: float) -> None:
        self._conn = inner_conn
        self._slow = slow_query_seconds

    def execute(self, sql, *args, **kwargs):
        started = time.perf_counter()
        try:
            return self._conn.execute(sql, *args, **kwargs)
        finally:
            self._observe(sql, time.perf_counter() - started)

    def _observe(self, sql, elapsed: float) -> None:
        kind, table = describe_statement(sql)
        observe_db_query_duration(kind, elapsed)
        if elapsed >= self._slow:
            logger.warning(
                "slow DB query",
                extra={"kind": kind, "table": table, "seconds": round(elapsed, 4)},
            )

    def __getattr__(self, item: str):
        return getattr(self._conn, item)


class InstrumentedConnectionPool:
    """
    Mismo contrato que psycopg_pool.ConnectionPool para los repositorios
    (`with pool.connection() as conn:`), pero conn es un TimedConnection.
    """

    def __init__(
        self, inner_pool, *, slow_query_seconds: float = DEFAULT_SLOW_QUERY_SECONDS
    ) -> None:
        self._pool = inner_pool
        self._slow_seconds = slow_query_seconds

    @contextmanager
    def connection(self, *args, **kwargs) -> Iterator[TimedConnection]:
        with ExitStack() as stack:
            try:
                conn = stack.enter_context(self._pool.connection(*args, **kwargs))
            except Exception as exc:
                raise DatabaseConnectionError("Could not acquire a DB connection.") from exc
            # R: errores del bloque llegan al pool real (rollback + devolución).
            yield TimedConnection(conn, slow_query_seconds=self._slow_seconds)

    def __getattr__(self, item: str):
        return getattr(self._pool, item)
