"""
TARJETA CRC: infrastructure/repositories/postgres/_sql.py

Responsabilidades:
  - Ejecutar SQL parametrizado con manejo de errores uniforme.
  - Traducir violaciones de unicidad del store a DuplicateKeyError.
  - Envolver cualquier otro fallo en DatabaseError con logging estructurado.

Colaboradores:
  - infrastructure.db.pool (pool global, transaction())
  - repositorios postgres.user / postgres.movie / postgres.category
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, TypeVar

from psycopg import errors as pg_errors

from ....crosscutting.exceptions import (
    DatabaseError,
    DuplicateKeyError,
    ReferencedRowError,
)
from ....crosscutting.logger import logger
from ...db.pool import get_pool, transaction

T = TypeVar("T")


def resolve_pool(pool=None):
    """Pool inyectado (tests) o el global."""
    return pool if pool is not None else get_pool()


def run(
    operation: Callable[[Any], T],
    *,
    log_msg: str,
    log_extra: dict[str, object],
    pool=None,
    atomic: bool = False,
) -> T:
    """
    Ejecuta `operation(conn)` dentro de una conexión del pool.
    Con atomic=True corre dentro de transaction() (commit o rollback).

    - UniqueViolation -> DuplicateKeyError (la capa superior responde 409)
    - ForeignKeyViolation -> ReferencedRowError
    - Cualquier otro error -> DatabaseError (detalle solo en logs)
    """
    try:
        active_pool = resolve_pool(pool)
        if atomic:
            with transaction(active_pool) as conn:
                return operation(conn)
        with active_pool.connection() as conn:
            return operation(conn)
    except pg_errors.UniqueViolation as exc:
        constraint = getattr(getattr(exc, "diag", None), "constraint_name", None)
        logger.info(
            "unique constraint rejected write",
            extra={**log_extra, "constraint": constraint},
        )
        raise DuplicateKeyError(
            f"{log_msg}: duplicate key", constraint=constraint, original_error=exc
        ) from exc
    except pg_errors.ForeignKeyViolation as exc:
        logger.info("foreign key rejected write", extra=log_extra)
        raise ReferencedRowError(
            f"{log_msg}: referenced row", original_error=exc
        ) from exc
    except DatabaseError:
        raise
    except Exception as exc:
        logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
        raise DatabaseError(log_msg, original_error=exc) from exc


def fetchone(
    *,
    query: str,
    params: Iterable[object] = (),
    log_msg: str,
    log_extra: dict[str, object],
    pool=None,
) -> tuple | None:
    return run(
        lambda conn: conn.execute(query, tuple(params)).fetchone(),
        log_msg=log_msg,
        log_extra=log_extra,
        pool=pool,
    )


def fetchall(
    *,
    query: str,
    params: Iterable[object] = (),
    log_msg: str,
    log_extra: dict[str, object],
    pool=None,
) -> list[tuple]:
    return run(
        lambda conn: conn.execute(query, tuple(params)).fetchall(),
        log_msg=log_msg,
        log_extra=log_extra,
        pool=pool,
    )
