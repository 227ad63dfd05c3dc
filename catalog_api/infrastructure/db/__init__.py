"""Infra DB: pool + transacciones + errores tipados."""

from .errors import (
    DatabaseConnectionError,
    DatabasePoolError,
    PoolAlreadyInitializedError,
    PoolNotInitializedError,
)
from .pool import close_pool, get_pool, init_pool, ping_database, transaction

__all__ = [
    "init_pool",
    "get_pool",
    "close_pool",
    "ping_database",
    "transaction",
    "DatabasePoolError",
    "PoolAlreadyInitializedError",
    "PoolNotInitializedError",
    "DatabaseConnectionError",
]
