"""
CRC CARD: infrastructure/db/errors.py

Errores tipados del pool de conexiones: "no inicializado", "ya inicializado",
"no se pudo adquirir conexión". Evitan RuntimeError genéricos.
"""


class DatabasePoolError(Exception):
    """Base de errores de pool de base de datos."""


class PoolAlreadyInitializedError(DatabasePoolError):
    """Se intentó inicializar el pool más de una vez."""


class PoolNotInitializedError(DatabasePoolError):
    """Se intentó usar el pool sin init_pool()."""


class DatabaseConnectionError(DatabasePoolError):
    """Error al adquirir o validar una conexión del pool."""
