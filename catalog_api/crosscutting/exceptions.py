# catalog_api/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas del backend (errores internos)
===============================================================================

Objetivo
--------
Excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message "humana" (el detalle crudo queda en original_error y en logs)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  CatalogError + subclases

Responsabilidades:
  - Estandarizar errores internos que luego se mapean a HTTP
  - Generar error_id para rastreo

Colaboradores:
  - api/exception_handlers.py (mapea a AppHTTPException sanitizada)
  - infrastructure/repositories/postgres/* (levantan DatabaseError / DuplicateKeyError)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class CatalogError(Exception):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      CatalogError

    Responsabilidades:
      - Base para errores internos del sistema
      - Proveer error_code + error_id + message

    Colaboradores:
      - api/exception_handlers.py
    ----------------------------------------------------------------------------
    """

    error_code: str = "CATALOG_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(CatalogError):
    """Errores de DB (conexión, query, timeout, pool)."""

    error_code: str = "DATABASE_ERROR"


class DuplicateKeyError(DatabaseError):
    """
    Violación de unicidad reportada por el store.

    El store es la autoridad final: los use cases la traducen a CONFLICT.
    """

    error_code: str = "DUPLICATE_KEY"

    def __init__(
        self,
        message: str,
        *,
        constraint: str | None = None,
        original_error: Exception | None = None,
    ):
        super().__init__(message, original_error=original_error)
        self.constraint = constraint


class ReferencedRowError(DatabaseError):
    """La fila sigue referenciada por otra tabla (violación de FK)."""

    error_code: str = "REFERENCED_ROW"
