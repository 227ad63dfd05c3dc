"""
===============================================================================
TARJETA CRC: error_mapping.py (UseCase Error -> HTTP)
===============================================================================

Responsabilidades:
  - Traducir códigos de error de casos de uso a AppHTTPException.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener el dominio libre de HTTP.

Reglas:
  - NUNCA se propagan excepciones de infraestructura hacia la API.
  - Los use cases devuelven errores tipados (code + message).
  - Código desconocido => 400 (nunca un 200 silencioso).

Colaboradores:
  - application.usecases.* (MovieErrorCode, CategoryErrorCode, UserErrorCode)
  - crosscutting.error_responses
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn

from ....application.usecases.categories import CategoryErrorCode
from ....application.usecases.movies import MovieErrorCode
from ....application.usecases.users import UserErrorCode
from ....crosscutting.error_responses import conflict, not_found, validation_error


def raise_movie_error(error_code: MovieErrorCode, message: str) -> NoReturn:
    if error_code == MovieErrorCode.NOT_FOUND:
        raise not_found(message)
    if error_code == MovieErrorCode.CONFLICT:
        raise conflict(message)
    raise validation_error(message)


def raise_category_error(error_code: CategoryErrorCode, message: str) -> NoReturn:
    """CONFLICT cubre nombre duplicado y categoría en uso."""
    if error_code == CategoryErrorCode.NOT_FOUND:
        raise not_found(message)
    if error_code == CategoryErrorCode.CONFLICT:
        raise conflict(message)
    raise validation_error(message)


def raise_user_error(error_code: UserErrorCode, message: str) -> NoReturn:
    if error_code == UserErrorCode.NOT_FOUND:
        raise not_found(message)
    raise validation_error(message)
