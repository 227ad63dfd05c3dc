"""
===============================================================================
TARJETA CRC: catalog_api/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Traducir excepciones de la aplicación a respuestas {"error": ...}.
  - Centralizar logging de errores con request_id + error_id.
  - Sanitizar: ningún detalle interno (SQL, driver, stacktrace) llega al cliente.

Patrones aplicados:
  - Exception Mapping (Presentation Layer).
  - Cualquier excepción no tipada -> INTERNAL_ERROR (con logging completo).

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, render_error
  - crosscutting.exceptions: CatalogError y derivadas
  - infrastructure.db.errors: DatabasePoolError (pool caído / sin conexión)
===============================================================================
"""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    render_error,
    request_validation_handler,
)
from ..crosscutting.exceptions import CatalogError
from ..crosscutting.logger import logger
from ..infrastructure.db.errors import DatabasePoolError

INTERNAL_ERROR_MESSAGE = "Internal server error"

_STATUS_CODES: dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    409: ErrorCode.CONFLICT,
    413: ErrorCode.PAYLOAD_TOO_LARGE,
    503: ErrorCode.SERVICE_UNAVAILABLE,
}


def _request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Errores internos tipados (DB, constraint sin mapear) -> 500 sanitizado."""
    request_id = _request_id_from(request)
    logger.error(
        "service error",
        extra={
            "code": exc.error_code,
            "error_id": exc.error_id,
            "detail": exc.message,
            "cause": repr(exc.original_error) if exc.original_error else None,
            "request_id": request_id,
        },
    )
    return render_error(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        message=INTERNAL_ERROR_MESSAGE,
        request_id=request_id,
        errors=[{"error_id": exc.error_id}],
    )


async def pool_error_handler(request: Request, exc: DatabasePoolError) -> JSONResponse:
    request_id = _request_id_from(request)
    logger.error(
        "database unavailable",
        extra={"error_type": type(exc).__name__, "request_id": request_id},
    )
    return render_error(
        status_code=503,
        code=ErrorCode.SERVICE_UNAVAILABLE,
        message="Service temporarily unavailable: database",
        request_id=request_id,
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """404 de ruta, 405, etc. con el mismo shape de error."""
    if isinstance(exc, AppHTTPException):
        return await app_exception_handler(request, exc)

    code = _STATUS_CODES.get(exc.status_code, ErrorCode.INTERNAL_ERROR)
    message = str(exc.detail) if exc.status_code < 500 else INTERNAL_ERROR_MESSAGE
    return render_error(
        status_code=exc.status_code,
        code=code,
        message=message,
        request_id=_request_id_from(request),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Fallback para excepciones no tipadas.

    - Log completo (stacktrace) con error_id.
    - Respuesta genérica en todos los entornos.
    """
    request_id = _request_id_from(request)
    error = CatalogError(INTERNAL_ERROR_MESSAGE, original_error=exc)

    logger.error(
        "unhandled exception",
        exc_info=exc,
        extra={"error_id": error.error_id, "request_id": request_id},
    )
    return render_error(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR,
        message=INTERNAL_ERROR_MESSAGE,
        request_id=request_id,
        errors=[{"error_id": error.error_id}],
    )


def register_exception_handlers(app) -> None:
    """
    Registra handlers en la app FastAPI.

    Importante:
      - AppHTTPException antes que HTTPException genérica.
      - Exception genérica al final como fallback.
    """
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(DatabasePoolError, pool_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers", "INTERNAL_ERROR_MESSAGE"]
