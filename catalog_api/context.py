"""
===============================================================================
TARJETA CRC: catalog_api/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Guardar request_id / method / path del request en curso (ContextVar).
  - Exponerlo como dict plano para el logger.

Colaboradores:
  - crosscutting.middleware.RequestContextMiddleware: set al entrar, clear al salir.
  - crosscutting.logger: get_context_dict() en cada línea.

Restricciones:
  - La identidad autenticada NO vive acá: viaja tipada como AuthContext
    (identity/access_control.py).
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class RequestContext:
    request_id: str = ""
    method: str = ""
    path: str = ""


_current: ContextVar[Optional[RequestContext]] = ContextVar(
    "catalog_request_context", default=None
)


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> RequestContext:
    ctx = RequestContext(request_id=request_id or "", method=method or "", path=path or "")
    _current.set(ctx)
    return ctx


def current_request_context() -> Optional[RequestContext]:
    return _current.get()


def get_context_dict() -> dict[str, str]:
    """Contexto actual sin claves vacías ({} fuera de un request)."""
    ctx = _current.get()
    if ctx is None:
        return {}
    return {key: value for key, value in asdict(ctx).items() if value}


def clear_context() -> None:
    _current.set(None)
