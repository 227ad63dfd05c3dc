"""
===============================================================================
TARJETA CRC: identity/access_control.py
===============================================================================

Módulo:
    Access Control (dependencias FastAPI componibles)

Responsabilidades:
    - Etapa de autenticación: Authorization: Bearer <token> -> AuthContext.
    - Etapa de autorización admin: re-lee is_admin del storage en cada request.
    - Permitir rutas públicas / autenticadas / autenticadas+admin sin duplicar
      el parseo del token.

Colaboradores:
    - identity.auth_service.AuthService (validate_token / is_admin)
    - container.get_auth_service (inyectable vía dependency_overrides)
    - crosscutting.error_responses (401/403/500)
    - crosscutting.metrics.record_auth_rejection

Notas:
    - La identidad viaja tipada (AuthContext) por Depends(), no como clave
      suelta en un dict de contexto.
    - Las dependencias son sync: FastAPI las corre en el threadpool y la
      lectura de is_admin no bloquea el event loop.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from fastapi import Depends, Header, Request

from ..container import get_auth_service
from ..crosscutting.error_responses import (
    AppHTTPException,
    forbidden,
    internal_error,
    unauthorized,
)
from ..crosscutting.logger import logger
from ..crosscutting.metrics import record_auth_rejection
from .auth_service import AuthService, InvalidTokenError

BEARER_SCHEME = "bearer"

MSG_MISSING_HEADER = "Missing authorization header"
MSG_BAD_HEADER = "Invalid authorization header format"
MSG_INVALID_TOKEN = "Invalid or expired token"
MSG_ADMIN_REQUIRED = "Admin access required"


@dataclass(frozen=True, slots=True)
class AuthContext:
    """Identidad resuelta por la etapa de autenticación."""

    user_id: int


def bearer_unauthorized(detail: str, reason: str) -> AppHTTPException:
    """401 con challenge Bearer; cuenta el rechazo por motivo."""
    record_auth_rejection(reason)
    exc = unauthorized(detail)
    exc.headers = {"WWW-Authenticate": "Bearer"}
    return exc


def extract_bearer_token(authorization: str | None) -> str:
    """
    Extrae el token de `Authorization: Bearer <token>`.

    Esquema case-insensitive; exactamente un token después del esquema.
    Header ausente o malformado -> 401.
    """
    if authorization is None or not authorization.strip():
        raise bearer_unauthorized(MSG_MISSING_HEADER, "missing_token")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        raise bearer_unauthorized(MSG_BAD_HEADER, "invalid_header")
    return parts[1]


def authenticate(
    request: Request,
    authorization: str | None = Header(None, alias="Authorization"),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthContext:
    """Etapa de autenticación (obligatoria para rutas protegidas)."""
    token = extract_bearer_token(authorization)
    try:
        user_id = auth_service.validate_token(token)
    except InvalidTokenError:
        raise bearer_unauthorized(MSG_INVALID_TOKEN, "invalid_token") from None

    context = AuthContext(user_id=user_id)
    request.state.auth = context
    return context


def authorize_admin(
    request: Request,
    _authenticated: AuthContext = Depends(authenticate),
    auth_service: AuthService = Depends(get_auth_service),
) -> AuthContext:
    """
    Etapa de autorización admin (corre siempre después de authenticate).

    Lee la identidad que dejó la etapa anterior en request.state.auth.
    Cualquier falla de is_admin (incluido usuario borrado) -> 500.
    """
    context = getattr(request.state, "auth", None)
    if not isinstance(context, AuthContext):
        raise bearer_unauthorized("Unauthorized", "missing_identity")

    try:
        is_admin = auth_service.is_admin(context.user_id)
    except Exception:
        logger.exception(
            "admin check failed", extra={"user_id": context.user_id}
        )
        raise internal_error() from None

    if not is_admin:
        record_auth_rejection("forbidden")
        logger.warning("admin access denied", extra={"user_id": context.user_id})
        raise forbidden(MSG_ADMIN_REQUIRED)
    return context


def require_user() -> Callable[..., AuthContext]:
    """Dependency FastAPI: requiere usuario autenticado."""
    return authenticate


def require_admin() -> Callable[..., AuthContext]:
    """Dependency FastAPI: requiere usuario autenticado con is_admin=true."""
    return authorize_admin
