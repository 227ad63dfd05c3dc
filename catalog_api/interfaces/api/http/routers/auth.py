"""
===============================================================================
TARJETA CRC: routers/auth.py
===============================================================================

Responsabilidades:
    - POST /auth/register, /auth/login, /auth/refresh.
    - Traducir AuthError -> HTTP (400 / 401 / 409).
    - Login: mismo 401 para email inexistente y password incorrecto.

Colaboradores:
    - identity.auth_service.AuthService (vía container.get_auth_service)
    - identity.access_control (parseo Bearer para refresh)
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header

from .....container import get_auth_service
from .....crosscutting.error_responses import conflict, unauthorized, validation_error
from .....crosscutting.metrics import record_auth_operation
from .....identity.access_control import (
    MSG_INVALID_TOKEN,
    bearer_unauthorized,
    extract_bearer_token,
)
from .....identity.auth_service import (
    AuthService,
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidRegistrationError,
    InvalidTokenError,
    UserNotFoundError,
)
from ..schemas.auth import AuthResponse, LoginReq, RegisterReq

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    req: RegisterReq,
    auth_service: AuthService = Depends(get_auth_service),
):
    if not req.email or not req.password or not req.name:
        record_auth_operation("register", "invalid")
        raise validation_error(InvalidRegistrationError.message)

    # R: pre-chequeo del handler; el store re-valida al insertar.
    if auth_service.user_exists(req.email):
        record_auth_operation("register", "conflict")
        raise conflict(EmailAlreadyRegisteredError.message)

    try:
        result = auth_service.register(req.email, req.password, req.name)
    except InvalidRegistrationError as exc:
        record_auth_operation("register", "invalid")
        raise validation_error(exc.message) from None
    except EmailAlreadyRegisteredError as exc:
        record_auth_operation("register", "conflict")
        raise conflict(exc.message) from None

    record_auth_operation("register", "ok")
    return AuthResponse.from_result(result)


@router.post("/login", response_model=AuthResponse)
def login(
    req: LoginReq,
    auth_service: AuthService = Depends(get_auth_service),
):
    if not req.email.strip() or not req.password:
        raise validation_error("Email and password are required")

    try:
        result = auth_service.login(req.email, req.password)
    except InvalidCredentialsError as exc:
        record_auth_operation("login", "rejected")
        raise unauthorized(exc.message) from None

    record_auth_operation("login", "ok")
    return AuthResponse.from_result(result)


@router.post("/refresh", response_model=AuthResponse)
def refresh(
    authorization: str | None = Header(None, alias="Authorization"),
    auth_service: AuthService = Depends(get_auth_service),
):
    token = extract_bearer_token(authorization)
    try:
        result = auth_service.refresh_token(token)
    except InvalidTokenError:
        record_auth_operation("refresh", "rejected")
        raise bearer_unauthorized(MSG_INVALID_TOKEN, "invalid_token") from None
    except UserNotFoundError:
        # R: mismo 401 que un token inválido (no revela existencia de cuentas).
        record_auth_operation("refresh", "rejected")
        raise bearer_unauthorized(MSG_INVALID_TOKEN, "unknown_user") from None

    record_auth_operation("refresh", "ok")
    return AuthResponse.from_result(result)
