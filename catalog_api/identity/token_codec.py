"""
===============================================================================
TARJETA CRC: identity/token_codec.py
===============================================================================

Módulo:
    Token Codec (JWT HS256)

Responsabilidades:
    - Emitir tokens firmados con claims de identidad + iat/exp.
    - Parsear tokens distinguiendo firma inválida, expirado y malformado.

Colaboradores:
    - identity.auth_service: único consumidor.
    - container: construye el codec con el secreto explícito de Settings.

Decisiones:
    - El secreto se recibe por constructor (nunca estado global) para poder
      testear con secretos distintos.
    - Expiración fija: iat + ttl (24h por defecto). Sin expiración deslizante.
    - Claims: sub (user id como string), email, is_admin, iat, exp.
    - Externamente los tres errores colapsan en "invalid or expired token".
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt

JWT_ALGORITHM: str = "HS256"
DEFAULT_TOKEN_TTL = timedelta(hours=24)

CLAIM_SUB: str = "sub"
CLAIM_EMAIL: str = "email"
CLAIM_IS_ADMIN: str = "is_admin"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"

_REQUIRED_CLAIMS = [CLAIM_SUB, CLAIM_EMAIL, CLAIM_IS_ADMIN, CLAIM_IAT, CLAIM_EXP]


class TokenError(Exception):
    """Base: el token no es aceptable."""


class InvalidSignatureError(TokenError):
    pass


class ExpiredTokenError(TokenError):
    pass


class MalformedTokenError(TokenError):
    pass


@dataclass(frozen=True, slots=True)
class Identity:
    """Campos de usuario que viajan en el token."""

    user_id: int
    email: str
    is_admin: bool


@dataclass(frozen=True, slots=True)
class TokenClaims:
    user_id: int
    email: str
    is_admin: bool
    issued_at: datetime
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      TokenCodec

    Responsabilidades:
      - issue(identity) -> token
      - parse(token) -> TokenClaims | TokenError

    Colaboradores:
      - PyJWT
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        secret: str,
        *,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not secret:
            raise ValueError("token signing secret must not be empty")
        if ttl <= timedelta(0):
            raise ValueError("token ttl must be positive")
        self._secret = secret
        self._ttl = ttl
        self._clock = clock

    @property
    def ttl_seconds(self) -> int:
        return int(self._ttl.total_seconds())

    def issue(self, identity: Identity) -> str:
        now = self._clock()
        payload: dict[str, object] = {
            CLAIM_SUB: str(identity.user_id),
            CLAIM_EMAIL: identity.email,
            CLAIM_IS_ADMIN: bool(identity.is_admin),
            CLAIM_IAT: int(now.timestamp()),
            CLAIM_EXP: int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def parse(self, token: str) -> TokenClaims:
        """
        Errores:
          - InvalidSignatureError: la firma no verifica con el secreto
          - ExpiredTokenError: now >= exp
          - MalformedTokenError: estructura o claims no decodificables
        """
        if not token:
            raise MalformedTokenError("empty token")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise ExpiredTokenError("token expired") from exc
        except jwt.InvalidSignatureError as exc:
            raise InvalidSignatureError("signature verification failed") from exc
        except jwt.InvalidTokenError as exc:
            raise MalformedTokenError(str(exc)) from exc

        return self._claims_from(payload)

    @staticmethod
    def _claims_from(payload: dict) -> TokenClaims:
        sub = payload.get(CLAIM_SUB)
        email = payload.get(CLAIM_EMAIL)
        is_admin = payload.get(CLAIM_IS_ADMIN)
        iat = payload.get(CLAIM_IAT)
        exp = payload.get(CLAIM_EXP)

        if not isinstance(sub, str) or not sub.isdigit():
            raise MalformedTokenError("invalid subject claim")
        if not isinstance(email, str) or not email:
            raise MalformedTokenError("invalid email claim")
        if not isinstance(is_admin, bool):
            raise MalformedTokenError("invalid is_admin claim")
        if not isinstance(iat, (int, float)) or not isinstance(exp, (int, float)):
            raise MalformedTokenError("invalid timestamp claims")
        if exp <= iat:
            raise MalformedTokenError("expiry must be after issued-at")

        return TokenClaims(
            user_id=int(sub),
            email=email,
            is_admin=is_admin,
            issued_at=datetime.fromtimestamp(iat, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        )
