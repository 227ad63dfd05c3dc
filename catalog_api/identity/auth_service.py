"""
===============================================================================
TARJETA CRC: identity/auth_service.py
===============================================================================

Módulo:
    Auth Service (registro, login, refresh, validación)

Responsabilidades:
    - Orquestar Credential Store (UserRepository) + TokenCodec + PasswordHasher.
    - Registrar usuarios no-admin y emitir su primer token.
    - Login sin diferenciar "email inexistente" de "password incorrecto".
    - Refresh leyendo SIEMPRE los datos persistidos (promociones/renombres).
    - is_admin re-leído del storage en cada llamada (soporta revocación).

Colaboradores:
    - domain.repositories.UserRepository
    - identity.token_codec.TokenCodec
    - identity.passwords.PasswordHasher
    - crosscutting.exceptions.DuplicateKeyError (unicidad autoritativa del store)

Máquina de estados (por request):
    Anonymous -> Authenticated(user_id) -> Anonymous
    Sin sesión en servidor: cada request se re-autentica con su bearer token.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ..crosscutting.exceptions import DuplicateKeyError
from ..crosscutting.logger import logger
from ..domain.entities import User
from ..domain.repositories import UserRepository
from .passwords import PasswordHasher
from .token_codec import Identity, TokenCodec, TokenError

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128
MAX_NAME_LENGTH = 100
MAX_EMAIL_LENGTH = 254


class AuthError(Exception):
    """Base de errores tipados del Auth Service."""

    message: str = "Authentication failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidRegistrationError(AuthError):
    message = "Email, password, and name are required"


class EmailAlreadyRegisteredError(AuthError):
    message = "Email already registered"


class InvalidCredentialsError(AuthError):
    message = "Invalid email or password"


class InvalidTokenError(AuthError):
    message = "Invalid or expired token"


class UserNotFoundError(AuthError):
    message = "User not found"


@dataclass(frozen=True, slots=True)
class AuthResult:
    token: str
    expires_in: int
    user: User


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


class AuthService:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      AuthService

    Responsabilidades:
      - register / login / refresh_token / validate_token / is_admin / user_exists

    Colaboradores:
      - UserRepository, TokenCodec, PasswordHasher
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        users: UserRepository,
        codec: TokenCodec,
        hasher: PasswordHasher,
    ):
        self._users = users
        self._codec = codec
        self._hasher = hasher

    # ------------------------------------------------------------------
    # Registro / login
    # ------------------------------------------------------------------

    def user_exists(self, email: str) -> bool:
        return self._users.exists_by_email(normalize_email(email))

    def register(self, email: str, password: str, name: str) -> AuthResult:
        email = normalize_email(email)
        name = (name or "").strip()
        self._validate_registration(email, password, name)

        # R: pre-chequeo consultivo; la constraint UNIQUE del store decide.
        if self._users.exists_by_email(email):
            raise EmailAlreadyRegisteredError()

        try:
            user = self._users.create_user(
                email=email,
                password_hash=self._hasher.hash(password),
                name=name,
                is_admin=False,
            )
        except DuplicateKeyError as exc:
            raise EmailAlreadyRegisteredError() from exc

        logger.info("user registered", extra={"user_id": user.id})
        return self._issue(user)

    def login(self, email: str, password: str) -> AuthResult:
        email = normalize_email(email)
        user = self._users.get_user_by_email(email) if email else None

        if user is None:
            self._hasher.burn(password or "")
            logger.warning("login rejected")
            raise InvalidCredentialsError()

        if not self._hasher.verify(password or "", user.password_hash):
            logger.warning("login rejected", extra={"user_id": user.id})
            raise InvalidCredentialsError()

        return self._issue(user)

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def validate_token(self, token: str) -> int:
        """Pura lectura: devuelve el user_id del token o InvalidTokenError."""
        try:
            return self._codec.parse(token).user_id
        except TokenError as exc:
            logger.warning(
                "token rejected", extra={"reason": type(exc).__name__}
            )
            raise InvalidTokenError() from exc

    def refresh_token(self, token: str) -> AuthResult:
        user_id = self.validate_token(token)
        user = self._users.get_user_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return self._issue(user)

    def is_admin(self, user_id: int) -> bool:
        user = self._users.get_user_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user.is_admin

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _issue(self, user: User) -> AuthResult:
        token = self._codec.issue(
            Identity(user_id=user.id, email=user.email, is_admin=user.is_admin)
        )
        return AuthResult(token=token, expires_in=self._codec.ttl_seconds, user=user)

    @staticmethod
    def _validate_registration(email: str, password: str, name: str) -> None:
        if not email or not password or not name:
            raise InvalidRegistrationError()
        if len(email) > MAX_EMAIL_LENGTH or "@" not in email.strip("@"):
            raise InvalidRegistrationError("Invalid email address")
        if not MIN_PASSWORD_LENGTH <= len(password) <= MAX_PASSWORD_LENGTH:
            raise InvalidRegistrationError(
                f"Password must be between {MIN_PASSWORD_LENGTH} and "
                f"{MAX_PASSWORD_LENGTH} characters"
            )
        if len(name) > MAX_NAME_LENGTH:
            raise InvalidRegistrationError(
                f"Name must be at most {MAX_NAME_LENGTH} characters"
            )
