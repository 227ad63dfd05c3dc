# =============================================================================
# FILE: application/dev_seed_admin.py
# =============================================================================
"""
===============================================================================
TASK: Admin bootstrap (dev seed local-only + E2E override + CLI)
===============================================================================

Qué es:
    El registro público siempre crea usuarios no-admin; este módulo es el
    único camino para obtener is_admin=true:
      - ensure_admin_user(): crea o promueve un usuario a admin (idempotente).
      - ensure_dev_admin(): lo invoca al arrancar si DEV_SEED_ADMIN está activo.
      - scripts/create_admin.py: lo invoca desde la línea de comandos.

Seguridad:
    - Guard estricto: sin E2E solo corre en app_env local/development.
    - E2E_SEED_ADMIN=true habilita otros envs (CI).

CRC:
    Component: ensure_dev_admin / ensure_admin_user
    Collaborators:
      - UserRepository (puerto)
      - PasswordHasher
      - Settings + env mapping
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Mapping

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger
from ..domain.entities import User
from ..domain.repositories import UserRepository
from ..identity.auth_service import normalize_email
from ..identity.passwords import PasswordHasher

_ENV_FLAG_E2E_SEED_ADMIN: Final[str] = "E2E_SEED_ADMIN"
_ENV_E2E_ADMIN_EMAIL: Final[str] = "E2E_ADMIN_EMAIL"
_ENV_E2E_ADMIN_PASSWORD: Final[str] = "E2E_ADMIN_PASSWORD"

_DEFAULT_E2E_EMAIL: Final[str] = "admin@local"
_DEFAULT_E2E_PASSWORD: Final[str] = "admin1234"

_SEED_ALLOWED_ENVS: Final[frozenset[str]] = frozenset({"local", "development"})


@dataclass(frozen=True, slots=True)
class _AdminSeedPlan:
    """Resolved seed configuration (no I/O)."""

    enabled: bool
    is_e2e: bool
    email: str
    password: str
    name: str
    force_reset: bool


def _parse_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def _resolve_seed_plan(settings: Settings, env: Mapping[str, str]) -> _AdminSeedPlan:
    is_e2e = _parse_bool(env.get(_ENV_FLAG_E2E_SEED_ADMIN))
    enabled = bool(settings.dev_seed_admin) or is_e2e

    if is_e2e:
        return _AdminSeedPlan(
            enabled=True,
            is_e2e=True,
            email=env.get(_ENV_E2E_ADMIN_EMAIL, _DEFAULT_E2E_EMAIL),
            password=env.get(_ENV_E2E_ADMIN_PASSWORD, _DEFAULT_E2E_PASSWORD),
            name="E2E Admin",
            force_reset=False,
        )

    return _AdminSeedPlan(
        enabled=enabled,
        is_e2e=False,
        email=settings.dev_seed_admin_email,
        password=settings.dev_seed_admin_password,
        name=settings.dev_seed_admin_name,
        force_reset=bool(settings.dev_seed_admin_force_reset),
    )


def _assert_allowed_environment(settings: Settings, *, is_e2e: bool) -> None:
    if is_e2e:
        return

    env = (settings.app_env or "").strip().lower()
    if env not in _SEED_ALLOWED_ENVS:
        raise RuntimeError(
            f"FATAL: DEV_SEED_ADMIN is enabled but APP_ENV is '{env}' "
            "(must be local or development)."
        )


def ensure_admin_user(
    *,
    user_repo: UserRepository,
    password_hasher: PasswordHasher,
    email: str,
    password: str,
    name: str,
    force_reset: bool = False,
) -> User:
    """
    Crea el admin si falta; si existe lo promueve (y resetea password con
    force_reset). Idempotente.
    """
    email = normalize_email(email)
    if not email or not password:
        raise ValueError("admin email/password must not be empty")

    existing = user_repo.get_user_by_email(email)
    if existing is None:
        user = user_repo.create_user(
            email=email,
            password_hash=password_hasher.hash(password),
            name=(name or "Admin").strip(),
            is_admin=True,
        )
        logger.info("admin bootstrap: user created", extra={"user_id": user.id})
        return user

    user = existing
    if force_reset:
        user = user_repo.update_password(user.id, password_hasher.hash(password)) or user
        logger.info("admin bootstrap: password reset", extra={"user_id": user.id})

    if not user.is_admin:
        user = user_repo.set_admin(user.id, True) or user
        logger.info("admin bootstrap: user promoted", extra={"user_id": user.id})
    return user


def ensure_dev_admin(
    settings: Settings,
    *,
    user_repo: UserRepository,
    password_hasher: PasswordHasher,
    env: Mapping[str, str],
) -> User | None:
    """No-op salvo que DEV_SEED_ADMIN o E2E_SEED_ADMIN estén activos."""
    plan = _resolve_seed_plan(settings, env)
    if not plan.enabled:
        return None

    _assert_allowed_environment(settings, is_e2e=plan.is_e2e)

    logger.info(
        "dev seed admin: ensuring admin user",
        extra={"force_reset": plan.force_reset, "is_e2e": plan.is_e2e},
    )
    return ensure_admin_user(
        user_repo=user_repo,
        password_hasher=password_hasher,
        email=plan.email,
        password=plan.password,
        name=plan.name,
        force_reset=plan.force_reset,
    )
