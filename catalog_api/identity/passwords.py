"""
TARJETA CRC: identity/passwords.py

Responsabilidades:
    - Hashear passwords con Argon2 (salted, lento, costo configurable).
    - Verificar sin filtrar el motivo del fallo.

Colaboradores:
    - identity.auth_service (register/login)
    - application.dev_seed_admin, scripts/create_admin.py
"""

from __future__ import annotations

from argon2 import PasswordHasher as _Argon2Hasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError


class PasswordHasher:
    def __init__(
        self, *, time_cost: int = 3, memory_cost: int = 65536, parallelism: int = 4
    ):
        self._hasher = _Argon2Hasher(
            time_cost=time_cost, memory_cost=memory_cost, parallelism=parallelism
        )
        self._dummy_hash: str | None = None

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return self._hasher.verify(password_hash, password)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False

    def burn(self, password: str) -> None:
        """Verificación contra un hash descartable (iguala tiempos con email inexistente)."""
        if self._dummy_hash is None:
            self._dummy_hash = self._hasher.hash("catalog-api-dummy-password")
        self.verify(password, self._dummy_hash)
