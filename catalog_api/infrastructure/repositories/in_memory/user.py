"""
============================================================
TARJETA CRC: infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Credential Store en memoria (tests / local dev).
  - Replicar la unicidad de email del store (DuplicateKeyError).
  - Ordering determinístico alineado con Postgres: created_at DESC, id DESC.

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Entidades inmutables: los updates reemplazan el registro (dataclasses.replace).
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from itertools import count
from threading import Lock
from typing import Dict, List, Optional, Tuple

from ....crosscutting.exceptions import DuplicateKeyError
from ....domain.entities import User, utcnow


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[int, User] = {}
        self._ids = count(1)

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return self._find_by_email(email)

    def exists_by_email(self, email: str) -> bool:
        with self._lock:
            return self._find_by_email(email) is not None

    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        name: str,
        is_admin: bool = False,
    ) -> User:
        with self._lock:
            if self._find_by_email(email) is not None:
                raise DuplicateKeyError(
                    "InMemoryUserRepository: duplicate email",
                    constraint="uq_users_email",
                )
            now = utcnow()
            user = User(
                id=next(self._ids),
                email=email,
                password_hash=password_hash,
                name=name,
                is_admin=is_admin,
                created_at=now,
                updated_at=now,
            )
            self._users[user.id] = user
            return user

    def update_name(self, user_id: int, name: str) -> Optional[User]:
        return self._replace(user_id, name=name)

    def set_admin(self, user_id: int, is_admin: bool) -> Optional[User]:
        return self._replace(user_id, is_admin=is_admin)

    def update_password(self, user_id: int, password_hash: str) -> Optional[User]:
        return self._replace(user_id, password_hash=password_hash)

    def list_users(self, *, offset: int, limit: int) -> Tuple[List[User], int]:
        with self._lock:
            ordered = sorted(
                self._users.values(),
                key=lambda u: (u.created_at, u.id),
                reverse=True,
            )
        return ordered[max(0, offset) : max(0, offset) + limit], len(ordered)

    def _find_by_email(self, email: str) -> Optional[User]:
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    def _replace(self, user_id: int, **changes) -> Optional[User]:
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return None
            updated = replace(current, updated_at=utcnow(), **changes)
            self._users[user_id] = updated
            return updated
