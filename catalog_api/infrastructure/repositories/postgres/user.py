"""
============================================================
TARJETA CRC: infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Credential Store sobre la tabla `users`.
  - Cargar usuarios por email / id, crear, renombrar, promover y listar.
  - Mapear filas -> entidad `User` con un mapeo explícito de columnas.

Collaborators:
  - postgres._sql (ejecución + errores consistentes)
  - domain.entities.User

Constraints / Notes:
  - Repositorio puro: la normalización del email es política del Auth Service.
  - Retorna None cuando no existe el recurso.
  - La unicidad del email la decide uq_users_email (DuplicateKeyError).
  - Orden estable en listados: created_at DESC, id DESC.
============================================================
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import User
from ._sql import fetchone, run

# R: Lista explícita de columnas; contrato con migraciones.
_USER_COLUMNS = "id, email, password_hash, name, is_admin, created_at, updated_at"
_USER_ORDER_BY = "created_at DESC, id DESC"


def _row_to_user(row: tuple) -> User:
    return User(
        id=row[0],
        email=row[1],
        password_hash=row[2],
        name=row[3],
        is_admin=row[4],
        created_at=row[5],
        updated_at=row[6],
    )


class PostgresUserRepository:
    def __init__(self, pool=None) -> None:
        # Pool inyectable (para tests); si es None se usa el global.
        self._pool = pool

    # --- Lectura ---
    def get_user_by_id(self, user_id: int) -> Optional[User]:
        row = fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
            params=(user_id,),
            log_msg="PostgresUserRepository: get_user_by_id failed",
            log_extra={"user_id": user_id},
            pool=self._pool,
        )
        return _row_to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        row = fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s",
            params=(email,),
            log_msg="PostgresUserRepository: get_user_by_email failed",
            log_extra={},
            pool=self._pool,
        )
        return _row_to_user(row) if row else None

    def exists_by_email(self, email: str) -> bool:
        row = fetchone(
            query="SELECT EXISTS (SELECT 1 FROM users WHERE email = %s)",
            params=(email,),
            log_msg="PostgresUserRepository: exists_by_email failed",
            log_extra={},
            pool=self._pool,
        )
        return bool(row and row[0])

    def list_users(self, *, offset: int, limit: int) -> Tuple[List[User], int]:
        def operation(conn):
            total = conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]
            rows = conn.execute(
                f"""
                SELECT {_USER_COLUMNS}
                FROM users
                ORDER BY {_USER_ORDER_BY}
                LIMIT %s OFFSET %s
                """,
                (limit, max(0, offset)),
            ).fetchall()
            return [_row_to_user(r) for r in rows], int(total)

        return run(
            operation,
            log_msg="PostgresUserRepository: list_users failed",
            log_extra={"limit": limit, "offset": offset},
            pool=self._pool,
        )

    # --- Escritura ---
    def create_user(
        self,
        *,
        email: str,
        password_hash: str,
        name: str,
        is_admin: bool = False,
    ) -> User:
        row = fetchone(
            query=f"""
                INSERT INTO users (email, password_hash, name, is_admin)
                VALUES (%s, %s, %s, %s)
                RETURNING {_USER_COLUMNS}
            """,
            params=(email, password_hash, name, is_admin),
            log_msg="PostgresUserRepository: create_user failed",
            log_extra={"is_admin": is_admin},
            pool=self._pool,
        )
        if not row:
            raise DatabaseError("PostgresUserRepository: create_user returned no row")
        return _row_to_user(row)

    def update_name(self, user_id: int, name: str) -> Optional[User]:
        return self._update(user_id, "name = %s", name, op="update_name")

    def set_admin(self, user_id: int, is_admin: bool) -> Optional[User]:
        return self._update(user_id, "is_admin = %s", is_admin, op="set_admin")

    def update_password(self, user_id: int, password_hash: str) -> Optional[User]:
        return self._update(
            user_id, "password_hash = %s", password_hash, op="update_password"
        )

    def _update(self, user_id: int, assignment: str, value: object, *, op: str):
        # assignment es controlado por código (no input de usuario).
        row = fetchone(
            query=f"""
                UPDATE users
                SET {assignment}, updated_at = NOW()
                WHERE id = %s
                RETURNING {_USER_COLUMNS}
            """,
            params=(value, user_id),
            log_msg=f"PostgresUserRepository: {op} failed",
            log_extra={"user_id": user_id},
            pool=self._pool,
        )
        return _row_to_user(row) if row else None
