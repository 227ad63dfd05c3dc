"""
============================================================
TARJETA CRC: infrastructure/repositories/postgres/category.py
============================================================
Class: PostgresCategoryRepository

Responsibilities:
  - CRUD de `categories` (nombre único, listado por nombre ASC).
  - Responder si una categoría está en uso (movie_categories).
  - Al crear, asociar películas existentes que ya tienen el tag.

Collaborators:
  - postgres._sql
  - domain.entities.Category
============================================================
"""

from __future__ import annotations

from typing import List, Optional

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Category
from ._sql import fetchall, fetchone, run

_CATEGORY_COLUMNS = "id, name, created_at, updated_at"


def _row_to_category(row: tuple) -> Category:
    return Category(id=row[0], name=row[1], created_at=row[2], updated_at=row[3])


class PostgresCategoryRepository:
    def __init__(self, pool=None) -> None:
        self._pool = pool

    def list_all(self) -> List[Category]:
        rows = fetchall(
            query=f"SELECT {_CATEGORY_COLUMNS} FROM categories ORDER BY name ASC, id ASC",
            log_msg="PostgresCategoryRepository: list_all failed",
            log_extra={},
            pool=self._pool,
        )
        return [_row_to_category(r) for r in rows]

    def get_by_id(self, category_id: int) -> Optional[Category]:
        row = fetchone(
            query=f"SELECT {_CATEGORY_COLUMNS} FROM categories WHERE id = %s",
            params=(category_id,),
            log_msg="PostgresCategoryRepository: get_by_id failed",
            log_extra={"category_id": category_id},
            pool=self._pool,
        )
        return _row_to_category(row) if row else None

    def exists_by_name(self, name: str) -> bool:
        row = fetchone(
            query="SELECT EXISTS (SELECT 1 FROM categories WHERE name = %s)",
            params=(name,),
            log_msg="PostgresCategoryRepository: exists_by_name failed",
            log_extra={},
            pool=self._pool,
        )
        return bool(row and row[0])

    def create(self, name: str) -> Category:
        def operation(conn):
            row = conn.execute(
                f"INSERT INTO categories (name) VALUES (%s) RETURNING {_CATEGORY_COLUMNS}",
                (name,),
            ).fetchone()
            if not row:
                raise DatabaseError("PostgresCategoryRepository: create returned no row")
            category = _row_to_category(row)
            conn.execute(
                """
                INSERT INTO movie_categories (movie_id, category_id)
                SELECT m.id, %s FROM movies m WHERE %s = ANY(m.categories)
                ON CONFLICT DO NOTHING
                """,
                (category.id, category.name),
            )
            return category

        return run(
            operation,
            log_msg="PostgresCategoryRepository: create failed",
            log_extra={},
            pool=self._pool,
            atomic=True,
        )

    def is_in_use(self, category_id: int) -> bool:
        row = fetchone(
            query="SELECT EXISTS (SELECT 1 FROM movie_categories WHERE category_id = %s)",
            params=(category_id,),
            log_msg="PostgresCategoryRepository: is_in_use failed",
            log_extra={"category_id": category_id},
            pool=self._pool,
        )
        return bool(row and row[0])

    def delete(self, category_id: int) -> bool:
        def operation(conn):
            cursor = conn.execute("DELETE FROM categories WHERE id = %s", (category_id,))
            return cursor.rowcount > 0

        return run(
            operation,
            log_msg="PostgresCategoryRepository: delete failed",
            log_extra={"category_id": category_id},
            pool=self._pool,
        )
