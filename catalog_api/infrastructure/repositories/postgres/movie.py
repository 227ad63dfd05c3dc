"""
============================================================
TARJETA CRC: infrastructure/repositories/postgres/movie.py
============================================================
Class: PostgresMovieRepository

Responsibilities:
  - Catalog Query Engine sobre `movies` (+ `movie_categories`).
  - Construir WHERE/ORDER BY/LIMIT a partir de MovieFilter y MovieSort.
  - COUNT sobre el set filtrado ANTES de paginar.
  - Mantener movie_categories sincronizada con los tags de la película.
  - Borrado en cascada atómico: asociaciones, favoritos, película.

Collaborators:
  - postgres._sql (ejecución, DuplicateKeyError, transacciones)
  - domain.value_objects (MovieFilter, MovieSort, SORT_COLUMNS, MovieDraft, MovieChanges)

Constraints / Notes:
  - SQL parametrizado siempre; solo nombres de columnas controlados por
    código se interpolan.
  - Unicidad de título: uq_movies_title es la autoridad final.
============================================================
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import Movie
from ....domain.value_objects import (
    SORT_COLUMNS,
    MovieChanges,
    MovieDraft,
    MovieFilter,
    MovieSort,
)
from ._sql import fetchall, fetchone, run

_MOVIE_FIELDS = (
    "id",
    "title",
    "description",
    "release_year",
    "duration",
    "poster_url",
    "video_url",
    "categories",
    "rating",
    "created_at",
    "updated_at",
)
_MOVIE_COLUMNS = ", ".join(f"m.{name}" for name in _MOVIE_FIELDS)

# MovieChanges -> columna (mapeo estático)
_UPDATABLE_COLUMNS = {
    "title": "title",
    "description": "description",
    "release_year": "release_year",
    "duration": "duration",
    "poster_url": "poster_url",
    "video_url": "video_url",
    "categories": "categories",
    "rating": "rating",
}

_SYNC_ASSOCIATIONS = """
    INSERT INTO movie_categories (movie_id, category_id)
    SELECT %s, c.id FROM categories c WHERE c.name = ANY(%s)
    ON CONFLICT DO NOTHING
"""


def _row_to_movie(row: tuple) -> Movie:
    return Movie(
        id=row[0],
        title=row[1],
        description=row[2] or "",
        release_year=row[3],
        duration=row[4],
        poster_url=row[5] or "",
        video_url=row[6] or "",
        categories=list(row[7] or []),
        rating=float(row[8] or 0.0),
        created_at=row[9],
        updated_at=row[10],
    )


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_filter_sql(movie_filter: MovieFilter) -> Tuple[str, List[object]]:
    """
    Devuelve (FROM ... JOIN ... WHERE ..., params). Criterios combinados con AND.
    """
    joins: List[str] = []
    clauses: List[str] = []
    params: List[object] = []

    term = movie_filter.search_term
    if term:
        pattern = f"%{_escape_like(term)}%"
        clauses.append("(m.title ILIKE %s OR m.description ILIKE %s)")
        params.extend([pattern, pattern])

    if movie_filter.category_id is not None:
        joins.append("JOIN movie_categories mc ON mc.movie_id = m.id")
        clauses.append("mc.category_id = %s")
        params.append(movie_filter.category_id)

    if movie_filter.categories:
        clauses.append("m.categories && %s::text[]")
        params.append(list(movie_filter.categories))

    if movie_filter.year is not None:
        clauses.append("m.release_year = %s")
        params.append(movie_filter.year)

    sql = "FROM movies m"
    if joins:
        sql += " " + " ".join(joins)
    if clauses:
        sql += " WHERE " + " AND ".join(clauses)
    return sql, params


def build_order_sql(sort: MovieSort) -> str:
    column, descending = SORT_COLUMNS[sort]
    direction = "DESC" if descending else "ASC"
    return f"ORDER BY m.{column} {direction} NULLS LAST, m.id {direction}"


class PostgresMovieRepository:
    def __init__(self, pool=None) -> None:
        self._pool = pool

    # --- Query engine ---
    def search(
        self,
        movie_filter: MovieFilter,
        *,
        sort: MovieSort,
        offset: int,
        limit: int,
    ) -> Tuple[List[Movie], int]:
        from_where, params = build_filter_sql(movie_filter)
        order_by = build_order_sql(sort)

        def operation(conn):
            total = conn.execute(f"SELECT COUNT(*) {from_where}", tuple(params)).fetchone()[0]
            rows = conn.execute(
                f"SELECT {_MOVIE_COLUMNS} {from_where} {order_by} LIMIT %s OFFSET %s",
                (*params, limit, offset),
            ).fetchall()
            return [_row_to_movie(r) for r in rows], int(total)

        return run(
            operation,
            log_msg="PostgresMovieRepository: search failed",
            log_extra={"sort": sort.value, "offset": offset, "limit": limit},
            pool=self._pool,
        )

    def get_by_id(self, movie_id: int) -> Optional[Movie]:
        row = fetchone(
            query=f"SELECT {_MOVIE_COLUMNS} FROM movies m WHERE m.id = %s",
            params=(movie_id,),
            log_msg="PostgresMovieRepository: get_by_id failed",
            log_extra={"movie_id": movie_id},
            pool=self._pool,
        )
        return _row_to_movie(row) if row else None

    def exists_by_title(self, title: str, *, exclude_id: Optional[int] = None) -> bool:
        query = "SELECT EXISTS (SELECT 1 FROM movies WHERE title = %s"
        params: List[object] = [title]
        if exclude_id is not None:
            query += " AND id <> %s"
            params.append(exclude_id)
        row = fetchone(
            query=query + ")",
            params=params,
            log_msg="PostgresMovieRepository: exists_by_title failed",
            log_extra={"exclude_id": exclude_id},
            pool=self._pool,
        )
        return bool(row and row[0])

    def top_rated(self, *, limit: int) -> List[Movie]:
        return self._list(
            f"SELECT {_MOVIE_COLUMNS} FROM movies m "
            f"{build_order_sql(MovieSort.RATING_DESC)} LIMIT %s",
            (limit,),
            op="top_rated",
        )

    def recently_added(self, *, limit: int) -> List[Movie]:
        return self._list(
            f"SELECT {_MOVIE_COLUMNS} FROM movies m "
            f"{build_order_sql(MovieSort.CREATED_DESC)} LIMIT %s",
            (limit,),
            op="recently_added",
        )

    def related(self, movie: Movie, *, limit: int) -> List[Movie]:
        if not movie.categories:
            return []
        return self._list(
            f"SELECT {_MOVIE_COLUMNS} FROM movies m "
            "WHERE m.id <> %s AND m.categories && %s::text[] "
            f"{build_order_sql(MovieSort.RATING_DESC)} LIMIT %s",
            (movie.id, list(movie.categories), limit),
            op="related",
        )

    # --- Escritura ---
    def create(self, draft: MovieDraft) -> Movie:
        def operation(conn):
            row = conn.execute(
                f"""
                INSERT INTO movies AS m (title, description, release_year, duration,
                                         poster_url, video_url, categories, rating)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING {_MOVIE_COLUMNS}
                """,
                (
                    draft.title,
                    draft.description,
                    draft.release_year,
                    draft.duration,
                    draft.poster_url,
                    draft.video_url,
                    list(draft.categories),
                    draft.rating,
                ),
            ).fetchone()
            if not row:
                raise DatabaseError("PostgresMovieRepository: create returned no row")
            movie = _row_to_movie(row)
            conn.execute(_SYNC_ASSOCIATIONS, (movie.id, movie.categories))
            return movie

        return run(
            operation,
            log_msg="PostgresMovieRepository: create failed",
            log_extra={},
            pool=self._pool,
            atomic=True,
        )

    def update(self, movie_id: int, changes: MovieChanges) -> Optional[Movie]:
        values = changes.as_dict()
        if not values:
            return self.get_by_id(movie_id)

        assignments = [f"{_UPDATABLE_COLUMNS[name]} = %s" for name in values]
        params: List[object] = [
            list(value) if name == "categories" else value
            for name, value in values.items()
        ]

        def operation(conn):
            row = conn.execute(
                f"""
                UPDATE movies AS m
                SET {", ".join(assignments)}, updated_at = NOW()
                WHERE m.id = %s
                RETURNING {_MOVIE_COLUMNS}
                """,
                (*params, movie_id),
            ).fetchone()
            if not row:
                return None
            movie = _row_to_movie(row)
            if "categories" in values:
                conn.execute(
                    "DELETE FROM movie_categories WHERE movie_id = %s", (movie_id,)
                )
                conn.execute(_SYNC_ASSOCIATIONS, (movie_id, movie.categories))
            return movie

        return run(
            operation,
            log_msg="PostgresMovieRepository: update failed",
            log_extra={"movie_id": movie_id, "fields": sorted(values)},
            pool=self._pool,
            atomic=True,
        )

    def delete(self, movie_id: int) -> bool:
        def operation(conn):
            conn.execute("DELETE FROM movie_categories WHERE movie_id = %s", (movie_id,))
            conn.execute("DELETE FROM user_favorites WHERE movie_id = %s", (movie_id,))
            cursor = conn.execute("DELETE FROM movies WHERE id = %s", (movie_id,))
            return cursor.rowcount > 0

        return run(
            operation,
            log_msg="PostgresMovieRepository: delete failed",
            log_extra={"movie_id": movie_id},
            pool=self._pool,
            atomic=True,
        )

    def _list(self, query: str, params: tuple, *, op: str) -> List[Movie]:
        rows = fetchall(
            query=query,
            params=params,
            log_msg=f"PostgresMovieRepository: {op} failed",
            log_extra={},
            pool=self._pool,
        )
        return [_row_to_movie(r) for r in rows]
