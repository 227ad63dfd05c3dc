"""
============================================================
TARJETA CRC: infrastructure/repositories/in_memory/catalog.py
============================================================
Classes: InMemoryCatalogStore, InMemoryMovieRepository, InMemoryCategoryRepository

Responsibilities:
  - "Tablas" en memoria: movies, categories, movie_categories, user_favorites.
  - Replicar la semántica del Query Engine de Postgres:
      - search ILIKE sobre título O descripción
      - overlap de tags, join por category_id, año exacto (AND)
      - total calculado antes de paginar
      - ORDER BY <col> <dir> NULLS LAST, id <dir>
  - Unicidad de título / nombre (DuplicateKeyError).
  - Borrado en cascada atómico (todo bajo el mismo lock).

Constraints / Notes:
  - Movie y Category repos comparten un único store (y su Lock) porque la
    asociación película-categoría cruza ambos.
  - Copias defensivas de listas de tags.
============================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from itertools import count
from threading import Lock
from typing import Dict, Iterator, List, Optional, Set, Tuple

from ....crosscutting.exceptions import DuplicateKeyError
from ....domain.entities import Category, Movie, utcnow
from ....domain.value_objects import (
    SORT_COLUMNS,
    MovieChanges,
    MovieDraft,
    MovieFilter,
    MovieSort,
)


@dataclass
class InMemoryCatalogStore:
    lock: Lock = field(default_factory=Lock)
    movies: Dict[int, Movie] = field(default_factory=dict)
    categories: Dict[int, Category] = field(default_factory=dict)
    movie_categories: Set[Tuple[int, int]] = field(default_factory=set)
    user_favorites: Set[Tuple[int, int]] = field(default_factory=set)
    movie_ids: Iterator[int] = field(default_factory=lambda: count(1))
    category_ids: Iterator[int] = field(default_factory=lambda: count(1))

    def add_favorite(self, user_id: int, movie_id: int) -> None:
        with self.lock:
            self.user_favorites.add((user_id, movie_id))

    def sync_associations(self, movie: Movie) -> None:
        """Caller holds the lock."""
        self.movie_categories = {
            pair for pair in self.movie_categories if pair[0] != movie.id
        }
        for category in self.categories.values():
            if category.name in movie.categories:
                self.movie_categories.add((movie.id, category.id))


def order_movies(movies: List[Movie], sort: MovieSort) -> List[Movie]:
    column, descending = SORT_COLUMNS[sort]
    present = [m for m in movies if getattr(m, column) is not None]
    missing = [m for m in movies if getattr(m, column) is None]
    present.sort(key=lambda m: (getattr(m, column), m.id), reverse=descending)
    missing.sort(key=lambda m: m.id, reverse=descending)
    return present + missing


def _copy(movie: Movie) -> Movie:
    return replace(movie, categories=list(movie.categories))


class InMemoryMovieRepository:
    def __init__(self, store: InMemoryCatalogStore | None = None) -> None:
        self._store = store or InMemoryCatalogStore()

    @property
    def store(self) -> InMemoryCatalogStore:
        return self._store

    # --- Query engine ---
    def search(
        self,
        movie_filter: MovieFilter,
        *,
        sort: MovieSort,
        offset: int,
        limit: int,
    ) -> Tuple[List[Movie], int]:
        with self._store.lock:
            matched = [
                m for m in self._store.movies.values() if self._matches(m, movie_filter)
            ]
        ordered = order_movies(matched, sort)
        page = ordered[offset : offset + limit]
        return [_copy(m) for m in page], len(ordered)

    def _matches(self, movie: Movie, movie_filter: MovieFilter) -> bool:
        term = movie_filter.search_term
        if term:
            needle = term.casefold()
            if (
                needle not in movie.title.casefold()
                and needle not in (movie.description or "").casefold()
            ):
                return False
        if movie_filter.category_id is not None:
            if (movie.id, movie_filter.category_id) not in self._store.movie_categories:
                return False
        if movie_filter.categories and not movie.shares_category_with(
            movie_filter.categories
        ):
            return False
        if movie_filter.year is not None and movie.release_year != movie_filter.year:
            return False
        return True

    def get_by_id(self, movie_id: int) -> Optional[Movie]:
        with self._store.lock:
            movie = self._store.movies.get(movie_id)
        return _copy(movie) if movie else None

    def exists_by_title(self, title: str, *, exclude_id: Optional[int] = None) -> bool:
        with self._store.lock:
            return self._title_taken(title, exclude_id)

    def _title_taken(self, title: str, exclude_id: Optional[int]) -> bool:
        return any(
            m.title == title and m.id != exclude_id for m in self._store.movies.values()
        )

    def top_rated(self, *, limit: int) -> List[Movie]:
        with self._store.lock:
            movies = list(self._store.movies.values())
        return [_copy(m) for m in order_movies(movies, MovieSort.RATING_DESC)[:limit]]

    def recently_added(self, *, limit: int) -> List[Movie]:
        with self._store.lock:
            movies = list(self._store.movies.values())
        return [_copy(m) for m in order_movies(movies, MovieSort.CREATED_DESC)[:limit]]

    def related(self, movie: Movie, *, limit: int) -> List[Movie]:
        with self._store.lock:
            candidates = [
                m
                for m in self._store.movies.values()
                if m.id != movie.id and m.shares_category_with(movie.categories)
            ]
        return [_copy(m) for m in order_movies(candidates, MovieSort.RATING_DESC)[:limit]]

    # --- Escritura ---
    def create(self, draft: MovieDraft) -> Movie:
        with self._store.lock:
            if self._title_taken(draft.title, None):
                raise DuplicateKeyError(
                    "InMemoryMovieRepository: duplicate title",
                    constraint="uq_movies_title",
                )
            now = utcnow()
            movie = Movie(
                id=next(self._store.movie_ids),
                title=draft.title,
                description=draft.description,
                release_year=draft.release_year,
                duration=draft.duration,
                poster_url=draft.poster_url,
                video_url=draft.video_url,
                categories=list(draft.categories),
                rating=draft.rating,
                created_at=now,
                updated_at=now,
            )
            self._store.movies[movie.id] = movie
            self._store.sync_associations(movie)
            return _copy(movie)

    def update(self, movie_id: int, changes: MovieChanges) -> Optional[Movie]:
        values = changes.as_dict()
        with self._store.lock:
            current = self._store.movies.get(movie_id)
            if current is None:
                return None
            if not values:
                return _copy(current)
            if "title" in values and self._title_taken(values["title"], movie_id):
                raise DuplicateKeyError(
                    "InMemoryMovieRepository: duplicate title",
                    constraint="uq_movies_title",
                )
            if "categories" in values:
                values["categories"] = list(values["categories"])
            updated = replace(current, updated_at=utcnow(), **values)
            self._store.movies[movie_id] = updated
            if "categories" in values:
                self._store.sync_associations(updated)
            return _copy(updated)

    def delete(self, movie_id: int) -> bool:
        with self._store.lock:
            if movie_id not in self._store.movies:
                return False
            self._store.movie_categories = {
                pair for pair in self._store.movie_categories if pair[0] != movie_id
            }
            self._store.user_favorites = {
                pair for pair in self._store.user_favorites if pair[1] != movie_id
            }
            del self._store.movies[movie_id]
            return True


class InMemoryCategoryRepository:
    def __init__(self, store: InMemoryCatalogStore | None = None) -> None:
        self._store = store or InMemoryCatalogStore()

    def list_all(self) -> List[Category]:
        with self._store.lock:
            return sorted(self._store.categories.values(), key=lambda c: (c.name, c.id))

    def get_by_id(self, category_id: int) -> Optional[Category]:
        with self._store.lock:
            return self._store.categories.get(category_id)

    def exists_by_name(self, name: str) -> bool:
        with self._store.lock:
            return any(c.name == name for c in self._store.categories.values())

    def create(self, name: str) -> Category:
        with self._store.lock:
            if any(c.name == name for c in self._store.categories.values()):
                raise DuplicateKeyError(
                    "InMemoryCategoryRepository: duplicate name",
                    constraint="uq_categories_name",
                )
            now = utcnow()
            category = Category(
                id=next(self._store.category_ids),
                name=name,
                created_at=now,
                updated_at=now,
            )
            self._store.categories[category.id] = category
            for movie in self._store.movies.values():
                if name in movie.categories:
                    self._store.movie_categories.add((movie.id, category.id))
            return category

    def is_in_use(self, category_id: int) -> bool:
        with self._store.lock:
            return any(pair[1] == category_id for pair in self._store.movie_categories)

    def delete(self, category_id: int) -> bool:
        with self._store.lock:
            return self._store.categories.pop(category_id, None) is not None
