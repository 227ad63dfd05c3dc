"""
USE CASES: Highlights del catálogo

- TopRatedMoviesUseCase: rating descendente
- RecentlyAddedMoviesUseCase: creación descendente
- RelatedMoviesUseCase: comparten al menos un tag con la película dada
  (excluida), rating descendente; NOT_FOUND si la película no existe

`limit` ausente o <= 0 -> DEFAULT_HIGHLIGHT_LIMIT; se acota a MAX_HIGHLIGHT_LIMIT.
"""

from __future__ import annotations

from typing import Optional

from ....domain.repositories import MovieRepository
from .movie_results import MovieListResult, movie_not_found

DEFAULT_HIGHLIGHT_LIMIT = 10
MAX_HIGHLIGHT_LIMIT = 50


def resolve_limit(limit: Optional[int]) -> int:
    if limit is None or limit <= 0:
        return DEFAULT_HIGHLIGHT_LIMIT
    return min(limit, MAX_HIGHLIGHT_LIMIT)


class TopRatedMoviesUseCase:
    def __init__(self, repository: MovieRepository) -> None:
        self._movies = repository

    def execute(self, limit: Optional[int] = None) -> MovieListResult:
        return MovieListResult(movies=self._movies.top_rated(limit=resolve_limit(limit)))


class RecentlyAddedMoviesUseCase:
    def __init__(self, repository: MovieRepository) -> None:
        self._movies = repository

    def execute(self, limit: Optional[int] = None) -> MovieListResult:
        return MovieListResult(
            movies=self._movies.recently_added(limit=resolve_limit(limit))
        )


class RelatedMoviesUseCase:
    def __init__(self, repository: MovieRepository) -> None:
        self._movies = repository

    def execute(self, movie_id: int, limit: Optional[int] = None) -> MovieListResult:
        movie = self._movies.get_by_id(movie_id)
        if movie is None:
            return MovieListResult(error=movie_not_found())
        return MovieListResult(
            movies=self._movies.related(movie, limit=resolve_limit(limit))
        )
