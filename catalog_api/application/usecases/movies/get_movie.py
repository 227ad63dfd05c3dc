"""
USE CASE: Get Movie

Devuelve la película por id o NOT_FOUND.
"""

from __future__ import annotations

from ....domain.repositories import MovieRepository
from .movie_results import MovieResult, movie_not_found


class GetMovieUseCase:
    def __init__(self, repository: MovieRepository) -> None:
        self._movies = repository

    def execute(self, movie_id: int) -> MovieResult:
        movie = self._movies.get_by_id(movie_id)
        if movie is None:
            return MovieResult(error=movie_not_found())
        return MovieResult(movie=movie)
