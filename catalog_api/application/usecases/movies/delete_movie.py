"""
USE CASE: Delete Movie (admin)

Borra la película y sus dependientes (asociaciones de categoría y favoritos)
en una única transacción del repositorio. NOT_FOUND si no existe.
"""

from __future__ import annotations

from ....domain.repositories import MovieRepository
from .movie_results import DeleteMovieResult, movie_not_found


class DeleteMovieUseCase:
    def __init__(self, repository: MovieRepository) -> None:
        self._movies = repository

    def execute(self, movie_id: int) -> DeleteMovieResult:
        if not self._movies.delete(movie_id):
            return DeleteMovieResult(error=movie_not_found())
        return DeleteMovieResult(deleted=True)
