"""
===============================================================================
USE CASE: Update Movie (admin, partial)
===============================================================================

Business Goal:
    Actualizar solo los campos provistos de una película existente.

Rules:
    - NOT_FOUND si la película no existe.
    - El título, si se provee, no puede estar vacío y no puede coincidir con
      el de OTRA película (la propia queda excluida del chequeo).

Collaborators:
    - MovieRepository.get_by_id / exists_by_title(exclude_id) / update
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ....crosscutting.exceptions import DuplicateKeyError
from ....domain.entities import normalize_tags
from ....domain.repositories import MovieRepository
from ....domain.value_objects import MovieChanges
from . import movie_rules
from .movie_results import (
    MovieResult,
    movie_not_found,
    movie_title_conflict,
    movie_validation_error,
)


def _strip(value: Optional[str]) -> Optional[str]:
    return value.strip() if value is not None else None


@dataclass(frozen=True)
class UpdateMovieInput:
    movie_id: int
    title: Optional[str] = None
    description: Optional[str] = None
    release_year: Optional[int] = None
    duration: Optional[int] = None
    poster_url: Optional[str] = None
    video_url: Optional[str] = None
    categories: Optional[List[str]] = None
    rating: Optional[float] = None


class UpdateMovieUseCase:
    def __init__(self, repository: MovieRepository) -> None:
        self._movies = repository

    def execute(self, input_data: UpdateMovieInput) -> MovieResult:
        changes = MovieChanges(
            title=_strip(input_data.title),
            description=_strip(input_data.description),
            release_year=input_data.release_year,
            duration=input_data.duration,
            poster_url=_strip(input_data.poster_url),
            video_url=_strip(input_data.video_url),
            categories=(
                normalize_tags(input_data.categories)
                if input_data.categories is not None
                else None
            ),
            rating=input_data.rating,
        )

        problem = (
            movie_rules.check_title(changes.title) if changes.title is not None else None
        ) or movie_rules.check_fields(
            description=changes.description,
            release_year=changes.release_year,
            duration=changes.duration,
            poster_url=changes.poster_url,
            video_url=changes.video_url,
            categories=changes.categories,
            rating=changes.rating,
        )
        if problem:
            return MovieResult(error=movie_validation_error(problem))

        if self._movies.get_by_id(input_data.movie_id) is None:
            return MovieResult(error=movie_not_found())

        if changes.title is not None and self._movies.exists_by_title(
            changes.title, exclude_id=input_data.movie_id
        ):
            return MovieResult(error=movie_title_conflict())

        try:
            movie = self._movies.update(input_data.movie_id, changes)
        except DuplicateKeyError:
            return MovieResult(error=movie_title_conflict())

        if movie is None:
            # R: borrada entre el chequeo y el update.
            return MovieResult(error=movie_not_found())

        return MovieResult(movie=movie)
