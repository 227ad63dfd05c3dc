"""
===============================================================================
USE CASE: Create Movie (admin)
===============================================================================

Business Goal:
    Dar de alta una película respetando la unicidad del título.

Error Mapping:
    - VALIDATION_ERROR: título vacío o campos fuera de rango
    - CONFLICT: ya existe una película con el mismo título (pre-chequeo
      consultivo + DuplicateKeyError del store como autoridad final)

Collaborators:
    - MovieRepository.exists_by_title / create
    - movie_rules (validación de campos)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ....crosscutting.exceptions import DuplicateKeyError
from ....domain.entities import normalize_tags
from ....domain.repositories import MovieRepository
from ....domain.value_objects import MovieDraft
from . import movie_rules
from .movie_results import MovieResult, movie_title_conflict, movie_validation_error


@dataclass(frozen=True)
class CreateMovieInput:
    title: str
    description: str = ""
    release_year: Optional[int] = None
    duration: Optional[int] = None
    poster_url: str = ""
    video_url: str = ""
    categories: List[str] = field(default_factory=list)
    rating: float = 0.0


class CreateMovieUseCase:
    def __init__(self, repository: MovieRepository) -> None:
        self._movies = repository

    def execute(self, input_data: CreateMovieInput) -> MovieResult:
        draft = MovieDraft(
            title=(input_data.title or "").strip(),
            description=(input_data.description or "").strip(),
            release_year=input_data.release_year,
            duration=input_data.duration,
            poster_url=(input_data.poster_url or "").strip(),
            video_url=(input_data.video_url or "").strip(),
            categories=normalize_tags(input_data.categories),
            rating=input_data.rating if input_data.rating is not None else 0.0,
        )

        problem = movie_rules.check_title(draft.title) or movie_rules.check_fields(
            description=draft.description,
            release_year=draft.release_year,
            duration=draft.duration,
            poster_url=draft.poster_url,
            video_url=draft.video_url,
            categories=draft.categories,
            rating=draft.rating,
        )
        if problem:
            return MovieResult(error=movie_validation_error(problem))

        if self._movies.exists_by_title(draft.title):
            return MovieResult(error=movie_title_conflict())

        try:
            movie = self._movies.create(draft)
        except DuplicateKeyError:
            return MovieResult(error=movie_title_conflict())

        return MovieResult(movie=movie)
