"""
===============================================================================
MOVIE USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Responsibilities:
    - Definir MovieErrorCode (conjunto acotado y estable).
    - Representar MovieError (code + message).
    - Resultados: MovieResult, MoviePageResult, MovieListResult, DeleteMovieResult.

Collaborators:
    - domain.entities.Movie
    - interfaces/api/http/error_mapping.py (code -> HTTP)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.entities import Movie


class MovieErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class MovieError:
    code: MovieErrorCode
    message: str


@dataclass
class MovieResult:
    """Éxito => movie presente; fallo => error presente."""

    movie: Movie | None = None
    error: MovieError | None = None


@dataclass
class MoviePageResult:
    """Página del Query Engine. `total` cuenta el set filtrado completo."""

    movies: List[Movie] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 0
    total_pages: int = 0
    error: MovieError | None = None


@dataclass
class MovieListResult:
    movies: List[Movie] = field(default_factory=list)
    error: MovieError | None = None


@dataclass
class DeleteMovieResult:
    deleted: bool = False
    error: MovieError | None = None


def movie_not_found() -> MovieError:
    return MovieError(code=MovieErrorCode.NOT_FOUND, message="Movie not found")


def movie_title_conflict() -> MovieError:
    return MovieError(code=MovieErrorCode.CONFLICT, message="Movie already exists")


def movie_validation_error(message: str) -> MovieError:
    return MovieError(code=MovieErrorCode.VALIDATION_ERROR, message=message)
