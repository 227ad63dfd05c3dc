"""
===============================================================================
TARJETA CRC: schemas/movies.py
===============================================================================

Módulo:
    Schemas HTTP para el catálogo de películas

Responsabilidades:
    - DTOs de request (create / partial update) y response (movie, página).
    - Tipos estrictos en el borde; límites de negocio en movie_rules.

Colaboradores:
    - domain.entities.Movie
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .....domain.entities import Movie


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateMovieReq(BaseModel):
    title: str = Field(default="", description="Título único")
    description: str = ""
    release_year: Optional[int] = None
    duration: Optional[int] = Field(default=None, description="Minutos")
    poster_url: str = ""
    video_url: str = ""
    categories: List[str] = Field(default_factory=list)
    rating: float = 0.0


class UpdateMovieReq(BaseModel):
    """Patch: solo se aplican los campos presentes."""

    title: Optional[str] = None
    description: Optional[str] = None
    release_year: Optional[int] = None
    duration: Optional[int] = None
    poster_url: Optional[str] = None
    video_url: Optional[str] = None
    categories: Optional[List[str]] = None
    rating: Optional[float] = None


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class MovieRes(BaseModel):
    id: int
    title: str
    description: str
    release_year: Optional[int] = None
    duration: Optional[int] = None
    poster_url: str
    video_url: str
    categories: List[str]
    rating: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, movie: Movie) -> "MovieRes":
        return cls(
            id=movie.id,
            title=movie.title,
            description=movie.description,
            release_year=movie.release_year,
            duration=movie.duration,
            poster_url=movie.poster_url,
            video_url=movie.video_url,
            categories=list(movie.categories),
            rating=movie.rating,
            created_at=movie.created_at,
            updated_at=movie.updated_at,
        )


class MovieListRes(BaseModel):
    movies: List[MovieRes]
    total: int = Field(..., description="Total del set filtrado (antes de paginar)")
    page: int
    page_size: int
    total_pages: int


class MoviesRes(BaseModel):
    """Listas acotadas (top-rated / recently-added / related)."""

    movies: List[MovieRes]
