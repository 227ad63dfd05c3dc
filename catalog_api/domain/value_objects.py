"""
===============================================================================
TARJETA CRC: domain/value_objects.py
===============================================================================

Responsabilidades:
    - MovieFilter: criterios opcionales del listado (AND entre los presentes).
    - MovieSort: mapeo exacto sort_by -> orden, con fallback al default.
    - MovieDraft / MovieChanges: datos de alta y de actualización parcial.

Colaboradores:
    - application/usecases/movies: arma filtros y drafts desde la capa HTTP.
    - infrastructure/repositories: traducen estos objetos a SQL o a filtros en memoria.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional


class MovieSort(str, Enum):
    TITLE_ASC = "title_asc"
    TITLE_DESC = "title_desc"
    YEAR_ASC = "year_asc"
    YEAR_DESC = "year_desc"
    RATING_DESC = "rating_desc"
    CREATED_DESC = "created_desc"

    @classmethod
    def resolve(cls, raw: Optional[str]) -> "MovieSort":
        """
        Match exacto y case-sensitive.

        Valores desconocidos (o created_desc explícito) caen en el default
        (creación descendente) sin error.
        """
        for sort in cls:
            if sort.value == raw:
                return sort
        return cls.CREATED_DESC


# (columna, descendente). Desempate estable por id.
SORT_COLUMNS: Dict[MovieSort, tuple[str, bool]] = {
    MovieSort.TITLE_ASC: ("title", False),
    MovieSort.TITLE_DESC: ("title", True),
    MovieSort.YEAR_ASC: ("release_year", False),
    MovieSort.YEAR_DESC: ("release_year", True),
    MovieSort.RATING_DESC: ("rating", True),
    MovieSort.CREATED_DESC: ("created_at", True),
}


@dataclass(frozen=True, slots=True)
class MovieFilter:
    search: Optional[str] = None
    category_id: Optional[int] = None
    categories: List[str] = field(default_factory=list)
    year: Optional[int] = None

    @property
    def search_term(self) -> Optional[str]:
        term = (self.search or "").strip()
        return term or None


@dataclass(frozen=True, slots=True)
class MovieDraft:
    title: str
    description: str = ""
    release_year: Optional[int] = None
    duration: Optional[int] = None
    poster_url: str = ""
    video_url: str = ""
    categories: List[str] = field(default_factory=list)
    rating: float = 0.0


@dataclass(frozen=True, slots=True)
class MovieChanges:
    """Actualización parcial: None = "no tocar"."""

    title: Optional[str] = None
    description: Optional[str] = None
    release_year: Optional[int] = None
    duration: Optional[int] = None
    poster_url: Optional[str] = None
    video_url: Optional[str] = None
    categories: Optional[List[str]] = None
    rating: Optional[float] = None

    def as_dict(self) -> Dict[str, Any]:
        """Solo los campos provistos."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def is_empty(self) -> bool:
        return not self.as_dict()
