"""
===============================================================================
USE CASE: List Movies (Catalog Query Engine)
===============================================================================

Business Goal:
    Listar el catálogo con filtros opcionales (AND), orden y paginación,
    devolviendo el total filtrado para que el cliente calcule páginas.

Rules:
    - search: substring case-insensitive sobre título O descripción.
    - category_id / categories: pertenencia por join o overlap de tags.
    - year: match exacto.
    - sort_by: mapeo exacto; desconocido -> creación descendente.
    - page <= 0 o ausente -> 1; page_size <= 0 o ausente -> default canónico.

Collaborators:
    - MovieRepository.search(filter, sort, offset, limit) -> (items, total)
    - crosscutting.pagination.PageRequest
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ....crosscutting.pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    PageRequest,
    total_pages,
)
from ....domain.entities import normalize_tags
from ....domain.repositories import MovieRepository
from ....domain.value_objects import MovieFilter, MovieSort
from .movie_results import MoviePageResult


@dataclass(frozen=True)
class ListMoviesInput:
    search: Optional[str] = None
    category_id: Optional[int] = None
    categories: List[str] = field(default_factory=list)
    year: Optional[int] = None
    sort_by: Optional[str] = None
    page: Optional[int] = None
    page_size: Optional[int] = None


class ListMoviesUseCase:
    def __init__(
        self,
        repository: MovieRepository,
        *,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        self._movies = repository
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    def execute(self, input_data: ListMoviesInput) -> MoviePageResult:
        page_request = PageRequest.normalize(
            input_data.page,
            input_data.page_size,
            default_size=self._default_page_size,
            max_size=self._max_page_size,
        )
        movie_filter = MovieFilter(
            search=input_data.search,
            category_id=input_data.category_id,
            categories=normalize_tags(input_data.categories),
            year=input_data.year,
        )
        movies, total = self._movies.search(
            movie_filter,
            sort=MovieSort.resolve(input_data.sort_by),
            offset=page_request.offset,
            limit=page_request.limit,
        )
        return MoviePageResult(
            movies=movies,
            total=total,
            page=page_request.page,
            page_size=page_request.page_size,
            total_pages=total_pages(total, page_request.page_size),
        )
