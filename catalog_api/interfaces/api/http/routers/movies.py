"""
===============================================================================
TARJETA CRC: routers/movies.py
===============================================================================

Class/Module:
    Movie Router (lectura pública del catálogo)

Responsibilities:
    - GET /movies: filtros (search, category_id, categories, year), sort_by y
      paginación; responde la página + total del set filtrado.
    - GET /movies/top-rated, /movies/recently-added, /movies/{id},
      /movies/{id}/related.
    - Traducir MovieError -> HTTP.

Collaborators:
    - application.usecases.movies
    - container (factories DI)
    - schemas.movies

Notas:
    - Las rutas estáticas se declaran antes de /movies/{movie_id}.
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from .....application.usecases.movies import (
    GetMovieUseCase,
    ListMoviesInput,
    ListMoviesUseCase,
    RecentlyAddedMoviesUseCase,
    RelatedMoviesUseCase,
    TopRatedMoviesUseCase,
)
from .....container import (
    get_get_movie_use_case,
    get_list_movies_use_case,
    get_recently_added_movies_use_case,
    get_related_movies_use_case,
    get_top_rated_movies_use_case,
)
from ..dependencies import missing_payload, parse_category_tags
from ..error_mapping import raise_movie_error
from ..schemas.movies import MovieListRes, MovieRes, MoviesRes

router = APIRouter(prefix="/movies", tags=["movies"])


@router.get("", response_model=MovieListRes)
def list_movies(
    search: Optional[str] = Query(None, max_length=200),
    category_id: Optional[int] = Query(None),
    categories: Optional[List[str]] = Query(None),
    year: Optional[int] = Query(None),
    sort_by: Optional[str] = Query(None),
    page: Optional[int] = Query(None),
    page_size: Optional[int] = Query(None),
    use_case: ListMoviesUseCase = Depends(get_list_movies_use_case),
):
    result = use_case.execute(
        ListMoviesInput(
            search=search,
            category_id=category_id,
            categories=parse_category_tags(categories),
            year=year,
            sort_by=sort_by,
            page=page,
            page_size=page_size,
        )
    )
    if result.error is not None:
        raise_movie_error(result.error.code, result.error.message)

    return MovieListRes(
        movies=[MovieRes.from_entity(m) for m in result.movies],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.get("/top-rated", response_model=MoviesRes)
def top_rated_movies(
    limit: Optional[int] = Query(None),
    use_case: TopRatedMoviesUseCase = Depends(get_top_rated_movies_use_case),
):
    result = use_case.execute(limit)
    return MoviesRes(movies=[MovieRes.from_entity(m) for m in result.movies])


@router.get("/recently-added", response_model=MoviesRes)
def recently_added_movies(
    limit: Optional[int] = Query(None),
    use_case: RecentlyAddedMoviesUseCase = Depends(
        get_recently_added_movies_use_case
    ),
):
    result = use_case.execute(limit)
    return MoviesRes(movies=[MovieRes.from_entity(m) for m in result.movies])


@router.get("/{movie_id}", response_model=MovieRes)
def get_movie(
    movie_id: int,
    use_case: GetMovieUseCase = Depends(get_get_movie_use_case),
):
    result = use_case.execute(movie_id)
    if result.error is not None:
        raise_movie_error(result.error.code, result.error.message)
    if result.movie is None:
        raise missing_payload("movie")
    return MovieRes.from_entity(result.movie)


@router.get("/{movie_id}/related", response_model=MoviesRes)
def related_movies(
    movie_id: int,
    limit: Optional[int] = Query(None),
    use_case: RelatedMoviesUseCase = Depends(get_related_movies_use_case),
):
    result = use_case.execute(movie_id, limit)
    if result.error is not None:
        raise_movie_error(result.error.code, result.error.message)
    return MoviesRes(movies=[MovieRes.from_entity(m) for m in result.movies])
