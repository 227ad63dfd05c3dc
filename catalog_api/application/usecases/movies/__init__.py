"""Movie use cases (public API of the package)."""

from .create_movie import CreateMovieInput, CreateMovieUseCase
from .delete_movie import DeleteMovieUseCase
from .get_movie import GetMovieUseCase
from .highlight_movies import (
    RecentlyAddedMoviesUseCase,
    RelatedMoviesUseCase,
    TopRatedMoviesUseCase,
)
from .list_movies import ListMoviesInput, ListMoviesUseCase
from .movie_results import (
    DeleteMovieResult,
    MovieError,
    MovieErrorCode,
    MovieListResult,
    MoviePageResult,
    MovieResult,
)
from .update_movie import UpdateMovieInput, UpdateMovieUseCase

__all__ = [
    "CreateMovieInput",
    "CreateMovieUseCase",
    "DeleteMovieResult",
    "DeleteMovieUseCase",
    "GetMovieUseCase",
    "ListMoviesInput",
    "ListMoviesUseCase",
    "MovieError",
    "MovieErrorCode",
    "MovieListResult",
    "MoviePageResult",
    "MovieResult",
    "RecentlyAddedMoviesUseCase",
    "RelatedMoviesUseCase",
    "TopRatedMoviesUseCase",
    "UpdateMovieInput",
    "UpdateMovieUseCase",
]
