"""
===============================================================================
TARJETA CRC: catalog_api/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer repositorios, servicios de identidad y casos de uso.
  - Mantener singletons con caching (lru_cache) para recursos compartidos.
  - Elegir adapters según Settings: in-memory en test, Postgres en runtime.

Colaboradores:
  - crosscutting.config.get_settings
  - domain.repositories.* (puertos)
  - infrastructure.repositories.* (implementaciones)
  - identity.* (TokenCodec, PasswordHasher, AuthService)
  - application.usecases.*

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI (solo expone factories).
  - Los repositorios in-memory de películas y categorías comparten un único
    InMemoryCatalogStore para que las asociaciones sean coherentes.
===============================================================================
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache

from .application.usecases.categories import (
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
    GetCategoryUseCase,
    ListCategoriesUseCase,
)
from .application.usecases.movies import (
    CreateMovieUseCase,
    DeleteMovieUseCase,
    GetMovieUseCase,
    ListMoviesUseCase,
    RecentlyAddedMoviesUseCase,
    RelatedMoviesUseCase,
    TopRatedMoviesUseCase,
    UpdateMovieUseCase,
)
from .application.usecases.users import (
    GetUserUseCase,
    ListUsersUseCase,
    UpdateProfileUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import (
    CategoryRepository,
    MovieRepository,
    UserRepository,
)
from .identity.auth_service import AuthService
from .identity.passwords import PasswordHasher
from .identity.token_codec import TokenCodec
from .infrastructure.repositories.in_memory import (
    InMemoryCatalogStore,
    InMemoryCategoryRepository,
    InMemoryMovieRepository,
    InMemoryUserRepository,
)
from .infrastructure.repositories.postgres import (
    PostgresCategoryRepository,
    PostgresMovieRepository,
    PostgresUserRepository,
)

# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_catalog_store() -> InMemoryCatalogStore:
    """Store compartido por los repos in-memory de catálogo (solo test)."""
    return InMemoryCatalogStore()


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Credential Store (in-memory en test; Postgres en runtime)."""
    if get_settings().is_test_env():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache(maxsize=1)
def get_movie_repository() -> MovieRepository:
    if get_settings().is_test_env():
        return InMemoryMovieRepository(get_catalog_store())
    return PostgresMovieRepository()


@lru_cache(maxsize=1)
def get_category_repository() -> CategoryRepository:
    if get_settings().is_test_env():
        return InMemoryCategoryRepository(get_catalog_store())
    return PostgresCategoryRepository()


# =============================================================================
# Identidad (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_token_codec() -> TokenCodec:
    """Codec JWT con el secreto explícito de Settings (nunca global)."""
    settings = get_settings()
    return TokenCodec(
        settings.jwt_secret,
        ttl=timedelta(hours=settings.jwt_ttl_hours),
    )


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    settings = get_settings()
    return PasswordHasher(
        time_cost=settings.password_hash_time_cost,
        memory_cost=settings.password_hash_memory_cost,
        parallelism=settings.password_hash_parallelism,
    )


@lru_cache(maxsize=1)
def get_auth_service() -> AuthService:
    return AuthService(
        users=get_user_repository(),
        codec=get_token_codec(),
        hasher=get_password_hasher(),
    )


# =============================================================================
# Casos de uso (factory por request)
# =============================================================================


def get_list_movies_use_case() -> ListMoviesUseCase:
    """Caso de uso: listado filtrado + paginado + ordenado."""
    settings = get_settings()
    return ListMoviesUseCase(
        get_movie_repository(),
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )


def get_get_movie_use_case() -> GetMovieUseCase:
    return GetMovieUseCase(get_movie_repository())


def get_create_movie_use_case() -> CreateMovieUseCase:
    return CreateMovieUseCase(get_movie_repository())


def get_update_movie_use_case() -> UpdateMovieUseCase:
    return UpdateMovieUseCase(get_movie_repository())


def get_delete_movie_use_case() -> DeleteMovieUseCase:
    return DeleteMovieUseCase(get_movie_repository())


def get_top_rated_movies_use_case() -> TopRatedMoviesUseCase:
    return TopRatedMoviesUseCase(get_movie_repository())


def get_recently_added_movies_use_case() -> RecentlyAddedMoviesUseCase:
    return RecentlyAddedMoviesUseCase(get_movie_repository())


def get_related_movies_use_case() -> RelatedMoviesUseCase:
    return RelatedMoviesUseCase(get_movie_repository())


def get_list_categories_use_case() -> ListCategoriesUseCase:
    return ListCategoriesUseCase(get_category_repository())


def get_get_category_use_case() -> GetCategoryUseCase:
    return GetCategoryUseCase(get_category_repository())


def get_create_category_use_case() -> CreateCategoryUseCase:
    return CreateCategoryUseCase(get_category_repository())


def get_delete_category_use_case() -> DeleteCategoryUseCase:
    """Caso de uso: borrado de categoría (rechazado si está en uso)."""
    return DeleteCategoryUseCase(get_category_repository())


def get_get_user_use_case() -> GetUserUseCase:
    return GetUserUseCase(get_user_repository())


def get_update_profile_use_case() -> UpdateProfileUseCase:
    return UpdateProfileUseCase(get_user_repository())


def get_list_users_use_case() -> ListUsersUseCase:
    settings = get_settings()
    return ListUsersUseCase(
        get_user_repository(),
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )


def reset_singletons() -> None:
    """Limpia los caches (tests y recarga de configuración)."""
    for factory in (
        get_catalog_store,
        get_user_repository,
        get_movie_repository,
        get_category_repository,
        get_token_codec,
        get_password_hasher,
        get_auth_service,
    ):
        factory.cache_clear()
