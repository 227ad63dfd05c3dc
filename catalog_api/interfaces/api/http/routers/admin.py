"""
===============================================================================
TARJETA CRC: routers/admin.py
===============================================================================

Name:
    Admin Router

Responsibilities:
    - Escrituras del catálogo: POST/PUT/DELETE /admin/movies,
      POST/DELETE /admin/categories.
    - Consulta de usuarios: GET /admin/users (paginado), /admin/users/{id}.
    - Cada endpoint compone las dos etapas de acceso (autenticación +
      is_admin re-leído del storage).

Collaborators:
    - identity.access_control.require_admin
    - application.usecases.{movies,categories,users}
    - container (factories DI)
    - error_mapping
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from .....application.usecases.categories import (
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
)
from .....application.usecases.movies import (
    CreateMovieInput,
    CreateMovieUseCase,
    DeleteMovieUseCase,
    UpdateMovieInput,
    UpdateMovieUseCase,
)
from .....application.usecases.users import GetUserUseCase, ListUsersUseCase
from .....container import (
    get_create_category_use_case,
    get_create_movie_use_case,
    get_delete_category_use_case,
    get_delete_movie_use_case,
    get_get_user_use_case,
    get_list_users_use_case,
    get_update_movie_use_case,
)
from .....crosscutting.logger import logger
from .....identity.access_control import AuthContext, require_admin
from ..dependencies import missing_payload
from ..error_mapping import raise_category_error, raise_movie_error, raise_user_error
from ..schemas.categories import CategoryRes, CreateCategoryReq
from ..schemas.movies import CreateMovieReq, MovieRes, UpdateMovieReq
from ..schemas.users import UserRes, UsersListRes

router = APIRouter(prefix="/admin", tags=["admin"])


# =============================================================================
# Movies
# =============================================================================


@router.post("/movies", response_model=MovieRes, status_code=201)
def create_movie(
    req: CreateMovieReq,
    admin: AuthContext = Depends(require_admin()),
    use_case: CreateMovieUseCase = Depends(get_create_movie_use_case),
):
    result = use_case.execute(CreateMovieInput(**req.model_dump()))
    if result.error is not None:
        raise_movie_error(result.error.code, result.error.message)
    if result.movie is None:
        raise missing_payload("movie")

    logger.info(
        "movie created",
        extra={"movie_id": result.movie.id, "admin_id": admin.user_id},
    )
    return MovieRes.from_entity(result.movie)


@router.put("/movies/{movie_id}", response_model=MovieRes)
def update_movie(
    movie_id: int,
    req: UpdateMovieReq,
    admin: AuthContext = Depends(require_admin()),
    use_case: UpdateMovieUseCase = Depends(get_update_movie_use_case),
):
    # R: exclude_unset => un campo ausente no pisa el valor actual.
    fields = req.model_dump(exclude_unset=True)
    result = use_case.execute(UpdateMovieInput(movie_id=movie_id, **fields))
    if result.error is not None:
        raise_movie_error(result.error.code, result.error.message)
    if result.movie is None:
        raise missing_payload("movie")

    logger.info(
        "movie updated",
        extra={"movie_id": movie_id, "admin_id": admin.user_id, "fields": sorted(fields)},
    )
    return MovieRes.from_entity(result.movie)


@router.delete("/movies/{movie_id}", status_code=204, response_class=Response)
def delete_movie(
    movie_id: int,
    admin: AuthContext = Depends(require_admin()),
    use_case: DeleteMovieUseCase = Depends(get_delete_movie_use_case),
):
    result = use_case.execute(movie_id)
    if result.error is not None:
        raise_movie_error(result.error.code, result.error.message)

    logger.info(
        "movie deleted",
        extra={"movie_id": movie_id, "admin_id": admin.user_id},
    )
    return Response(status_code=204)


# =============================================================================
# Categories
# =============================================================================


@router.post("/categories", response_model=CategoryRes, status_code=201)
def create_category(
    req: CreateCategoryReq,
    admin: AuthContext = Depends(require_admin()),
    use_case: CreateCategoryUseCase = Depends(get_create_category_use_case),
):
    result = use_case.execute(req.name)
    if result.error is not None:
        raise_category_error(result.error.code, result.error.message)
    if result.category is None:
        raise missing_payload("category")

    logger.info(
        "category created",
        extra={"category_id": result.category.id, "admin_id": admin.user_id},
    )
    return CategoryRes.from_entity(result.category)


@router.delete(
    "/categories/{category_id}", status_code=204, response_class=Response
)
def delete_category(
    category_id: int,
    admin: AuthContext = Depends(require_admin()),
    use_case: DeleteCategoryUseCase = Depends(get_delete_category_use_case),
):
    result = use_case.execute(category_id)
    if result.error is not None:
        raise_category_error(result.error.code, result.error.message)

    logger.info(
        "category deleted",
        extra={"category_id": category_id, "admin_id": admin.user_id},
    )
    return Response(status_code=204)


# =============================================================================
# Users
# =============================================================================


@router.get("/users", response_model=UsersListRes)
def list_users(
    page: Optional[int] = Query(None),
    page_size: Optional[int] = Query(None),
    _admin: AuthContext = Depends(require_admin()),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
):
    result = use_case.execute(page, page_size)
    if result.error is not None:
        raise_user_error(result.error.code, result.error.message)
    return UsersListRes(
        users=[UserRes.from_entity(u) for u in result.users],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.get("/users/{user_id}", response_model=UserRes)
def get_user(
    user_id: int,
    _admin: AuthContext = Depends(require_admin()),
    use_case: GetUserUseCase = Depends(get_get_user_use_case),
):
    result = use_case.execute(user_id)
    if result.error is not None:
        raise_user_error(result.error.code, result.error.message)
    if result.user is None:
        raise missing_payload("user")
    return UserRes.from_entity(result.user)
