"""Category Router: listado y detalle públicos (escrituras en routers/admin.py)."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from .....application.usecases.categories import (
    GetCategoryUseCase,
    ListCategoriesUseCase,
)
from .....container import get_get_category_use_case, get_list_categories_use_case
from ..dependencies import missing_payload
from ..error_mapping import raise_category_error
from ..schemas.categories import CategoriesRes, CategoryRes

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=CategoriesRes)
def list_categories(
    use_case: ListCategoriesUseCase = Depends(get_list_categories_use_case),
):
    result = use_case.execute()
    if result.error is not None:
        raise_category_error(result.error.code, result.error.message)
    return CategoriesRes(
        categories=[CategoryRes.from_entity(c) for c in result.categories]
    )


@router.get("/{category_id}", response_model=CategoryRes)
def get_category(
    category_id: int,
    use_case: GetCategoryUseCase = Depends(get_get_category_use_case),
):
    result = use_case.execute(category_id)
    if result.error is not None:
        raise_category_error(result.error.code, result.error.message)
    if result.category is None:
        raise missing_payload("category")
    return CategoryRes.from_entity(result.category)
