"""Category use cases (public API of the package)."""

from .category_results import (
    CategoryError,
    CategoryErrorCode,
    CategoryListResult,
    CategoryResult,
    DeleteCategoryResult,
)
from .create_category import CreateCategoryUseCase
from .delete_category import DeleteCategoryUseCase
from .queries import GetCategoryUseCase, ListCategoriesUseCase

__all__ = [
    "CategoryError",
    "CategoryErrorCode",
    "CategoryListResult",
    "CategoryResult",
    "CreateCategoryUseCase",
    "DeleteCategoryResult",
    "DeleteCategoryUseCase",
    "GetCategoryUseCase",
    "ListCategoriesUseCase",
]
