"""
USE CASES: List / Get Category

- ListCategoriesUseCase: todas, ordenadas por nombre ascendente.
- GetCategoryUseCase: por id o NOT_FOUND.
"""

from __future__ import annotations

from ....domain.repositories import CategoryRepository
from .category_results import CategoryListResult, CategoryResult, category_not_found


class ListCategoriesUseCase:
    def __init__(self, repository: CategoryRepository) -> None:
        self._categories = repository

    def execute(self) -> CategoryListResult:
        return CategoryListResult(categories=self._categories.list_all())


class GetCategoryUseCase:
    def __init__(self, repository: CategoryRepository) -> None:
        self._categories = repository

    def execute(self, category_id: int) -> CategoryResult:
        category = self._categories.get_by_id(category_id)
        if category is None:
            return CategoryResult(error=category_not_found())
        return CategoryResult(category=category)
