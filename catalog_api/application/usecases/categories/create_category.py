"""
===============================================================================
USE CASE: Create Category (admin)
===============================================================================

Rules:
    - name requerido (trim), máximo MAX_CATEGORY_NAME_CHARS.
    - CONFLICT si el nombre ya existe (pre-chequeo + DuplicateKeyError).
    - Las películas que ya tienen el tag quedan asociadas (lo hace el repo).
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.exceptions import DuplicateKeyError
from ....domain.repositories import CategoryRepository
from .category_results import CategoryError, CategoryErrorCode, CategoryResult

MAX_CATEGORY_NAME_CHARS = 100


class CreateCategoryUseCase:
    def __init__(self, repository: CategoryRepository) -> None:
        self._categories = repository

    def execute(self, name: str) -> CategoryResult:
        normalized = (name or "").strip()
        if not normalized:
            return self._validation_error("Category name is required")
        if len(normalized) > MAX_CATEGORY_NAME_CHARS:
            return self._validation_error(
                f"Category name must be at most {MAX_CATEGORY_NAME_CHARS} characters"
            )

        if self._categories.exists_by_name(normalized):
            return self._conflict()

        try:
            category = self._categories.create(normalized)
        except DuplicateKeyError:
            return self._conflict()

        return CategoryResult(category=category)

    @staticmethod
    def _validation_error(message: str) -> CategoryResult:
        return CategoryResult(
            error=CategoryError(code=CategoryErrorCode.VALIDATION_ERROR, message=message)
        )

    @staticmethod
    def _conflict() -> CategoryResult:
        return CategoryResult(
            error=CategoryError(
                code=CategoryErrorCode.CONFLICT, message="Category already exists"
            )
        )
