"""
===============================================================================
USE CASE: Delete Category (admin)
===============================================================================

Rules:
    - NOT_FOUND si la categoría no existe.
    - CONFLICT si alguna asociación película-categoría la referencia
      (también si la FK del store rechaza el borrado por una carrera).
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.exceptions import ReferencedRowError
from ....domain.repositories import CategoryRepository
from .category_results import (
    CategoryError,
    CategoryErrorCode,
    DeleteCategoryResult,
    category_not_found,
)

_IN_USE_MESSAGE = "Category is being used by movies"


class DeleteCategoryUseCase:
    def __init__(self, repository: CategoryRepository) -> None:
        self._categories = repository

    def execute(self, category_id: int) -> DeleteCategoryResult:
        if self._categories.get_by_id(category_id) is None:
            return DeleteCategoryResult(error=category_not_found())

        if self._categories.is_in_use(category_id):
            return self._in_use()

        try:
            deleted = self._categories.delete(category_id)
        except ReferencedRowError:
            return self._in_use()

        if not deleted:
            return DeleteCategoryResult(error=category_not_found())

        return DeleteCategoryResult(deleted=True)

    @staticmethod
    def _in_use() -> DeleteCategoryResult:
        return DeleteCategoryResult(
            error=CategoryError(code=CategoryErrorCode.CONFLICT, message=_IN_USE_MESSAGE)
        )
