"""
CATEGORY USE CASE RESULTS

CategoryErrorCode + CategoryError + resultados (CategoryResult,
CategoryListResult, DeleteCategoryResult). La capa HTTP los traduce a status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.entities import Category


class CategoryErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class CategoryError:
    code: CategoryErrorCode
    message: str


@dataclass
class CategoryResult:
    category: Category | None = None
    error: CategoryError | None = None


@dataclass
class CategoryListResult:
    categories: List[Category] = field(default_factory=list)
    error: CategoryError | None = None


@dataclass
class DeleteCategoryResult:
    deleted: bool = False
    error: CategoryError | None = None


def category_not_found() -> CategoryError:
    return CategoryError(code=CategoryErrorCode.NOT_FOUND, message="Category not found")
