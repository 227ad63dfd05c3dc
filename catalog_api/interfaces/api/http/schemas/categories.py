"""Schemas HTTP para categorías."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .....domain.entities import Category


class CreateCategoryReq(BaseModel):
    name: str = Field(default="", max_length=512)


class CategoryRes(BaseModel):
    id: int
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, category: Category) -> "CategoryRes":
        return cls(
            id=category.id,
            name=category.name,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )


class CategoriesRes(BaseModel):
    categories: List[CategoryRes]
