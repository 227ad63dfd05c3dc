"""
===============================================================================
TARJETA CRC: schemas/users.py
===============================================================================

Responsabilidades:
    - Perfil público del usuario (nunca expone password_hash).
    - Request de actualización de perfil y listado admin paginado.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .....domain.entities import User


class UpdateProfileReq(BaseModel):
    name: str = Field(default="", max_length=512)


class UserRes(BaseModel):
    id: int
    email: str
    name: str
    is_admin: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserRes":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            is_admin=user.is_admin,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UsersListRes(BaseModel):
    users: List[UserRes]
    total: int
    page: int
    page_size: int
    total_pages: int
