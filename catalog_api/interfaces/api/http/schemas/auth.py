"""
===============================================================================
TARJETA CRC: schemas/auth.py
===============================================================================

Responsabilidades:
    - DTOs de register / login y la respuesta común AuthResponse.
    - Normalización liviana (strip); las reglas de negocio viven en AuthService.

Colaboradores:
    - identity.auth_service.AuthResult
===============================================================================
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .....identity.auth_service import AuthResult


class RegisterReq(BaseModel):
    email: str = Field(default="", max_length=320)
    password: str = Field(default="", max_length=1024)
    name: str = Field(default="", max_length=512)

    @field_validator("email", "name")
    @classmethod
    def strip_value(cls, v: str) -> str:
        return v.strip()


class LoginReq(BaseModel):
    email: str = Field(default="", max_length=320)
    password: str = Field(default="", max_length=1024)


class AuthResponse(BaseModel):
    token: str
    expires_in: int = Field(..., description="Vida del token en segundos")
    user_id: int
    name: str
    email: str
    is_admin: bool

    @classmethod
    def from_result(cls, result: AuthResult) -> "AuthResponse":
        return cls(
            token=result.token,
            expires_in=result.expires_in,
            user_id=result.user.id,
            name=result.user.name,
            email=result.user.email,
            is_admin=result.user.is_admin,
        )
