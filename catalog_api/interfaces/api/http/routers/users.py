"""
===============================================================================
TARJETA CRC: routers/users.py
===============================================================================

Responsabilidades:
    - GET/PUT /users/profile (self-service, requiere bearer).
    - La identidad llega tipada (AuthContext) desde la etapa de autenticación.

Colaboradores:
    - identity.access_control.require_user
    - application.usecases.users (GetUserUseCase, UpdateProfileUseCase)
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from .....application.usecases.users import GetUserUseCase, UpdateProfileUseCase
from .....container import get_get_user_use_case, get_update_profile_use_case
from .....identity.access_control import AuthContext, require_user
from ..dependencies import missing_payload
from ..error_mapping import raise_user_error
from ..schemas.users import UpdateProfileReq, UserRes

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/profile", response_model=UserRes)
def get_profile(
    auth: AuthContext = Depends(require_user()),
    use_case: GetUserUseCase = Depends(get_get_user_use_case),
):
    result = use_case.execute(auth.user_id)
    if result.error is not None:
        raise_user_error(result.error.code, result.error.message)
    if result.user is None:
        raise missing_payload("user")
    return UserRes.from_entity(result.user)


@router.put("/profile", response_model=UserRes)
def update_profile(
    req: UpdateProfileReq,
    auth: AuthContext = Depends(require_user()),
    use_case: UpdateProfileUseCase = Depends(get_update_profile_use_case),
):
    result = use_case.execute(auth.user_id, req.name)
    if result.error is not None:
        raise_user_error(result.error.code, result.error.message)
    if result.user is None:
        raise missing_payload("user")
    return UserRes.from_entity(result.user)
