"""
===============================================================================
TARJETA CRC: router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI bajo /api.
  - Centralizar responses de error para OpenAPI.
  - Componer sub-routers por bounded context.

Colaboradores:
  - crosscutting.error_responses.OPENAPI_ERROR_RESPONSES
  - routers.* (auth, movies, categories, users, admin)
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.admin import router as admin_router
from .routers.auth import router as auth_router
from .routers.categories import router as categories_router
from .routers.movies import router as movies_router
from .routers.users import router as users_router


def build_router() -> APIRouter:
    """Construye el router raíz (testeable sin levantar la app)."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    # Orden: públicos primero, admin al final.
    api_router.include_router(auth_router)
    api_router.include_router(movies_router)
    api_router.include_router(categories_router)
    api_router.include_router(users_router)
    api_router.include_router(admin_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
