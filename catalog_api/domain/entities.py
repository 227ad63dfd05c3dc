"""
===============================================================================
TARJETA CRC: domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (User, Movie, Category)

Responsabilidades:
    - Definir estructuras centrales del catálogo (sin infraestructura).
    - Exponer helpers mínimos para mantener invariantes simples.

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - application/usecases, identity: construyen/consumen estas entidades.
    - interfaces/api: serializan DTOs basados en estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI.
    - IDs enteros (BIGSERIAL en Postgres).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional


def utcnow() -> datetime:
    """Fecha/hora UTC."""
    return datetime.now(timezone.utc)


def normalize_tags(tags: Optional[List[str]]) -> List[str]:
    """Trim, descarta vacíos y deduplica preservando el orden."""
    seen: set[str] = set()
    out: List[str] = []
    for tag in tags or []:
        value = (tag or "").strip()
        if value and value not in seen:
            seen.add(value)
            out.append(value)
    return out


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario (Credential Store). Email único."""

    id: int
    email: str
    password_hash: str
    name: str
    is_admin: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class Movie:
    """
    Entrada del catálogo.

    - `categories` son tags (strings); la asociación con Category vive en
      movie_categories y se sincroniza por nombre al escribir la película.
    - duration en minutos; rating en escala 0-10 (float).
    """

    id: int
    title: str
    description: str = ""
    release_year: Optional[int] = None
    duration: Optional[int] = None
    poster_url: str = ""
    video_url: str = ""
    categories: List[str] = field(default_factory=list)
    rating: float = 0.0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def shares_category_with(self, tags: List[str]) -> bool:
        return bool(set(self.categories) & set(tags))


@dataclass(frozen=True, slots=True)
class Category:
    """Categoría. Nombre único; no se borra mientras esté asociada a películas."""

    id: int
    name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
