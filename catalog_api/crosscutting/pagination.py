# catalog_api/crosscutting/pagination.py
"""
===============================================================================
MÓDULO: Paginación por número de página
===============================================================================

CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  PageRequest + total_pages()

Responsabilidades:
  - Normalizar page/page_size con UN default canónico para todo el sistema
  - Calcular offset = (page - 1) * page_size, acotado al rango bigint
  - Calcular total_pages para la metadata de los listados

Colaboradores:
  - interfaces/api/http/routers/* (query params)
  - application/usecases/* (offset/limit para repositorios)
===============================================================================
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

# R: OFFSET de Postgres es bigint; el offset calculado nunca lo supera.
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True, slots=True)
class PageRequest:
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    @classmethod
    def normalize(
        cls,
        page: Optional[int] = None,
        page_size: Optional[int] = None,
        *,
        default_size: int = DEFAULT_PAGE_SIZE,
        max_size: int = MAX_PAGE_SIZE,
    ) -> "PageRequest":
        """
        Reglas:
          - page ausente o <= 0 -> 1
          - page_size ausente o <= 0 -> default_size
          - page_size > max_size -> max_size
          - page tal que offset > MAX_OFFSET -> última página representable
            (la respuesta es una página vacía, no un error de DB)
        """
        resolved_page = page if page is not None and page > 0 else DEFAULT_PAGE
        resolved_size = (
            page_size if page_size is not None and page_size > 0 else default_size
        )
        resolved_size = min(resolved_size, max_size)
        max_page = MAX_OFFSET // resolved_size + 1
        return cls(page=min(resolved_page, max_page), page_size=resolved_size)


def total_pages(total: int, page_size: int) -> int:
    if total <= 0:
        return 0
    return math.ceil(total / page_size)

