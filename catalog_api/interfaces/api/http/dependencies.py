"""
===============================================================================
TARJETA CRC: dependencies.py (helpers comunes de routers)
===============================================================================

Responsabilidades:
  - Parseo de query params compartidos (tags de categorías repetidos o CSV).
  - Guardia de "resultado sin payload" para casos de uso.

Colaboradores:
  - crosscutting.error_responses
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional

from ....crosscutting.error_responses import AppHTTPException, internal_error
from ....crosscutting.logger import logger


def parse_category_tags(raw: Optional[List[str]]) -> List[str]:
    """
    `?categories=a&categories=b` y `?categories=a,b` son equivalentes.

    Vacíos y duplicados se descartan (preserva el primer orden visto).
    """
    tags: List[str] = []
    for value in raw or []:
        for part in value.split(","):
            cleaned = part.strip()
            if cleaned and cleaned not in tags:
                tags.append(cleaned)
    return tags


def missing_payload(resource: str) -> AppHTTPException:
    """Un use case sin error ni payload es un bug interno, nunca un 200 vacío."""
    logger.error("use case returned no payload", extra={"resource": resource})
    return internal_error()
