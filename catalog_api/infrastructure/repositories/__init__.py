"""
============================================================
TARJETA CRC
============================================================
Package: catalog_api.infrastructure.repositories

Responsibilities:
- Agrupar implementaciones concretas de los puertos del dominio:
  postgres/ (producción) e in_memory/ (tests y desarrollo local).
============================================================
"""
