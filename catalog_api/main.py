"""
Name: Backend ASGI Entrypoint (catalog_api.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Keep the import path used by uvicorn and tests stable

Notes/Constraints:
  - No configuration or IO should live here
  - Changing this path is a deployment-breaking change for infra scripts
"""

from catalog_api.api.main import app

__all__ = ["app"]
