"""
Name: HTTP server runner (python -m catalog_api.server)

Responsibilities:
  - Start uvicorn with the timeout envelope from Settings
  - Idle keep-alive and graceful-shutdown windows map onto uvicorn options;
    the per-request bound is RequestTimeoutMiddleware (see api/main.py)

Collaborators:
  - uvicorn.Config / uvicorn.Server
  - crosscutting.config.get_settings
"""

from __future__ import annotations

import uvicorn

from .crosscutting.config import get_settings
from .crosscutting.logger import logger


def build_server_config() -> uvicorn.Config:
    settings = get_settings()
    return uvicorn.Config(
        "catalog_api.main:app",
        host=settings.server_host,
        port=settings.server_port,
        timeout_keep_alive=settings.server_idle_timeout_seconds,
        timeout_graceful_shutdown=settings.server_shutdown_timeout_seconds,
        log_level=settings.log_level.lower(),
        access_log=False,
    )


def main() -> None:
    config = build_server_config()
    logger.info(
        "starting HTTP server",
        extra={"host": config.host, "port": config.port},
    )
    uvicorn.Server(config).run()


if __name__ == "__main__":
    main()
