# catalog_api/crosscutting/logger.py
"""
===============================================================================
MÓDULO: Logger estructurado del catálogo
===============================================================================

Una línea JSON por evento, con el request_id del request en curso y sin
secretos (passwords, hashes, bearer tokens, DSN, secreto de firma JWT).

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + PlainFormatter + setup_logger()

Responsabilidades:
  - Serializar LogRecord + extra como JSON
  - Mezclar el contexto del request (request_id, method, path)
  - Ocultar valores de claves sensibles, acotar strings y anidamiento

Colaboradores:
  - catalog_api/context.py (ContextVars)
  - crosscutting/config.py (log_level, log_json)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

from ..context import get_context_dict

LOGGER_NAME = "catalog-api"
REDACTED = "***REDACTED***"
TRUNCATED = "***TRUNCATED***"

# R: Atributos estándar de LogRecord; todo lo demás vino por extra=.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}

# R: Match por fragmento: "jwt_secret", "access_token", "new_password"...
_SENSITIVE_FRAGMENTS = (
    "password",
    "secret",
    "token",
    "authorization",
    "database_url",
    "dsn",
    "credential",
)


def is_sensitive_key(key: str) -> bool:
    lowered = key.lower()
    return any(fragment in lowered for fragment in _SENSITIVE_FRAGMENTS)


def scrub(
    value: Any,
    *,
    key: str | None = None,
    depth: int = 0,
    max_str: int = 4_000,
    max_depth: int = 4,
) -> Any:
    """Copia serializable de `value` sin secretos."""
    if key is not None and is_sensitive_key(key):
        return REDACTED
    if depth > max_depth:
        return TRUNCATED

    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return value if len(value) <= max_str else value[:max_str] + "…(truncated)"
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    if isinstance(value, dict):
        return {
            str(k): scrub(
                v, key=str(k), depth=depth + 1, max_str=max_str, max_depth=max_depth
            )
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple, set, frozenset)):
        return [
            scrub(item, key=key, depth=depth + 1, max_str=max_str, max_depth=max_depth)
            for item in value
        ]
    return str(value)


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        name: scrub(value, key=name)
        for name, value in record.__dict__.items()
        if name not in _RESERVED_ATTRS
    }


class JSONFormatter(logging.Formatter):
    """LogRecord -> una línea JSON (contexto del request + extra + excepción)."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "pid": os.getpid(),
        }
        entry.update(get_context_dict())
        entry.update(_extra_fields(record))

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": self.formatException(record.exc_info),
            }

        return json.dumps(entry, ensure_ascii=False, default=str, separators=(",", ":"))


class PlainFormatter(logging.Formatter):
    """Formato legible para desarrollo local (log_json=false)."""

    def __init__(self) -> None:
        super().__init__("%(levelname)s %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        request_id = get_context_dict().get("request_id")
        return f"{line} [request_id={request_id}]" if request_id else line


def setup_logger(
    name: str = LOGGER_NAME, *, level: str = "INFO", use_json: bool = True
) -> logging.Logger:
    """
    Configura el logger del servicio (idempotente: un único handler a stdout).
    """
    log = logging.getLogger(name)
    log.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not log.handlers:
        log.addHandler(logging.StreamHandler(sys.stdout))

    formatter: logging.Formatter = JSONFormatter() if use_json else PlainFormatter()
    for handler in log.handlers:
        handler.setFormatter(formatter)
    return log


def configure_logging(settings) -> logging.Logger:
    """Aplica log_level / log_json de Settings una vez cargados."""
    return setup_logger(LOGGER_NAME, level=settings.log_level, use_json=settings.log_json)


logger = setup_logger()
