# catalog_api/crosscutting/middleware.py
"""
===============================================================================
MÓDULO: Middlewares HTTP (contexto + límites de payload y tiempo)
===============================================================================

1) RequestContextMiddleware: request_id, contextvars, log y métricas por request
2) BodyLimitMiddleware: rechaza payloads gigantes (incluyendo chunked)
3) RequestTimeoutMiddleware: corta requests que exceden el deadline del server

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Responsabilidades:
  - Observabilidad (request_id + logs + métricas)
  - Seguridad (límite estricto de body, deadline por request)

Colaboradores:
  - catalog_api/context.py
  - crosscutting/metrics.py
  - crosscutting/error_responses.py
===============================================================================
"""

from __future__ import annotations

import asyncio
import json
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .error_responses import ErrorBody, ErrorCode
from .logger import logger
from .metrics import record_request_metrics


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      RequestContextMiddleware

    Responsabilidades:
      - Generar/aceptar X-Request-Id y devolverlo en la respuesta
      - Setear contextvars para correlación de logs
      - Emitir logs y métricas por request
      - Garantizar clear_context() para evitar leaks

    Colaboradores:
      - crosscutting.metrics.record_request_metrics
      - crosscutting.logger
    ----------------------------------------------------------------------------
    """

    _QUIET_PATHS = {"/healthz", "/metrics"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        incoming = (request.headers.get("x-request-id") or "").strip()
        request_id = incoming if 0 < len(incoming) <= 128 else str(uuid.uuid4())

        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )
        request.state.request_id = request_id

        start = time.perf_counter()
        status_code = 500

        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers["X-Request-Id"] = request_id
            return response
        except Exception:
            logger.exception("request failed", extra={"status_code": 500})
            raise
        finally:
            latency = time.perf_counter() - start
            record_request_metrics(
                endpoint=request.url.path,
                method=request.method,
                status_code=status_code,
                latency_seconds=latency,
            )
            if request.url.path not in self._QUIET_PATHS:
                logger.info(
                    "request completed",
                    extra={
                        "status_code": status_code,
                        "latency_ms": round(latency * 1000, 2),
                    },
                )
            clear_context()


async def _send_error(
    send, *, status: int, code: ErrorCode, message: str, request_id: str | None
) -> None:
    body = ErrorBody(
        error=message, code=code, status=status, request_id=request_id
    ).model_dump(mode="json", exclude_none=True)
    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": [(b"content-type", b"application/json")],
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": json.dumps(body, ensure_ascii=False).encode("utf-8"),
        }
    )


def _header(scope, name: bytes) -> str:
    for key, value in scope.get("headers", []):
        if key.lower() == name:
            return value.decode("latin-1")
    return ""


class _BodyTooLarge(Exception):
    pass


class BodyLimitMiddleware:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      BodyLimitMiddleware

    Responsabilidades:
      - Rechazar requests cuyo body exceda max_bytes (413)
      - Funciona tanto con Content-Length como con transferencia chunked
    ----------------------------------------------------------------------------
    """

    def __init__(self, app, max_bytes: int):
        self.app = app
        self._max_bytes = max_bytes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        request_id = _header(scope, b"x-request-id") or None

        content_length = _header(scope, b"content-length")
        if content_length.isdigit() and int(content_length) > self._max_bytes:
            logger.warning(
                "payload too large (content-length)",
                extra={"content_length": content_length, "max_bytes": self._max_bytes, "path": path},
            )
            await self._send_413(send, request_id)
            return

        started = False
        received = 0

        async def send_wrapper(message):
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        async def receive_limited():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b"") or b"")
                if received > self._max_bytes:
                    raise _BodyTooLarge()
            return message

        try:
            await self.app(scope, receive_limited, send_wrapper)
        except _BodyTooLarge:
            if started:
                raise
            logger.warning(
                "payload too large (streaming)",
                extra={"received_bytes": received, "max_bytes": self._max_bytes, "path": path},
            )
            await self._send_413(send, request_id)

    async def _send_413(self, send, request_id: str | None) -> None:
        await _send_error(
            send,
            status=413,
            code=ErrorCode.PAYLOAD_TOO_LARGE,
            message=f"Request body exceeds the maximum allowed size ({self._max_bytes} bytes)",
            request_id=request_id,
        )


class RequestTimeoutMiddleware:
    """
    Deadline por request (503 si vence antes de empezar la respuesta).

    La cancelación llega al handler async; los handlers sync siguen acotados
    por statement_timeout en la conexión de DB.
    """

    def __init__(self, app, timeout_seconds: float):
        self.app = app
        self._timeout = timeout_seconds

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        started = False

        async def send_wrapper(message):
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await asyncio.wait_for(
                self.app(scope, receive, send_wrapper), timeout=self._timeout
            )
        except asyncio.TimeoutError:
            logger.error(
                "request timed out",
                extra={"path": scope.get("path", ""), "timeout_seconds": self._timeout},
            )
            if started:
                raise
            await _send_error(
                send,
                status=503,
                code=ErrorCode.SERVICE_UNAVAILABLE,
                message="Request timed out",
                request_id=_header(scope, b"x-request-id") or None,
            )
