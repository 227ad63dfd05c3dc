"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus)

Responsabilidades:
    - Definir métricas Prometheus en un registry propio.
    - Proveer funciones pequeñas y estables para registrar eventos/duraciones.
    - Cuidar cardinalidad (NO user_id, NO SQL completo, NO IDs dinámicos).
    - Exponer el body de /metrics.

Colaboradores:
    - crosscutting.middleware: latencia y conteo HTTP.
    - identity.access_control: rechazos de autenticación/autorización.
    - routers/auth: intentos de register/login/refresh por resultado.
    - infrastructure/db/instrumentation: duración de queries.
===============================================================================
"""

from __future__ import annotations

import re

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

_requests_total = Counter(
    "catalog_http_requests_total",
    "Total HTTP requests",
    ["endpoint", "method", "status"],
    registry=_registry,
)
_request_latency = Histogram(
    "catalog_http_request_latency_seconds",
    "HTTP request latency",
    ["endpoint", "method"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=_registry,
)
_auth_rejections_total = Counter(
    "catalog_auth_rejections_total",
    "Requests rejected by the access control stages",
    ["reason"],
    registry=_registry,
)
_auth_operations_total = Counter(
    "catalog_auth_operations_total",
    "Register / login / refresh attempts by outcome",
    ["operation", "outcome"],
    registry=_registry,
)
_db_query_duration = Histogram(
    "catalog_db_query_duration_seconds",
    "Database query duration",
    ["kind"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
    registry=_registry,
)


def record_request_metrics(
    endpoint: str,
    method: str,
    status_code: int,
    latency_seconds: float,
) -> None:
    """Registra métricas HTTP.

    - endpoint se normaliza para no explotar cardinalidad.
    - status se agrupa por 2xx/4xx/5xx.
    """
    normalized = _normalize_endpoint(endpoint)
    _requests_total.labels(
        endpoint=normalized, method=method, status=_status_bucket(status_code)
    ).inc()
    _request_latency.labels(endpoint=normalized, method=method).observe(
        latency_seconds
    )


def record_auth_rejection(reason: str) -> None:
    """reason: missing_token | invalid_token | forbidden."""
    _auth_rejections_total.labels(reason=reason).inc()


def record_auth_operation(operation: str, outcome: str) -> None:
    """operation: register | login | refresh; outcome: ok | conflict | invalid | rejected."""
    _auth_operations_total.labels(operation=operation, outcome=outcome).inc()


def observe_db_query_duration(kind: str, seconds: float) -> None:
    """`kind` debe ser baja cardinalidad (SELECT/INSERT/UPDATE/...)."""
    _db_query_duration.labels(kind=(kind or "UNKNOWN").upper()).observe(seconds)


def _normalize_endpoint(path: str) -> str:
    """Reemplaza IDs numéricos por `{id}`."""
    return re.sub(r"/\d+(?=/|$)", "/{id}", path)


def _status_bucket(code: int) -> str:
    if 200 <= code < 300:
        return "2xx"
    if 300 <= code < 400:
        return "3xx"
    if 400 <= code < 500:
        return "4xx"
    return "5xx"


def get_metrics_response() -> tuple[bytes, str]:
    """Genera el body y content-type para /metrics."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
