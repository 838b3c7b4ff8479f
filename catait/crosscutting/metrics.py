"""
===============================================================================
FILE: crosscutting/metrics.py
===============================================================================

CRC CARD (Module)
-------------------------------------------------------------------------------
Name:
    Metrics (Prometheus), low-coupling observability

Responsibilities:
    - Define Prometheus metrics in a dedicated registry.
    - Provide small, stable functions to record events/durations.
    - Keep cardinality low (NO user ids, NO full SQL, NO raw card ids).
    - Build the /metrics response.

Collaborators:
    - crosscutting.middleware: records HTTP latency and counts.
    - infrastructure/db/instrumentation: observes query duration.
    - application/usecases: counts card lookup / reset-token outcomes.
===============================================================================
"""

from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

# ------------------------
# HTTP
# ------------------------
_requests_total = Counter(
    "catait_requests_total",
    "Total HTTP requests",
    ["endpoint", "method", "status"],
    registry=_registry,
)

_request_latency = Histogram(
    "catait_request_latency_seconds",
    "HTTP request latency (seconds)",
    ["endpoint", "method"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=_registry,
)

# ------------------------
# DB
# ------------------------
_db_query_duration = Histogram(
    "catait_db_query_duration_seconds",
    "DB query duration (seconds)",
    ["kind"],
    buckets=(0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
    registry=_registry,
)

# ------------------------
# Domain outcomes
# ------------------------
_card_lookup_total = Counter(
    "catait_card_lookup_total",
    "Card lookups by outcome",
    ["outcome"],
    registry=_registry,
)

_reset_token_total = Counter(
    "catait_reset_token_total",
    "Reset-token operations by operation and outcome",
    ["operation", "outcome"],
    registry=_registry,
)


# -----------------------------------------------------------------------------
# Public API (recording helpers)
# -----------------------------------------------------------------------------


def record_request_metrics(
    endpoint: str,
    method: str,
    status_code: int,
    latency_seconds: float,
) -> None:
    """Record HTTP metrics.

    - endpoint is a route template (`/cards/{card_id}`) or "unmatched",
      never a raw path.
    - status is grouped as 2xx/4xx/5xx.
    """
    _requests_total.labels(
        endpoint=endpoint,
        method=method,
        status=_status_bucket(status_code),
    ).inc()
    _request_latency.labels(endpoint=endpoint, method=method).observe(
        latency_seconds
    )


def observe_db_query_duration(kind: str, seconds: float) -> None:
    """`kind` must be low cardinality (SELECT/INSERT/UPDATE/...), never full SQL."""
    _db_query_duration.labels(kind=(kind or "UNKNOWN").upper()).observe(seconds)


def record_card_lookup(outcome: str) -> None:
    _card_lookup_total.labels(outcome=outcome.lower()).inc()


def record_reset_token(operation: str, outcome: str) -> None:
    _reset_token_total.labels(operation=operation, outcome=outcome.lower()).inc()


def _status_bucket(code: int) -> str:
    if 200 <= code < 300:
        return "2xx"
    if 400 <= code < 500:
        return "4xx"
    if 500 <= code < 600:
        return "5xx"
    return "other"


def get_metrics_response() -> tuple[bytes, str]:
    """Body and content-type for /metrics."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
