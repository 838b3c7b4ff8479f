"""
===============================================================================
CRC CARD: crosscutting/middleware.py
===============================================================================

Responsibilities:
  - RequestContextMiddleware: X-Request-Id, log context, completion log and
    HTTP metrics labelled by route template.
  - BodyLimitMiddleware: 413 problem+json for bodies over max_body_bytes.

Collaborators:
  - catait/context.py
  - crosscutting/metrics.py
  - crosscutting/error_responses.py
===============================================================================
"""

from __future__ import annotations

import json
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .error_responses import PROBLEM_JSON_MEDIA_TYPE, ErrorCode, ErrorDetail
from .logger import logger
from .metrics import record_request_metrics

UNMATCHED_ROUTE = "unmatched"

_MAX_REQUEST_ID_LENGTH = 128
_QUIET_PATHS = frozenset({"/healthz", "/readyz", "/metrics"})
_KNOWN_METHODS = frozenset(
    {"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"}
)


def route_template(request: Request) -> str:
    """Path template of the matched route; raw paths never become labels."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


def _request_id_from(raw: str | None) -> str:
    candidate = (raw or "").strip()
    if candidate and len(candidate) <= _MAX_REQUEST_ID_LENGTH:
        return candidate
    return str(uuid.uuid4())


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Per-request correlation id, completion log and HTTP metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = _request_id_from(request.headers.get("x-request-id"))
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
            method = request.method if request.method in _KNOWN_METHODS else "OTHER"
            # R: the router fills scope["route"] on the shared scope dict.
            record_request_metrics(
                endpoint=route_template(request),
                method=method,
                status_code=status_code,
                latency_seconds=latency,
            )
            if request.url.path not in _QUIET_PATHS:
                logger.info(
                    "request completed",
                    extra={
                        "status_code": status_code,
                        "latency_ms": round(latency * 1000, 2),
                    },
                )
            clear_context()


class _BodyTooLarge(Exception):
    pass


class BodyLimitMiddleware:
    """
    Pure ASGI middleware.

    Content-Length is checked up front; chunked bodies are counted while the
    app reads them. A 413 is only sent if no response has started yet.
    """

    def __init__(self, app, max_bytes: int | None = None):
        self.app = app
        if max_bytes is None:
            from .config import get_settings

            max_bytes = get_settings().max_body_bytes
        self._max_bytes = max_bytes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = {k.decode().lower(): v.decode() for k, v in scope.get("headers", [])}
        request_id = _request_id_from(headers.get("x-request-id"))
        path = scope.get("path", "")

        declared = headers.get("content-length", "")
        if declared.isdigit() and int(declared) > self._max_bytes:
            logger.warning(
                "payload too large",
                extra={"content_length": declared, "max_bytes": self._max_bytes},
            )
            await self._send_413(send, path=path, request_id=request_id)
            return

        received = 0
        response_started = False

        async def counting_receive():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body") or b"")
                if received > self._max_bytes:
                    raise _BodyTooLarge()
            return message

        async def tracking_send(message):
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, counting_receive, tracking_send)
        except _BodyTooLarge:
            if response_started:
                raise
            logger.warning(
                "payload too large (streamed)",
                extra={"received_bytes": received, "max_bytes": self._max_bytes},
            )
            await self._send_413(send, path=path, request_id=request_id)

    async def _send_413(self, send, *, path: str, request_id: str) -> None:
        message = f"Request body too large. Maximum allowed: {self._max_bytes} bytes"
        problem = ErrorDetail(
            type="about:blank/payload_too_large",
            title="Payload Too Large",
            status=413,
            detail=message,
            code=ErrorCode.PAYLOAD_TOO_LARGE,
            error=message,
            instance=path,
            errors=[{"request_id": request_id}],
        )
        body = json.dumps(problem.model_dump(mode="json", exclude_none=True)).encode()

        await send(
            {
                "type": "http.response.start",
                "status": 413,
                "headers": [
                    (b"content-type", PROBLEM_JSON_MEDIA_TYPE.encode()),
                    (b"x-request-id", request_id.encode()),
                ],
            }
        )
        await send({"type": "http.response.body", "body": body})
