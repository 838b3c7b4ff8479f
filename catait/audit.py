"""
===============================================================================
CRC CARD: catait/audit.py (Audit emission)
===============================================================================

Responsibilities:
  - Build AuditEvents with a consistent shape (actor/action/user/client).
  - Extract client IP and user agent from the HTTP request.
  - Persist through AuditEventRepository.
  - Best-effort: a failed write is logged and never breaks the request.

Collaborators:
  - catait.domain.audit.AuditEvent
  - catait.domain.repositories.AuditEventRepository
  - catait.crosscutting.logger.logger

Notes:
  - Metadata never carries tokens or password material.
===============================================================================
"""

from __future__ import annotations

from typing import Any

from starlette.requests import Request

from .crosscutting.logger import logger
from .domain.audit import AuditEvent
from .domain.repositories import AuditEventRepository

ANONYMOUS_ACTOR = "anonymous"
UNKNOWN_CLIENT = "unknown"

_MAX_USER_AGENT_LENGTH = 500


def client_ip(request: Request) -> str:
    """First X-Forwarded-For hop, else the socket peer."""
    forwarded = request.headers.get("x-forwarded-for", "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT


def client_user_agent(request: Request) -> str:
    agent = request.headers.get("user-agent", "").strip()
    return agent[:_MAX_USER_AGENT_LENGTH] or UNKNOWN_CLIENT


def actor_from_request(request: Request) -> str:
    """
    service:<hash> when an API key was checked for this request
    (identity.auth stores its hash), anonymous otherwise.
    """
    key_hash = getattr(request.state, "api_key_hash", None)
    return f"service:{key_hash}" if key_hash else ANONYMOUS_ACTOR


def _sanitize(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, dict):
        return {str(k): _sanitize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_sanitize(v) for v in value]
    return str(value)


def emit_audit_event(
    repository: AuditEventRepository | None,
    *,
    action: str,
    request: Request | None = None,
    user_id: int | None = None,
    metadata: dict[str, Any] | None = None,
) -> None:
    """
    Record an audit event.

    Key rule: if repository is None or the write fails, nothing is raised.
    """
    if repository is None:
        return

    event = AuditEvent(
        action=action,
        actor=actor_from_request(request) if request is not None else ANONYMOUS_ACTOR,
        user_id=user_id,
        ip_address=client_ip(request) if request is not None else None,
        user_agent=client_user_agent(request) if request is not None else None,
        metadata=_sanitize(metadata or {}),
    )

    try:
        repository.record_event(event)
    except Exception as exc:
        logger.warning(
            "audit event write failed",
            extra={"action": action, "user_id": user_id, "error": str(exc)},
        )
