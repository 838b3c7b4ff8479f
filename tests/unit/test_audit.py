"""
Name: Audit emission tests

Responsibilities:
  - Client IP / user agent extraction from the request
  - Actor derived from the checked API key
  - Best-effort writes (a failing store never raises)
  - Metadata is made JSON-safe
"""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from starlette.requests import Request

from catait.audit import (
    ANONYMOUS_ACTOR,
    UNKNOWN_CLIENT,
    client_ip,
    client_user_agent,
    emit_audit_event,
)
from catait.infrastructure.repositories import InMemoryAuditEventRepository

pytestmark = pytest.mark.unit


def _request(headers=None, client=("198.51.100.4", 5000), state=None) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/auth/forgot-password",
        "headers": [
            (k.lower().encode(), v.encode()) for k, v in (headers or {}).items()
        ],
        "client": client,
        "state": state or {},
    }
    return Request(scope)


def test_client_ip_prefers_first_forwarded_hop():
    request = _request({"X-Forwarded-For": " 203.0.113.9 , 10.0.0.2"})

    assert client_ip(request) == "203.0.113.9"


def test_client_ip_falls_back_to_peer_then_unknown():
    assert client_ip(_request()) == "198.51.100.4"
    assert client_ip(_request(client=None)) == UNKNOWN_CLIENT


def test_user_agent_is_truncated():
    request = _request({"User-Agent": "x" * 2000})

    assert len(client_user_agent(request)) == 500
    assert client_user_agent(_request()) == UNKNOWN_CLIENT


def test_emit_records_request_details():
    repo = InMemoryAuditEventRepository()

    emit_audit_event(
        repo,
        action="password_reset",
        request=_request({"User-Agent": "ua/1"}),
        user_id=7,
        metadata={"at": datetime(2025, 1, 1, tzinfo=timezone.utc), "ids": (1, 2)},
    )

    (event,) = repo.events()
    assert event.id == 1
    assert event.created_at is not None
    assert event.actor == ANONYMOUS_ACTOR
    assert event.user_id == 7
    assert event.ip_address == "198.51.100.4"
    assert event.user_agent == "ua/1"
    assert event.metadata == {"at": "2025-01-01 00:00:00+00:00", "ids": [1, 2]}


def test_emit_uses_api_key_hash_as_actor():
    repo = InMemoryAuditEventRepository()

    emit_audit_event(
        repo,
        action="admin.users.create",
        request=_request(state={"api_key_hash": "abc123"}),
    )

    assert repo.events()[0].actor == "service:abc123"


def test_emit_without_request_has_no_client_fields():
    repo = InMemoryAuditEventRepository()

    emit_audit_event(repo, action="script.set_password", user_id=1)

    event = repo.events()[0]
    assert event.ip_address is None
    assert event.user_agent is None


def test_emit_swallows_store_failures():
    def failing_record(event):
        raise RuntimeError("down")

    broken = SimpleNamespace(record_event=failing_record)

    emit_audit_event(broken, action="password_reset", request=_request())


def test_emit_without_repository_is_noop():
    emit_audit_event(None, action="password_reset")
