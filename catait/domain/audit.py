"""
===============================================================================
CRC CARD: domain/audit.py
===============================================================================

Module:
    Audit trail (domain)

Responsibilities:
    - AuditEvent: one row of the user_logs trail.

Collaborators:
    - domain.repositories.AuditEventRepository: persists events.
    - catait/audit.py: builds and emits events.

Notes:
    - Append-only: events are never edited or deleted.
    - actor is "anonymous" for self-service flows and "service:<key hash>"
      for administrative calls.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(slots=True)
class AuditEvent:
    action: str
    actor: str
    user_id: int | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    id: int | None = None
    created_at: datetime | None = None
