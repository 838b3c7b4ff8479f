"""
In-memory audit trail for testing and development.

NOT FOR PRODUCTION USE - data is lost on restart.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import List, Optional

from ....domain.audit import AuditEvent
from ....domain.repositories import AuditEventRepository


class InMemoryAuditEventRepository(AuditEventRepository):
    def __init__(self) -> None:
        self._lock = Lock()
        self._events: List[AuditEvent] = []

    def record_event(self, event: AuditEvent) -> None:
        with self._lock:
            self._events.append(
                replace(
                    event,
                    id=len(self._events) + 1,
                    created_at=event.created_at or datetime.now(timezone.utc),
                )
            )

    # -------------------------------------------------------------------------
    # Testing helpers
    # -------------------------------------------------------------------------
    def events(self, action: Optional[str] = None) -> List[AuditEvent]:
        with self._lock:
            return [e for e in self._events if action is None or e.action == action]
