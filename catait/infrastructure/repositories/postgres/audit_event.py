"""
Name: PostgreSQL Audit Repository

Responsibilities:
  - Append audit events to the `user_logs` table.
"""

from __future__ import annotations

from typing import Optional

from psycopg.types.json import Json
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.audit import AuditEvent


class PostgresAuditEventRepository:
    """R: PostgreSQL implementation of AuditEventRepository."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    def record_event(self, event: AuditEvent) -> None:
        try:
            pool = self._get_pool()
            with pool.connection() as conn:
                conn.execute(
                    """
                    INSERT INTO user_logs
                        (user_id, actor, action, ip_address, user_agent, metadata)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    """,
                    (
                        event.user_id,
                        event.actor,
                        event.action,
                        event.ip_address,
                        event.user_agent,
                        Json(event.metadata),
                    ),
                )
        except Exception as exc:
            logger.warning(
                "PostgresAuditEventRepository: Failed to record audit event",
                extra={"error": str(exc), "action": event.action},
            )
            raise DatabaseError(
                f"Failed to record audit event: {exc}", original_error=exc
            ) from exc
