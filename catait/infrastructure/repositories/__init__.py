"""
============================================================
CRC CARD
============================================================
Class: catait.infrastructure.repositories (Package exports)

Responsibilities:
- Expose concrete repositories (Postgres and InMemory) from one import point.

Collaborators:
- Postgres repositories (raw SQL)
- InMemory repositories (testing / local dev)
============================================================
"""

from .in_memory import (
    InMemoryAuditEventRepository,
    InMemoryCardRepository,
    InMemoryUserRepository,
)
from .postgres import (
    PostgresAuditEventRepository,
    PostgresCardRepository,
    PostgresUserRepository,
)

__all__ = [
    "InMemoryAuditEventRepository",
    "InMemoryCardRepository",
    "InMemoryUserRepository",
    "PostgresAuditEventRepository",
    "PostgresCardRepository",
    "PostgresUserRepository",
]
