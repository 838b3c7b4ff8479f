"""
PostgreSQL Repository Implementations.

Raw parameterized SQL over psycopg; connections come from the global pool.
"""

from .audit_event import PostgresAuditEventRepository
from .card import PostgresCardRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresAuditEventRepository",
    "PostgresCardRepository",
    "PostgresUserRepository",
]
