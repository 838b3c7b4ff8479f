"""
In-Memory Repository Implementations.

For testing and local development. NOT FOR PRODUCTION.
Data is lost on process restart.
"""

from .audit import InMemoryAuditEventRepository
from .card import InMemoryCardRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryAuditEventRepository",
    "InMemoryCardRepository",
    "InMemoryUserRepository",
]
