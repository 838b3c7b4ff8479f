"""
===============================================================================
CRC CARD: domain/__init__.py
===============================================================================

Module:
    Domain layer exports

Responsibilities:
    - Centralize exports for clean imports in application/interfaces.
    - Never import infrastructure here.
===============================================================================
"""

from .audit import AuditEvent
from .entities import CardDraft, FeatureCard, NewUser, User, UserChanges, UserSummary
from .repositories import AuditEventRepository, CardRepository, UserRepository

__all__ = [
    "AuditEvent",
    "CardDraft",
    "FeatureCard",
    "NewUser",
    "User",
    "UserChanges",
    "UserSummary",
    "AuditEventRepository",
    "CardRepository",
    "UserRepository",
]
