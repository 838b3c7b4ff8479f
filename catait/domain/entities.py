"""
===============================================================================
CRC CARD: domain/entities.py
===============================================================================

Module:
    Domain entities (FeatureCard, User)

Responsibilities:
    - Define the core business structures (no infrastructure).
    - Provide minimal helpers for simple invariants (presentable/actionable).
    - Keep clear types for use cases and repositories.

Collaborators:
    - domain.repositories: persist/load these entities.
    - application/usecases: build/consume these entities.
    - interfaces/api: serialize DTOs built from these entities.

Principles:
    - No DB/FastAPI dependencies.
    - Data + minimal behaviour.
===============================================================================
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional

DEFAULT_BACKGROUND_COLOR = "bg-blue-500"


# ---------------------------------------------------------------------------
# FeatureCard
# ---------------------------------------------------------------------------


@dataclass
class FeatureCard:
    """
    Catalog card linking to an external workflow endpoint.

    Invariants:
      - presentable iff enabled.
      - actionable iff workflow_id and api_token are both non-empty.
    """

    id: int
    name: str
    description: str
    icon: str
    background_color: str = DEFAULT_BACKGROUND_COLOR
    sort_order: int = 0
    enabled: bool = True
    workflow_id: Optional[str] = None
    api_token: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def has_workflow_id(self) -> bool:
        return bool(self.workflow_id)

    @property
    def has_api_token(self) -> bool:
        return bool(self.api_token)

    @property
    def is_actionable(self) -> bool:
        """Both workflow fields are present."""
        return self.has_workflow_id and self.has_api_token


@dataclass
class CardDraft:
    """Writable fields of a card (create/update input)."""

    name: str
    description: str
    icon: str
    background_color: str = DEFAULT_BACKGROUND_COLOR
    sort_order: int = 0
    enabled: bool = True
    workflow_id: Optional[str] = None
    api_token: Optional[str] = None


# ---------------------------------------------------------------------------
# User
# ---------------------------------------------------------------------------


@dataclass
class User:
    """
    Account record.

    password_hash, reset_token and reset_token_expiry never leave the
    service; callers get a UserSummary instead.
    """

    id: int
    username: str
    email: str
    phone: Optional[str] = None
    password_hash: str = ""
    avatar: Optional[str] = None
    invite_code: Optional[str] = None
    is_active: bool = True
    reset_token: Optional[str] = None
    reset_token_expiry: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def reset_token_valid_at(self, now: datetime) -> bool:
        """Strict comparison: a token expiring exactly at `now` is already dead."""
        return (
            bool(self.reset_token)
            and self.reset_token_expiry is not None
            and self.reset_token_expiry > now
        )


@dataclass
class NewUser:
    """Fields of an account created by an administrator (hash already computed)."""

    username: str
    email: str
    phone: str
    password_hash: str
    invite_code: Optional[str] = None


@dataclass
class UserChanges:
    """Partial update of an account. None leaves the column untouched."""

    username: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    password_hash: Optional[str] = None
    avatar: Optional[str] = None
    is_active: Optional[bool] = None

    def as_columns(self) -> dict[str, object]:
        return {name: value for name, value in asdict(self).items() if value is not None}


@dataclass(frozen=True)
class UserSummary:
    """Sanitized projection exposed by the reset-token flow."""

    id: int
    username: str
    email: str
    phone: Optional[str]

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(
            id=user.id, username=user.username, email=user.email, phone=user.phone
        )
