"""
CRC: domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for the domain layer (ports).
- Keep application/domain independent from infrastructure (PostgreSQL, in-memory).
- Enable dependency inversion and straightforward unit testing.

Collaborators
- domain.entities: FeatureCard, CardDraft, User, NewUser, UserChanges
- domain.audit: AuditEvent
- infrastructure.repositories: postgres/*, in_memory/* implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Lookups return None for "no row"; store failures raise DatabaseError.
"""

from datetime import datetime
from typing import List, Optional, Protocol, Tuple

from .audit import AuditEvent
from .entities import CardDraft, FeatureCard, NewUser, User, UserChanges


class CardRepository(Protocol):
    """R: Interface for feature card persistence."""

    def get_enabled_card(self, card_id: int) -> Optional[FeatureCard]:
        """R: Card with this id only if enabled (absent and disabled both give None)."""
        ...

    def list_cards(self, *, include_disabled: bool = False) -> List[FeatureCard]:
        """R: Cards ordered by sort_order ASC, id ASC."""
        ...

    def create_card(self, draft: CardDraft) -> FeatureCard:
        ...

    def update_card(self, card_id: int, draft: CardDraft) -> Optional[FeatureCard]:
        """R: Full update. None if the card does not exist."""
        ...

    def delete_card(self, card_id: int) -> bool:
        """R: True if a row was deleted."""
        ...

    def reorder_cards(self, card_ids: List[int]) -> int:
        """R: sort_order = position for every id, atomically. Returns rows updated."""
        ...

    def ping(self) -> bool:
        ...


class UserRepository(Protocol):
    """R: Interface for user persistence (reset-token flow and administration)."""

    def get_user_by_reset_token(self, token: str, *, now: datetime) -> Optional[User]:
        """R: User whose reset_token equals token and reset_token_expiry > now."""
        ...

    def find_user_for_reset(
        self, *, username: str, email: str, phone: str
    ) -> Optional[User]:
        """R: Active user matching all three identifiers."""
        ...

    def set_reset_token(
        self, user_id: int, *, token: str, expires_at: datetime
    ) -> bool:
        ...

    def reset_password_with_token(
        self, token: str, *, password_hash: str, now: datetime
    ) -> Optional[User]:
        """
        R: Set password_hash and clear reset_token/reset_token_expiry for the
        user holding a live token, in one statement. None if no live token.
        """
        ...

    def set_password_by_username(self, username: str, *, password_hash: str) -> bool:
        """R: Operator path: set password and clear any pending token."""
        ...

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------
    def get_user(self, user_id: int) -> Optional[User]:
        ...

    def list_users(
        self, *, search: Optional[str], limit: int, offset: int
    ) -> Tuple[List[User], int]:
        """
        R: One page of users, newest first, plus the total matching count.
        search is a substring of username, email or phone.
        """
        ...

    def find_taken_field(
        self,
        *,
        username: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        exclude_user_id: Optional[int] = None,
    ) -> Optional[str]:
        """R: Name of the first given field already used by another user, else None."""
        ...

    def create_user(self, new_user: NewUser) -> User:
        """R: Raises ConflictError when a unique column is already taken."""
        ...

    def update_user(self, user_id: int, changes: UserChanges) -> Optional[User]:
        """R: None if the user does not exist. Raises ConflictError like create_user."""
        ...

    def deactivate_user(self, user_id: int) -> bool:
        """R: Soft delete (is_active = FALSE). True if the user exists."""
        ...


class AuditEventRepository(Protocol):
    """R: Append-only store for the user_logs trail."""

    def record_event(self, event: AuditEvent) -> None:
        ...
