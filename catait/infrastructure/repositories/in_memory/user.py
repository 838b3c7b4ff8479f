"""
============================================================
CRC CARD: infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Keep users in memory (tests / local dev).
  - Apply the same reset-token rules as PostgreSQL:
      exact token equality, reset_token_expiry > now (strict).
  - Administration with the same unique columns (username, email, phone).

Collaborators:
  - domain.entities.User
  - domain.repositories.UserRepository
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional, Tuple

from ....crosscutting.exceptions import ConflictError
from ....domain.entities import NewUser, User, UserChanges
from ....domain.repositories import UserRepository


class InMemoryUserRepository(UserRepository):
    """Thread-safe in-memory user store."""

    def __init__(self, users: Optional[List[User]] = None) -> None:
        self._lock = Lock()
        self._users: Dict[int, User] = {}
        for user in users or []:
            self.add_user(user)

    def add_user(self, user: User) -> None:
        with self._lock:
            self._users[user.id] = replace(user)

    def get_user(self, user_id: int) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user else None

    def _find_live_token_locked(self, token: str, now: datetime) -> Optional[User]:
        for user in self._users.values():
            if user.reset_token == token and user.reset_token_valid_at(now):
                return user
        return None

    def get_user_by_reset_token(self, token: str, *, now: datetime) -> Optional[User]:
        with self._lock:
            user = self._find_live_token_locked(token, now)
            return replace(user) if user else None

    def find_user_for_reset(
        self, *, username: str, email: str, phone: str
    ) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if (
                    user.is_active
                    and user.username == username
                    and user.email == email
                    and user.phone == phone
                ):
                    return replace(user)
            return None

    def set_reset_token(
        self, user_id: int, *, token: str, expires_at: datetime
    ) -> bool:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return False
            self._users[user_id] = replace(
                user, reset_token=token, reset_token_expiry=expires_at
            )
            return True

    def reset_password_with_token(
        self, token: str, *, password_hash: str, now: datetime
    ) -> Optional[User]:
        with self._lock:
            user = self._find_live_token_locked(token, now)
            if user is None:
                return None
            updated = replace(
                user,
                password_hash=password_hash,
                reset_token=None,
                reset_token_expiry=None,
            )
            self._users[user.id] = updated
            return replace(updated)

    def set_password_by_username(self, username: str, *, password_hash: str) -> bool:
        with self._lock:
            for user_id, user in self._users.items():
                if user.username == username:
                    self._users[user_id] = replace(
                        user,
                        password_hash=password_hash,
                        reset_token=None,
                        reset_token_expiry=None,
                    )
                    return True
            return False

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------
    def list_users(
        self, *, search: Optional[str], limit: int, offset: int
    ) -> Tuple[List[User], int]:
        needle = (search or "").strip()
        with self._lock:
            matches = [
                user
                for user in self._users.values()
                if not needle
                or needle in user.username
                or needle in user.email
                or needle in (user.phone or "")
            ]
        oldest = datetime.min.replace(tzinfo=timezone.utc)
        matches.sort(key=lambda u: (u.created_at or oldest, u.id), reverse=True)
        page = [replace(u) for u in matches[offset : offset + limit]]
        return page, len(matches)

    def _taken_locked(
        self,
        *,
        username: Optional[str],
        email: Optional[str],
        phone: Optional[str],
        exclude_user_id: Optional[int],
    ) -> Optional[str]:
        for field_name, value in (
            ("username", username),
            ("email", email),
            ("phone", phone),
        ):
            if value is None:
                continue
            for user in self._users.values():
                if user.id != exclude_user_id and getattr(user, field_name) == value:
                    return field_name
        return None

    def find_taken_field(
        self,
        *,
        username: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        exclude_user_id: Optional[int] = None,
    ) -> Optional[str]:
        with self._lock:
            return self._taken_locked(
                username=username,
                email=email,
                phone=phone,
                exclude_user_id=exclude_user_id,
            )

    def create_user(self, new_user: NewUser) -> User:
        with self._lock:
            taken = self._taken_locked(
                username=new_user.username,
                email=new_user.email,
                phone=new_user.phone,
                exclude_user_id=None,
            )
            if taken:
                raise ConflictError(f"{taken} already exists", field=taken)
            now = datetime.now(timezone.utc)
            user = User(
                id=max(self._users, default=0) + 1,
                username=new_user.username,
                email=new_user.email,
                phone=new_user.phone,
                password_hash=new_user.password_hash,
                invite_code=new_user.invite_code,
                created_at=now,
                updated_at=now,
            )
            self._users[user.id] = user
            return replace(user)

    def update_user(self, user_id: int, changes: UserChanges) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            taken = self._taken_locked(
                username=changes.username,
                email=changes.email,
                phone=changes.phone,
                exclude_user_id=user_id,
            )
            if taken:
                raise ConflictError(f"{taken} already exists", field=taken)
            updated = replace(
                user, **changes.as_columns(), updated_at=datetime.now(timezone.utc)
            )
            self._users[user_id] = updated
            return replace(updated)

    def deactivate_user(self, user_id: int) -> bool:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return False
            self._users[user_id] = replace(user, is_active=False)
            return True
