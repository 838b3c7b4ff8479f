"""
===============================================================================
USER ADMINISTRATION RESULTS
===============================================================================

Responsibilities:
    - UserAdminErrorCode: stable categories for the admin user endpoints.
    - UserAdminError: minimal error contract (details carry the field name).
    - One result DTO per use case (list / create+update / deactivate).

Collaborators:
    - domain.entities.User
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from ....domain.entities import User


class UserAdminErrorCode(str, Enum):
    """
    Categories:
      - INVALID_INPUT: malformed id, missing/invalid fields, empty update.
      - NOT_FOUND: no user with that id.
      - CONFLICT: username, email or phone already used by another account.
    """

    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class UserAdminError:
    code: UserAdminErrorCode
    message: str
    details: Dict[str, Any] | None = None


@dataclass
class ListUsersResult:
    users: List[User] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 20
    error: UserAdminError | None = None


@dataclass
class UserResult:
    """Create/update outcome."""

    user: User | None = None
    error: UserAdminError | None = None


@dataclass
class DeactivateUserResult:
    user_id: int | None = None
    error: UserAdminError | None = None
