"""
===============================================================================
USER ADMINISTRATION USE CASES (Public API / Exports)
===============================================================================
"""

from __future__ import annotations

from .list_users import ListUsersUseCase
from .manage_users import (
    CreateUserUseCase,
    DeactivateUserUseCase,
    UpdateUserUseCase,
    generate_invite_code,
)
from .user_results import (
    DeactivateUserResult,
    ListUsersResult,
    UserAdminError,
    UserAdminErrorCode,
    UserResult,
)

__all__ = [
    "ListUsersUseCase",
    "CreateUserUseCase",
    "UpdateUserUseCase",
    "DeactivateUserUseCase",
    "generate_invite_code",
    "DeactivateUserResult",
    "ListUsersResult",
    "UserAdminError",
    "UserAdminErrorCode",
    "UserResult",
]
