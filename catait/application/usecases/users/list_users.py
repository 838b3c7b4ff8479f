"""
===============================================================================
USE CASE: List Users (admin)
===============================================================================

Business Goal:
    Page through accounts, newest first, optionally filtered by a substring
    of username, email or phone.

Collaborators:
    - UserRepository.list_users(search, limit, offset)
    - crosscutting.pagination (page/limit clamping)
===============================================================================
"""

from __future__ import annotations

from typing import Optional

from ....crosscutting.pagination import DEFAULT_PAGE_SIZE, clamp_page, page_offset
from ....domain.repositories import UserRepository
from .user_results import ListUsersResult


class ListUsersUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(
        self,
        *,
        page: int = 1,
        limit: int = DEFAULT_PAGE_SIZE,
        search: Optional[str] = None,
    ) -> ListUsersResult:
        page, limit = clamp_page(page, limit)
        users, total = self._users.list_users(
            search=(search or "").strip() or None,
            limit=limit,
            offset=page_offset(page, limit),
        )
        return ListUsersResult(users=users, total=total, page=page, limit=limit)
