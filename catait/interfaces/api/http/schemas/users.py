"""
===============================================================================
CRC CARD: schemas/users.py
===============================================================================

Module:
    HTTP schemas for user administration

Responsibilities:
    - Request/response DTOs for /admin/users.
    - The admin view never carries password_hash or reset-token columns.

Collaborators:
    - domain.entities.User
    - crosscutting.pagination.PageInfo
===============================================================================
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from catait.crosscutting.pagination import PageInfo
from catait.domain.entities import User

from .base import CamelModel

# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------


class CreateUserReq(CamelModel):
    """Required fields and formats are checked by the use case."""

    username: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=20)
    password: str | None = Field(default=None, max_length=128)


class UpdateUserReq(CamelModel):
    """Partial update: omitted fields are left untouched."""

    username: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=20)
    password: str | None = Field(default=None, max_length=128)
    avatar: str | None = Field(default=None, max_length=500)
    is_active: bool | None = None


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------


class AdminUserRes(CamelModel):
    id: int
    username: str
    email: str
    phone: str | None = None
    avatar: str | None = None
    invite_code: str | None = None
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_user(cls, user: User) -> "AdminUserRes":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            phone=user.phone,
            avatar=user.avatar,
            invite_code=user.invite_code,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class UsersPage(CamelModel):
    users: list[AdminUserRes]
    pagination: PageInfo


class UsersPageRes(CamelModel):
    success: bool = True
    data: UsersPage


class UserEnvelopeRes(CamelModel):
    success: bool = True
    data: AdminUserRes


class DeactivateUserRes(CamelModel):
    success: bool = True
    id: int
