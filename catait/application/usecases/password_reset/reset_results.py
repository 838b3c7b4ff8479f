"""
===============================================================================
PASSWORD RESET USE CASE RESULTS
===============================================================================

Responsibilities:
    - ResetErrorCode: stable categories for the reset-token flow.
    - ResetError: minimal error contract.
    - One result DTO per use case (validate / request / reset).

Collaborators:
    - domain.entities.UserSummary
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ....domain.entities import UserSummary


class ResetErrorCode(str, Enum):
    """
    Categories:
      - INVALID_INPUT: missing token or malformed request fields.
      - INVALID_OR_EXPIRED: unknown, cleared or expired token (one kind on purpose).
      - NOT_FOUND: no active user matches the supplied identifiers.
    """

    INVALID_INPUT = "INVALID_INPUT"
    INVALID_OR_EXPIRED = "INVALID_OR_EXPIRED"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class ResetError:
    code: ResetErrorCode
    message: str


@dataclass
class ValidateResetTokenResult:
    user: UserSummary | None = None
    error: ResetError | None = None


@dataclass
class RequestPasswordResetResult:
    token: str | None = None
    user_id: int | None = None
    expires_at: datetime | None = None
    error: ResetError | None = None


@dataclass
class ResetPasswordResult:
    user: UserSummary | None = None
    error: ResetError | None = None
