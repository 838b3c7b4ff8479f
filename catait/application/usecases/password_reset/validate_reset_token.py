"""
===============================================================================
USE CASE: Validate Reset Token
===============================================================================

Business Goal:
    Tell the reset page whether a token is live and, if so, who it belongs to,
    without exposing anything sensitive.

Rules:
    - Empty/absent token -> INVALID_INPUT, no store access.
    - Lookup: reset_token = token AND reset_token_expiry > now.
    - No row -> INVALID_OR_EXPIRED (unknown, cleared and expired look the same).
    - Row -> {id, username, email, phone} only.
    - Validation does NOT consume the token.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    ValidateResetTokenUseCase

Collaborators:
    - UserRepository.get_user_by_reset_token(token, now=...)
    - reset_results
    - crosscutting.metrics.record_reset_token
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Final, Optional

from ....crosscutting.metrics import record_reset_token
from ....domain.entities import UserSummary
from ....domain.repositories import UserRepository
from .reset_results import ResetError, ResetErrorCode, ValidateResetTokenResult

MSG_TOKEN_REQUIRED: Final[str] = "Reset token is required"
MSG_INVALID_OR_EXPIRED: Final[str] = "Reset token is invalid or expired"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ValidateResetTokenUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._users = user_repository
        self._clock = clock

    def execute(self, token: Optional[str]) -> ValidateResetTokenResult:
        if not token:
            record_reset_token("validate", ResetErrorCode.INVALID_INPUT.value)
            return ValidateResetTokenResult(
                error=ResetError(
                    code=ResetErrorCode.INVALID_INPUT, message=MSG_TOKEN_REQUIRED
                )
            )

        user = self._users.get_user_by_reset_token(token, now=self._clock())
        if user is None:
            record_reset_token("validate", ResetErrorCode.INVALID_OR_EXPIRED.value)
            return ValidateResetTokenResult(
                error=ResetError(
                    code=ResetErrorCode.INVALID_OR_EXPIRED,
                    message=MSG_INVALID_OR_EXPIRED,
                )
            )

        record_reset_token("validate", "ok")
        return ValidateResetTokenResult(user=UserSummary.from_user(user))
