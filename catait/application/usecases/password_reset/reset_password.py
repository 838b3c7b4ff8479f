"""
===============================================================================
USE CASE: Reset Password (consume a reset token)
===============================================================================

Business Goal:
    Set a new password for the holder of a live reset token and make the token
    unusable afterwards.

Rules:
    - token and new password are required; password length >= min_length.
    - Token lookup matches validate_reset_token exactly.
    - Hash update and token clear happen in one repository call, so a token is
      consumed at most once.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    ResetPasswordUseCase

Collaborators:
    - UserRepository.reset_password_with_token
    - identity.passwords.hash_password (injected as a callable)
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Final, Optional

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_reset_token
from ....domain.entities import UserSummary
from ....domain.repositories import UserRepository
from .reset_results import ResetError, ResetErrorCode, ResetPasswordResult
from .validate_reset_token import MSG_INVALID_OR_EXPIRED, MSG_TOKEN_REQUIRED, utcnow

_MSG_PASSWORD_REQUIRED: Final[str] = "New password is required"


class ResetPasswordUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        *,
        hash_password: Callable[[str], str],
        min_password_length: int = 6,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._users = user_repository
        self._hash_password = hash_password
        self._min_length = min_password_length
        self._clock = clock

    def execute(
        self, *, token: Optional[str], new_password: Optional[str]
    ) -> ResetPasswordResult:
        if not token:
            return self._invalid(MSG_TOKEN_REQUIRED)
        if not new_password:
            return self._invalid(_MSG_PASSWORD_REQUIRED)
        if len(new_password) < self._min_length:
            return self._invalid(
                f"Password must be at least {self._min_length} characters"
            )

        user = self._users.reset_password_with_token(
            token,
            password_hash=self._hash_password(new_password),
            now=self._clock(),
        )
        if user is None:
            record_reset_token("reset", ResetErrorCode.INVALID_OR_EXPIRED.value)
            return ResetPasswordResult(
                error=ResetError(
                    code=ResetErrorCode.INVALID_OR_EXPIRED,
                    message=MSG_INVALID_OR_EXPIRED,
                )
            )

        logger.info("password reset completed", extra={"user_id": user.id})
        record_reset_token("reset", "ok")
        return ResetPasswordResult(user=UserSummary.from_user(user))

    @staticmethod
    def _invalid(message: str) -> ResetPasswordResult:
        record_reset_token("reset", ResetErrorCode.INVALID_INPUT.value)
        return ResetPasswordResult(
            error=ResetError(code=ResetErrorCode.INVALID_INPUT, message=message)
        )
