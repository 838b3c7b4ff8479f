"""
===============================================================================
USE CASE: Request Password Reset (issue a reset token)
===============================================================================

Business Goal:
    A user proves who they are with username + email + phone and receives a
    short-lived reset token.

Rules:
    - All three identifiers are required.
    - email must look like an address; phone must be a mainland-China mobile
      number (11 digits starting with 13-19).
    - Only an active user matching all three gets a token.
    - Token: token_hex(token_bytes); expiry: now + ttl_minutes.
    - A new request replaces any previous token for that user.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    RequestPasswordResetUseCase

Collaborators:
    - UserRepository.find_user_for_reset / set_reset_token
    - secrets.token_hex (default token factory)
===============================================================================
"""

from __future__ import annotations

import re
import secrets
from datetime import datetime, timedelta
from typing import Callable, Final, Optional

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_reset_token
from ....domain.repositories import UserRepository
from .reset_results import RequestPasswordResetResult, ResetError, ResetErrorCode
from .validate_reset_token import utcnow

EMAIL_PATTERN: Final = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_PATTERN: Final = re.compile(r"1[3-9][0-9]{9}")

_MSG_FIELDS_REQUIRED: Final[str] = "Username, email and phone are required"
_MSG_BAD_EMAIL: Final[str] = "Email format is invalid"
_MSG_BAD_PHONE: Final[str] = "Phone number format is invalid"
_MSG_NO_MATCH: Final[str] = (
    "User information does not match. Check username, email and phone."
)


class RequestPasswordResetUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        *,
        token_ttl_minutes: int = 30,
        token_bytes: int = 32,
        clock: Callable[[], datetime] = utcnow,
        token_factory: Callable[[int], str] = secrets.token_hex,
    ) -> None:
        self._users = user_repository
        self._ttl = timedelta(minutes=token_ttl_minutes)
        self._token_bytes = token_bytes
        self._clock = clock
        self._token_factory = token_factory

    def execute(
        self,
        *,
        username: Optional[str],
        email: Optional[str],
        phone: Optional[str],
    ) -> RequestPasswordResetResult:
        username = (username or "").strip()
        email = (email or "").strip()
        phone = (phone or "").strip()

        if not username or not email or not phone:
            return self._invalid(_MSG_FIELDS_REQUIRED)
        if not EMAIL_PATTERN.fullmatch(email):
            return self._invalid(_MSG_BAD_EMAIL)
        if not PHONE_PATTERN.fullmatch(phone):
            return self._invalid(_MSG_BAD_PHONE)

        user = self._users.find_user_for_reset(
            username=username, email=email, phone=phone
        )
        if user is None:
            record_reset_token("request", ResetErrorCode.NOT_FOUND.value)
            return RequestPasswordResetResult(
                error=ResetError(code=ResetErrorCode.NOT_FOUND, message=_MSG_NO_MATCH)
            )

        token = self._token_factory(self._token_bytes)
        expires_at = self._clock() + self._ttl
        if not self._users.set_reset_token(user.id, token=token, expires_at=expires_at):
            # The row vanished between lookup and update.
            record_reset_token("request", ResetErrorCode.NOT_FOUND.value)
            return RequestPasswordResetResult(
                error=ResetError(code=ResetErrorCode.NOT_FOUND, message=_MSG_NO_MATCH)
            )

        logger.info("password reset requested", extra={"user_id": user.id})
        record_reset_token("request", "ok")
        return RequestPasswordResetResult(
            token=token, user_id=user.id, expires_at=expires_at
        )

    @staticmethod
    def _invalid(message: str) -> RequestPasswordResetResult:
        record_reset_token("request", ResetErrorCode.INVALID_INPUT.value)
        return RequestPasswordResetResult(
            error=ResetError(code=ResetErrorCode.INVALID_INPUT, message=message)
        )
