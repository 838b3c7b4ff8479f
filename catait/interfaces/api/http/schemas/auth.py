"""
===============================================================================
CRC CARD: schemas/auth.py
===============================================================================

Module:
    HTTP schemas for the password-reset flow

Responsibilities:
    - Request/response DTOs for validate-reset-token, forgot-password and
      reset-password.
    - The user projection is exactly {id, username, email, phone}.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime

from pydantic import AliasChoices, Field

from catait.domain.entities import UserSummary

from .base import CamelModel

# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------


class ValidateResetTokenReq(CamelModel):
    # R: Optional and unbounded here; a missing token is an INVALID_INPUT result
    #    and any other value is looked up (BodyLimitMiddleware bounds size).
    token: str | None = None


class ForgotPasswordReq(CamelModel):
    # Older clients send the username as "identifier".
    username: str | None = Field(
        default=None,
        max_length=255,
        validation_alias=AliasChoices("username", "identifier"),
    )
    email: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=32)


class ResetPasswordReq(CamelModel):
    token: str | None = None
    new_password: str | None = Field(
        default=None,
        max_length=1024,
        validation_alias=AliasChoices("newPassword", "new_password"),
    )


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------


class UserSummaryRes(CamelModel):
    id: int
    username: str
    email: str
    phone: str | None = None

    @classmethod
    def from_summary(cls, user: UserSummary) -> "UserSummaryRes":
        return cls(id=user.id, username=user.username, email=user.email, phone=user.phone)


class ValidateResetTokenRes(CamelModel):
    success: bool = True
    user: UserSummaryRes


class ForgotPasswordRes(CamelModel):
    success: bool = True
    message: str = "Identity verified"
    token: str
    expires_at: datetime


class ResetPasswordRes(CamelModel):
    success: bool = True
    message: str = "Password has been reset"
