"""
===============================================================================
PASSWORD RESET USE CASES PACKAGE (Public API / Exports)
===============================================================================
"""

from __future__ import annotations

from .request_password_reset import RequestPasswordResetUseCase
from .reset_password import ResetPasswordUseCase
from .reset_results import (
    RequestPasswordResetResult,
    ResetError,
    ResetErrorCode,
    ResetPasswordResult,
    ValidateResetTokenResult,
)
from .validate_reset_token import ValidateResetTokenUseCase

__all__ = [
    "ValidateResetTokenUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    "ValidateResetTokenResult",
    "RequestPasswordResetResult",
    "ResetPasswordResult",
    "ResetError",
    "ResetErrorCode",
]
