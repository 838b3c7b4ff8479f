"""
===============================================================================
User input normalization (identifiers + contact fields)
===============================================================================

Responsibilities:
    - Turn a raw user identifier into an int, or a typed error.
    - Check email / phone formats with the same patterns as the reset flow.
    - Build the CONFLICT error for a taken unique field.
===============================================================================
"""

from __future__ import annotations

import re
from typing import Final, Optional, Tuple

from ..password_reset.request_password_reset import EMAIL_PATTERN, PHONE_PATTERN
from .user_results import UserAdminError, UserAdminErrorCode

# R: users.id is an INTEGER identity column.
MAX_USER_ID: Final[int] = 2**31 - 1

_DIGITS = re.compile(r"[0-9]+")

_MSG_MISSING_ID: Final[str] = "User ID is required"
_MSG_NOT_FOUND: Final[str] = "User not found"

_FIELD_LABELS: Final[dict[str, str]] = {
    "username": "Username",
    "email": "Email",
    "phone": "Phone number",
}


def user_not_found() -> UserAdminError:
    return UserAdminError(code=UserAdminErrorCode.NOT_FOUND, message=_MSG_NOT_FOUND)


def invalid(message: str, **details: object) -> UserAdminError:
    return UserAdminError(
        code=UserAdminErrorCode.INVALID_INPUT,
        message=message,
        details=details or None,
    )


def field_taken(field_name: Optional[str]) -> UserAdminError:
    label = _FIELD_LABELS.get(field_name or "", "Value")
    return UserAdminError(
        code=UserAdminErrorCode.CONFLICT,
        message=f"{label} already exists",
        details={"field": field_name} if field_name else None,
    )


def parse_user_id(raw: Optional[str]) -> Tuple[Optional[int], Optional[UserAdminError]]:
    """
    - None / blank                -> INVALID_INPUT
    - not a positive integer      -> NOT_FOUND
    """
    if raw is None or not str(raw).strip():
        return None, invalid(_MSG_MISSING_ID)

    text = str(raw).strip()
    if not _DIGITS.fullmatch(text):
        return None, user_not_found()

    user_id = int(text)
    if user_id < 1 or user_id > MAX_USER_ID:
        return None, user_not_found()
    return user_id, None


def contact_error(
    *, email: Optional[str], phone: Optional[str]
) -> Optional[UserAdminError]:
    """Format check for whichever of email / phone is present."""
    if email is not None and not EMAIL_PATTERN.fullmatch(email):
        return invalid("Email format is invalid", field="email")
    if phone is not None and not PHONE_PATTERN.fullmatch(phone):
        return invalid("Phone number format is invalid", field="phone")
    return None
