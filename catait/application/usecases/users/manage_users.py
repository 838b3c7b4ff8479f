"""
===============================================================================
USE CASES: User administration (create / update / deactivate)
===============================================================================

Business Goal:
    Let an operator maintain accounts without touching the database.

Rules:
    - Create: username, email, phone and password are required; email and
      phone use the reset-flow formats; password has a minimum length.
      A six-character invite code is generated.
    - Update: partial. Only supplied fields change; a blank password is
      ignored; an update with nothing to change is INVALID_INPUT.
    - username / email / phone stay unique across accounts (CONFLICT with
      details.field naming the taken column).
    - Deactivate is a soft delete (is_active = FALSE); the row and its
      audit history remain.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Classes:
    CreateUserUseCase, UpdateUserUseCase, DeactivateUserUseCase

Collaborators:
    - UserRepository (find_taken_field, create_user, update_user, ...)
    - user_input (id parsing, format checks, error builders)
    - identity.passwords.hash_password (injected)
===============================================================================
"""

from __future__ import annotations

import secrets
import string
from typing import Callable, Final, Optional

from ....crosscutting.exceptions import ConflictError
from ....crosscutting.logger import logger
from ....domain.entities import NewUser, UserChanges
from ....domain.repositories import UserRepository
from .user_input import (
    contact_error,
    field_taken,
    invalid,
    parse_user_id,
    user_not_found,
)
from .user_results import DeactivateUserResult, UserResult

INVITE_CODE_LENGTH: Final[int] = 6
_INVITE_ALPHABET: Final[str] = string.ascii_uppercase + string.digits


def generate_invite_code() -> str:
    return "".join(secrets.choice(_INVITE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))


def _strip(value: Optional[str]) -> Optional[str]:
    return value.strip() if value is not None else None


class CreateUserUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        *,
        hash_password: Callable[[str], str],
        min_password_length: int = 6,
        invite_code_factory: Callable[[], str] = generate_invite_code,
    ) -> None:
        self._users = user_repository
        self._hash_password = hash_password
        self._min_length = min_password_length
        self._invite_code_factory = invite_code_factory

    def execute(
        self,
        *,
        username: Optional[str],
        email: Optional[str],
        phone: Optional[str],
        password: Optional[str],
    ) -> UserResult:
        username = (username or "").strip()
        email = (email or "").strip()
        phone = (phone or "").strip()
        password = password or ""

        missing = [
            name
            for name, value in (
                ("username", username),
                ("email", email),
                ("phone", phone),
                ("password", password),
            )
            if not value
        ]
        if missing:
            return UserResult(
                error=invalid(
                    "Username, email, phone and password are required",
                    missingFields=missing,
                )
            )

        error = contact_error(email=email, phone=phone)
        if error is not None:
            return UserResult(error=error)
        if len(password) < self._min_length:
            return UserResult(
                error=invalid(
                    f"Password must be at least {self._min_length} characters",
                    field="password",
                )
            )

        taken = self._users.find_taken_field(username=username, email=email, phone=phone)
        if taken:
            return UserResult(error=field_taken(taken))

        try:
            user = self._users.create_user(
                NewUser(
                    username=username,
                    email=email,
                    phone=phone,
                    password_hash=self._hash_password(password),
                    invite_code=self._invite_code_factory(),
                )
            )
        except ConflictError as exc:
            # Lost a race with a concurrent insert.
            return UserResult(error=field_taken(exc.field))

        logger.info("user created", extra={"user_id": user.id})
        return UserResult(user=user)


class UpdateUserUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        *,
        hash_password: Callable[[str], str],
        min_password_length: int = 6,
    ) -> None:
        self._users = user_repository
        self._hash_password = hash_password
        self._min_length = min_password_length

    def execute(
        self,
        user_id: Optional[str],
        *,
        username: Optional[str] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        password: Optional[str] = None,
        avatar: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> UserResult:
        parsed_id, error = parse_user_id(user_id)
        if error is not None:
            return UserResult(error=error)

        username, email, phone = _strip(username), _strip(email), _strip(phone)
        blank = [
            name
            for name, value in (
                ("username", username),
                ("email", email),
                ("phone", phone),
            )
            if value is not None and not value
        ]
        if blank:
            return UserResult(
                error=invalid("Fields cannot be empty", blankFields=blank)
            )

        error = contact_error(email=email, phone=phone)
        if error is not None:
            return UserResult(error=error)

        password_hash = None
        if password is not None and password.strip():
            if len(password) < self._min_length:
                return UserResult(
                    error=invalid(
                        f"Password must be at least {self._min_length} characters",
                        field="password",
                    )
                )
            password_hash = self._hash_password(password)

        changes = UserChanges(
            username=username,
            email=email,
            phone=phone,
            password_hash=password_hash,
            avatar=avatar,
            is_active=is_active,
        )
        if not changes.as_columns():
            return UserResult(error=invalid("No fields to update"))

        if self._users.get_user(parsed_id) is None:
            return UserResult(error=user_not_found())

        taken = self._users.find_taken_field(
            username=username, email=email, phone=phone, exclude_user_id=parsed_id
        )
        if taken:
            return UserResult(error=field_taken(taken))

        try:
            user = self._users.update_user(parsed_id, changes)
        except ConflictError as exc:
            return UserResult(error=field_taken(exc.field))
        if user is None:
            return UserResult(error=user_not_found())

        logger.info(
            "user updated",
            extra={"user_id": user.id, "fields": sorted(changes.as_columns())},
        )
        return UserResult(user=user)


class DeactivateUserUseCase:
    def __init__(self, user_repository: UserRepository) -> None:
        self._users = user_repository

    def execute(self, user_id: Optional[str]) -> DeactivateUserResult:
        parsed_id, error = parse_user_id(user_id)
        if error is not None:
            return DeactivateUserResult(error=error)

        if not self._users.deactivate_user(parsed_id):
            return DeactivateUserResult(error=user_not_found())

        logger.info("user deactivated", extra={"user_id": parsed_id})
        return DeactivateUserResult(user_id=parsed_id)
