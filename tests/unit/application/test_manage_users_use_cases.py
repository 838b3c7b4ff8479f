"""
Name: User administration use case tests

Responsibilities:
  - Listing: page clamping, search, newest first
  - Create: required fields, formats, password length, invite code
  - Update: partial changes, blank password, uniqueness excluding self
  - Deactivate: soft delete and missing users
  - Concurrent-insert conflicts from the repository become CONFLICT
"""

import re

import pytest

from catait.application.usecases.users import (
    CreateUserUseCase,
    DeactivateUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
    UserAdminErrorCode,
    generate_invite_code,
)
from catait.crosscutting.exceptions import ConflictError

pytestmark = pytest.mark.unit


def _hash(password: str) -> str:
    return f"hashed:{password}"


def _create(repo, **overrides):
    fields = dict(
        username="dave",
        email="dave@example.com",
        phone="13700137000",
        password="s3cret!",
    )
    fields.update(overrides)
    return CreateUserUseCase(
        repo, hash_password=_hash, invite_code_factory=lambda: "ABC123"
    ).execute(**fields)


# -----------------------------------------------------------------------------
# List
# -----------------------------------------------------------------------------


def test_list_users_clamps_page_and_limit(user_repository):
    result = ListUsersUseCase(user_repository).execute(page=0, limit=10_000)

    assert result.page == 1
    assert result.limit == 100
    assert result.total == 3


def test_list_users_newest_first(user_repository):
    created = _create(user_repository).user

    result = ListUsersUseCase(user_repository).execute()

    assert result.users[0].id == created.id


def test_list_users_blank_search_is_no_filter(user_repository):
    result = ListUsersUseCase(user_repository).execute(search="   ")

    assert result.total == 3


# -----------------------------------------------------------------------------
# Create
# -----------------------------------------------------------------------------


def test_create_user_hashes_password_and_sets_invite_code(user_repository):
    result = _create(user_repository, username="  dave  ")

    assert result.error is None
    assert result.user.username == "dave"
    assert result.user.password_hash == "hashed:s3cret!"
    assert result.user.invite_code == "ABC123"
    assert result.user.is_active is True


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"email": "not-an-email"}, "email"),
        ({"phone": "12345"}, "phone"),
        ({"password": "123"}, "password"),
    ],
)
def test_create_user_rejects_invalid_fields(user_repository, overrides, field):
    result = _create(user_repository, **overrides)

    assert result.error.code == UserAdminErrorCode.INVALID_INPUT
    assert result.error.details == {"field": field}


def test_create_user_conflict_raised_by_repository(user_repository, monkeypatch):
    def racing_insert(new_user):
        raise ConflictError("email already exists", field="email")

    monkeypatch.setattr(user_repository, "create_user", racing_insert)

    result = _create(user_repository)

    assert result.error.code == UserAdminErrorCode.CONFLICT
    assert result.error.details == {"field": "email"}


def test_generate_invite_code_shape():
    assert re.fullmatch(r"[A-Z0-9]{6}", generate_invite_code())


# -----------------------------------------------------------------------------
# Update
# -----------------------------------------------------------------------------


def test_update_user_blank_password_is_ignored(user_repository):
    result = UpdateUserUseCase(user_repository, hash_password=_hash).execute(
        "1", password="", avatar="/me.png"
    )

    assert result.error is None
    assert result.user.password_hash == "old-hash"
    assert result.user.avatar == "/me.png"


def test_update_user_sets_new_password(user_repository):
    UpdateUserUseCase(user_repository, hash_password=_hash).execute(
        "2", password="n3w-pass"
    )

    assert user_repository.get_user(2).password_hash == "hashed:n3w-pass"


def test_update_user_blank_username_is_invalid(user_repository):
    result = UpdateUserUseCase(user_repository, hash_password=_hash).execute(
        "1", username="  "
    )

    assert result.error.code == UserAdminErrorCode.INVALID_INPUT
    assert result.error.details == {"blankFields": ["username"]}


def test_update_user_phone_taken_by_other_user(user_repository):
    result = UpdateUserUseCase(user_repository, hash_password=_hash).execute(
        "1", phone="13900139000"
    )

    assert result.error.code == UserAdminErrorCode.CONFLICT
    assert result.error.details == {"field": "phone"}
    assert user_repository.get_user(1).phone == "13800138000"


def test_update_missing_user_is_not_found(user_repository):
    result = UpdateUserUseCase(user_repository, hash_password=_hash).execute(
        "42", avatar="/x.png"
    )

    assert result.error.code == UserAdminErrorCode.NOT_FOUND


# -----------------------------------------------------------------------------
# Deactivate
# -----------------------------------------------------------------------------


def test_deactivate_user_keeps_row(user_repository):
    result = DeactivateUserUseCase(user_repository).execute("1")

    assert result.user_id == 1
    stored = user_repository.get_user(1)
    assert stored is not None
    assert stored.is_active is False


@pytest.mark.parametrize(
    "raw, code",
    [
        (None, UserAdminErrorCode.INVALID_INPUT),
        ("", UserAdminErrorCode.INVALID_INPUT),
        ("0", UserAdminErrorCode.NOT_FOUND),
        ("x1", UserAdminErrorCode.NOT_FOUND),
        ("99", UserAdminErrorCode.NOT_FOUND),
    ],
)
def test_deactivate_bad_identifiers(user_repository, raw, code):
    result = DeactivateUserUseCase(user_repository).execute(raw)

    assert result.error.code == code
