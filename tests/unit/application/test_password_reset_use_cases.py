"""
Name: Password reset use case tests

Responsibilities:
  - validate_reset_token: input check, strict expiry, uniform failure, projection
  - request_password_reset: identifier checks, token issuance and TTL
  - reset_password: policy, single consumption of a token
"""

from dataclasses import asdict
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from catait.application.usecases.password_reset import (
    RequestPasswordResetUseCase,
    ResetErrorCode,
    ResetPasswordUseCase,
    ValidateResetTokenUseCase,
)
from catait.domain.entities import User
from catait.infrastructure.repositories import InMemoryUserRepository

pytestmark = pytest.mark.unit


@pytest.fixture
def users(fixed_now) -> InMemoryUserRepository:
    return InMemoryUserRepository(
        [
            User(
                id=1,
                username="alice",
                email="alice@example.com",
                phone="13800138000",
                password_hash="old-hash",
                reset_token="live-token",
                reset_token_expiry=fixed_now + timedelta(minutes=10),
            ),
            User(
                id=2,
                username="bob",
                email="bob@example.com",
                phone=None,
                password_hash="old-hash",
                reset_token="abc",
                reset_token_expiry=fixed_now - timedelta(hours=1),
            ),
            User(
                id=3,
                username="dave",
                email="dave@example.com",
                phone="13700137000",
                reset_token="edge",
                reset_token_expiry=fixed_now,
            ),
            User(
                id=4,
                username="erin",
                email="erin@example.com",
                phone="15000150000",
                is_active=False,
            ),
        ]
    )


# -----------------------------------------------------------------------------
# Validate
# -----------------------------------------------------------------------------


def test_validate_live_token_returns_exact_projection(users, fixed_now):
    result = ValidateResetTokenUseCase(users, clock=lambda: fixed_now).execute(
        "live-token"
    )

    assert result.error is None
    assert asdict(result.user) == {
        "id": 1,
        "username": "alice",
        "email": "alice@example.com",
        "phone": "13800138000",
    }


def test_validate_does_not_consume_token(users, fixed_now):
    use_case = ValidateResetTokenUseCase(users, clock=lambda: fixed_now)

    first = use_case.execute("live-token")
    second = use_case.execute("live-token")

    assert first.user == second.user
    assert users.get_user(1).reset_token == "live-token"


def test_validate_expired_token_is_invalid_or_expired(users, fixed_now):
    result = ValidateResetTokenUseCase(users, clock=lambda: fixed_now).execute("abc")

    assert result.user is None
    assert result.error.code == ResetErrorCode.INVALID_OR_EXPIRED


def test_validate_token_expiring_exactly_now_is_rejected(users, fixed_now):
    result = ValidateResetTokenUseCase(users, clock=lambda: fixed_now).execute("edge")

    assert result.error.code == ResetErrorCode.INVALID_OR_EXPIRED


def test_validate_unknown_token_matches_expired_outcome(users, fixed_now):
    use_case = ValidateResetTokenUseCase(users, clock=lambda: fixed_now)

    unknown = use_case.execute("nope")
    expired = use_case.execute("abc")

    assert unknown.error == expired.error


def test_validate_is_exact_match(users, fixed_now):
    result = ValidateResetTokenUseCase(users, clock=lambda: fixed_now).execute(
        "LIVE-TOKEN"
    )

    assert result.error.code == ResetErrorCode.INVALID_OR_EXPIRED


@pytest.mark.parametrize("token", [None, ""])
def test_validate_missing_token_skips_store(token):
    repo = MagicMock()

    result = ValidateResetTokenUseCase(repo).execute(token)

    assert result.error.code == ResetErrorCode.INVALID_INPUT
    repo.get_user_by_reset_token.assert_not_called()


def test_validate_passes_clock_to_repository(fixed_now):
    repo = MagicMock()
    repo.get_user_by_reset_token.return_value = None

    ValidateResetTokenUseCase(repo, clock=lambda: fixed_now).execute("t")

    repo.get_user_by_reset_token.assert_called_once_with("t", now=fixed_now)


# -----------------------------------------------------------------------------
# Request (forgot password)
# -----------------------------------------------------------------------------


def _request_use_case(users, fixed_now, **kwargs):
    return RequestPasswordResetUseCase(
        users,
        clock=lambda: fixed_now,
        token_factory=lambda n: "t" * (n * 2),
        **kwargs,
    )


def test_request_issues_token_with_ttl(users, fixed_now):
    result = _request_use_case(users, fixed_now, token_ttl_minutes=30).execute(
        username="alice", email="alice@example.com", phone="13800138000"
    )

    assert result.error is None
    assert result.token == "t" * 64
    assert result.expires_at == fixed_now + timedelta(minutes=30)
    stored = users.get_user(1)
    assert stored.reset_token == result.token
    assert stored.reset_token_expiry == result.expires_at


def test_request_default_token_is_hex_of_configured_size(users, fixed_now):
    result = RequestPasswordResetUseCase(
        users, clock=lambda: fixed_now, token_bytes=16
    ).execute(username="alice", email="alice@example.com", phone="13800138000")

    assert len(result.token) == 32
    int(result.token, 16)


def test_request_issued_token_validates(users, fixed_now):
    issued = _request_use_case(users, fixed_now).execute(
        username="alice", email="alice@example.com", phone="13800138000"
    )

    result = ValidateResetTokenUseCase(users, clock=lambda: fixed_now).execute(
        issued.token
    )

    assert result.user.id == 1


def test_request_mismatch_is_not_found(users, fixed_now):
    result = _request_use_case(users, fixed_now).execute(
        username="alice", email="other@example.com", phone="13800138000"
    )

    assert result.error.code == ResetErrorCode.NOT_FOUND


def test_request_inactive_user_is_not_found(users, fixed_now):
    result = _request_use_case(users, fixed_now).execute(
        username="erin", email="erin@example.com", phone="15000150000"
    )

    assert result.error.code == ResetErrorCode.NOT_FOUND


@pytest.mark.parametrize(
    "username,email,phone",
    [
        ("", "alice@example.com", "13800138000"),
        ("alice", "not-an-email", "13800138000"),
        ("alice", "alice@example.com", "12800138000"),
        ("alice", "alice@example.com", "1380013800"),
    ],
)
def test_request_rejects_malformed_input(users, fixed_now, username, email, phone):
    result = _request_use_case(users, fixed_now).execute(
        username=username, email=email, phone=phone
    )

    assert result.error.code == ResetErrorCode.INVALID_INPUT


# -----------------------------------------------------------------------------
# Reset password
# -----------------------------------------------------------------------------


def _reset_use_case(users, fixed_now):
    return ResetPasswordUseCase(
        users,
        hash_password=lambda p: f"hashed:{p}",
        min_password_length=6,
        clock=lambda: fixed_now,
    )


def test_reset_sets_hash_and_consumes_token(users, fixed_now):
    result = _reset_use_case(users, fixed_now).execute(
        token="live-token", new_password="s3cret!"
    )

    assert result.error is None
    assert result.user.username == "alice"
    stored = users.get_user(1)
    assert stored.password_hash == "hashed:s3cret!"
    assert stored.reset_token is None
    assert stored.reset_token_expiry is None


def test_reset_token_cannot_be_used_twice(users, fixed_now):
    use_case = _reset_use_case(users, fixed_now)
    use_case.execute(token="live-token", new_password="s3cret!")

    second = use_case.execute(token="live-token", new_password="another1")

    assert second.error.code == ResetErrorCode.INVALID_OR_EXPIRED
    assert (
        ValidateResetTokenUseCase(users, clock=lambda: fixed_now)
        .execute("live-token")
        .error.code
        == ResetErrorCode.INVALID_OR_EXPIRED
    )


def test_reset_with_expired_token_fails(users, fixed_now):
    result = _reset_use_case(users, fixed_now).execute(
        token="abc", new_password="s3cret!"
    )

    assert result.error.code == ResetErrorCode.INVALID_OR_EXPIRED
    assert users.get_user(2).password_hash == "old-hash"


def test_reset_enforces_min_length(users, fixed_now):
    result = _reset_use_case(users, fixed_now).execute(
        token="live-token", new_password="12345"
    )

    assert result.error.code == ResetErrorCode.INVALID_INPUT
    assert users.get_user(1).reset_token == "live-token"


def test_reset_missing_token_is_invalid_input(users, fixed_now):
    result = _reset_use_case(users, fixed_now).execute(token=None, new_password="abcdef")

    assert result.error.code == ResetErrorCode.INVALID_INPUT
