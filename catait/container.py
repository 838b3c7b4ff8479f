"""
===============================================================================
CRC CARD: catait/container.py (Composition root / DI)
===============================================================================

Responsibilities:
  - Build repositories and use cases from Settings.
  - Pick adapters by APP_ENV: in-memory under test/testing/ci,
    PostgreSQL everywhere else.
  - Keep singletons with lru_cache (repositories hold no request state).
  - Per-request factories for use cases (cheap objects, FastAPI Depends).

Collaborators:
  - crosscutting.config.get_settings
  - infrastructure.repositories (postgres.* / in_memory.*)
  - application.usecases.*
  - identity.passwords.hash_password

Notes:
  - Tests swap these factories with app.dependency_overrides.
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.usecases import (
    CreateCardUseCase,
    CreateUserUseCase,
    DeactivateUserUseCase,
    DeleteCardUseCase,
    GetCardUseCase,
    ListCardsUseCase,
    ListUsersUseCase,
    ReorderCardsUseCase,
    RequestPasswordResetUseCase,
    ResetPasswordUseCase,
    UpdateCardUseCase,
    UpdateUserUseCase,
    ValidateResetTokenUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import (
    AuditEventRepository,
    CardRepository,
    UserRepository,
)
from .identity.passwords import hash_password
from .infrastructure.repositories import (
    InMemoryAuditEventRepository,
    InMemoryCardRepository,
    InMemoryUserRepository,
    PostgresAuditEventRepository,
    PostgresCardRepository,
    PostgresUserRepository,
)

_TEST_ENVS = frozenset({"test", "testing", "ci"})


def _is_test_env() -> bool:
    """app_env in {"test", "testing", "ci"} selects the in-memory adapters."""
    return get_settings().app_env.strip().lower() in _TEST_ENVS


# =============================================================================
# Repositories (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_card_repository() -> CardRepository:
    if _is_test_env():
        return InMemoryCardRepository()
    return PostgresCardRepository()


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    if _is_test_env():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache(maxsize=1)
def get_audit_repository() -> AuditEventRepository:
    if _is_test_env():
        return InMemoryAuditEventRepository()
    return PostgresAuditEventRepository()


# =============================================================================
# Use cases (factory per request)
# =============================================================================


def get_get_card_use_case() -> GetCardUseCase:
    return GetCardUseCase(card_repository=get_card_repository())


def get_list_cards_use_case() -> ListCardsUseCase:
    return ListCardsUseCase(card_repository=get_card_repository())


def get_create_card_use_case() -> CreateCardUseCase:
    return CreateCardUseCase(card_repository=get_card_repository())


def get_update_card_use_case() -> UpdateCardUseCase:
    return UpdateCardUseCase(card_repository=get_card_repository())


def get_delete_card_use_case() -> DeleteCardUseCase:
    return DeleteCardUseCase(card_repository=get_card_repository())


def get_reorder_cards_use_case() -> ReorderCardsUseCase:
    return ReorderCardsUseCase(card_repository=get_card_repository())


def get_validate_reset_token_use_case() -> ValidateResetTokenUseCase:
    return ValidateResetTokenUseCase(user_repository=get_user_repository())


def get_request_password_reset_use_case() -> RequestPasswordResetUseCase:
    settings = get_settings()
    return RequestPasswordResetUseCase(
        user_repository=get_user_repository(),
        token_ttl_minutes=settings.reset_token_ttl_minutes,
        token_bytes=settings.reset_token_bytes,
    )


def get_reset_password_use_case() -> ResetPasswordUseCase:
    settings = get_settings()
    return ResetPasswordUseCase(
        user_repository=get_user_repository(),
        hash_password=hash_password,
        min_password_length=settings.password_min_length,
    )


def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(user_repository=get_user_repository())


def get_create_user_use_case() -> CreateUserUseCase:
    return CreateUserUseCase(
        user_repository=get_user_repository(),
        hash_password=hash_password,
        min_password_length=get_settings().password_min_length,
    )


def get_update_user_use_case() -> UpdateUserUseCase:
    return UpdateUserUseCase(
        user_repository=get_user_repository(),
        hash_password=hash_password,
        min_password_length=get_settings().password_min_length,
    )


def get_deactivate_user_use_case() -> DeactivateUserUseCase:
    return DeactivateUserUseCase(user_repository=get_user_repository())
