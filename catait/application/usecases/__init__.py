"""Application use cases (cards, password reset, user administration)."""

from .cards import (
    CreateCardUseCase,
    DeleteCardUseCase,
    GetCardUseCase,
    ListCardsUseCase,
    ReorderCardsUseCase,
    UpdateCardUseCase,
)
from .password_reset import (
    RequestPasswordResetUseCase,
    ResetPasswordUseCase,
    ValidateResetTokenUseCase,
)
from .users import (
    CreateUserUseCase,
    DeactivateUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)

__all__ = [
    "GetCardUseCase",
    "ListCardsUseCase",
    "CreateCardUseCase",
    "UpdateCardUseCase",
    "DeleteCardUseCase",
    "ReorderCardsUseCase",
    "ValidateResetTokenUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    "ListUsersUseCase",
    "CreateUserUseCase",
    "UpdateUserUseCase",
    "DeactivateUserUseCase",
]
