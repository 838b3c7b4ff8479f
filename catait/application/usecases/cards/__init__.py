"""
===============================================================================
CARD USE CASES PACKAGE (Public API / Exports)
===============================================================================

Responsibilities:
    - Re-export the card use cases and their result/error types.
    - __all__ is the public contract of the package.
===============================================================================
"""

from __future__ import annotations

from .card_results import (
    CardDetail,
    CardError,
    CardErrorCode,
    CardResult,
    DeleteCardResult,
    GetCardResult,
    ListCardsResult,
    ReorderCardsResult,
)
from .get_card import GetCardUseCase
from .list_cards import ListCardsUseCase
from .manage_cards import (
    CreateCardUseCase,
    DeleteCardUseCase,
    ReorderCardsUseCase,
    UpdateCardUseCase,
)

__all__ = [
    "GetCardUseCase",
    "ListCardsUseCase",
    "CreateCardUseCase",
    "UpdateCardUseCase",
    "DeleteCardUseCase",
    "ReorderCardsUseCase",
    "CardDetail",
    "CardError",
    "CardErrorCode",
    "CardResult",
    "DeleteCardResult",
    "GetCardResult",
    "ListCardsResult",
    "ReorderCardsResult",
]
