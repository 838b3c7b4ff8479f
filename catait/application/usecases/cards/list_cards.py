"""
===============================================================================
USE CASE: List Cards (catalog)
===============================================================================

Business Goal:
    Return the card catalog in display order. The public view only sees
    enabled cards; the admin view (include_disabled) sees all of them.

Collaborators:
    - CardRepository.list_cards(include_disabled=...)
===============================================================================
"""

from __future__ import annotations

from ....domain.repositories import CardRepository
from .card_results import ListCardsResult


class ListCardsUseCase:
    def __init__(self, card_repository: CardRepository) -> None:
        self._cards = card_repository

    def execute(self, *, include_disabled: bool = False) -> ListCardsResult:
        cards = self._cards.list_cards(include_disabled=include_disabled)
        return ListCardsResult(cards=cards)
