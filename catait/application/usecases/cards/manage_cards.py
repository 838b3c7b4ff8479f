"""
===============================================================================
USE CASES: Card administration (create / update / delete / reorder)
===============================================================================

Business Goal:
    Let an operator maintain the catalog: cards, their workflow
    configuration and their display order.

Rules:
    - name, description and icon are required (after trimming).
    - Blank workflow_id / api_token are stored as NULL.
    - Update and delete of a missing card -> NOT_FOUND.
    - Reorder: non-empty list of unique positive ids; sort_order = position,
      applied atomically by the repository.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Classes:
    CreateCardUseCase, UpdateCardUseCase, DeleteCardUseCase, ReorderCardsUseCase

Collaborators:
    - CardRepository
    - card_input (identifier parsing, draft normalization)
    - card_results
===============================================================================
"""

from __future__ import annotations

from typing import List, Optional

from ....crosscutting.logger import logger
from ....domain.entities import CardDraft
from ....domain.repositories import CardRepository
from .card_input import MAX_CARD_ID, card_not_found, normalize_draft, parse_card_id
from .card_results import (
    CardError,
    CardErrorCode,
    CardResult,
    DeleteCardResult,
    ReorderCardsResult,
)


class CreateCardUseCase:
    def __init__(self, card_repository: CardRepository) -> None:
        self._cards = card_repository

    def execute(self, draft: CardDraft) -> CardResult:
        normalized, error = normalize_draft(draft)
        if error is not None:
            return CardResult(error=error)

        card = self._cards.create_card(normalized)
        logger.info("card created", extra={"card_id": card.id})
        return CardResult(card=card)


class UpdateCardUseCase:
    """Full replacement of the writable fields."""

    def __init__(self, card_repository: CardRepository) -> None:
        self._cards = card_repository

    def execute(self, card_id: Optional[str], draft: CardDraft) -> CardResult:
        parsed_id, error = parse_card_id(card_id)
        if error is not None:
            return CardResult(error=error)

        normalized, error = normalize_draft(draft)
        if error is not None:
            return CardResult(error=error)

        card = self._cards.update_card(parsed_id, normalized)
        if card is None:
            return CardResult(error=card_not_found())

        logger.info("card updated", extra={"card_id": card.id})
        return CardResult(card=card)


class DeleteCardUseCase:
    def __init__(self, card_repository: CardRepository) -> None:
        self._cards = card_repository

    def execute(self, card_id: Optional[str]) -> DeleteCardResult:
        parsed_id, error = parse_card_id(card_id)
        if error is not None:
            return DeleteCardResult(error=error)

        if not self._cards.delete_card(parsed_id):
            return DeleteCardResult(error=card_not_found())

        logger.info("card deleted", extra={"card_id": parsed_id})
        return DeleteCardResult(deleted_id=parsed_id)


class ReorderCardsUseCase:
    def __init__(self, card_repository: CardRepository) -> None:
        self._cards = card_repository

    def execute(self, card_ids: List[int]) -> ReorderCardsResult:
        if not card_ids:
            return self._invalid("cardIds must be a non-empty list")
        if any(i < 1 or i > MAX_CARD_ID for i in card_ids):
            return self._invalid("cardIds must contain positive integers")
        if len(set(card_ids)) != len(card_ids):
            return self._invalid("cardIds must not contain duplicates")

        updated = self._cards.reorder_cards(list(card_ids))
        logger.info(
            "cards reordered",
            extra={"requested": len(card_ids), "updated": updated},
        )
        return ReorderCardsResult(updated=updated)

    @staticmethod
    def _invalid(message: str) -> ReorderCardsResult:
        return ReorderCardsResult(
            error=CardError(code=CardErrorCode.INVALID_INPUT, message=message)
        )
