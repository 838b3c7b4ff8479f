"""
===============================================================================
USE CASE: Get Card (public lookup of an actionable card)
===============================================================================

Business Goal:
    Return a card's workflow configuration only when the card is both
    presentable (enabled) and actionable (workflow_id and api_token present).

Rules:
    - Blank identifier            -> INVALID_INPUT, no store access
    - Non-numeric identifier      -> NOT_FOUND, no store access
    - No enabled row              -> NOT_FOUND (absent and disabled collapse)
    - Missing workflow fields     -> CONFIGURATION_INCOMPLETE + exact booleans
    - Otherwise                   -> CardDetail

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    GetCardUseCase

Responsibilities:
    - Parse the identifier.
    - Run the single enabled-only lookup.
    - Enforce workflow completeness; never return partial data.

Collaborators:
    - CardRepository.get_enabled_card(card_id)
    - card_results / card_input
    - crosscutting.metrics.record_card_lookup
===============================================================================
"""

from __future__ import annotations

from typing import Final, Optional

from ....crosscutting.logger import logger
from ....crosscutting.metrics import record_card_lookup
from ....domain.repositories import CardRepository
from .card_input import card_not_found, parse_card_id
from .card_results import CardDetail, CardError, CardErrorCode, GetCardResult

_MSG_INCOMPLETE: Final[str] = "workflow configuration incomplete"


class GetCardUseCase:
    """Read-only and idempotent: same store state, same result."""

    def __init__(self, card_repository: CardRepository) -> None:
        self._cards = card_repository

    def execute(self, card_id: Optional[str]) -> GetCardResult:
        parsed_id, error = parse_card_id(card_id)
        if error is not None:
            record_card_lookup(error.code.value)
            return GetCardResult(error=error)

        card = self._cards.get_enabled_card(parsed_id)
        if card is None:
            record_card_lookup(CardErrorCode.NOT_FOUND.value)
            return GetCardResult(error=card_not_found())

        if not card.is_actionable:
            logger.warning(
                "card workflow configuration incomplete",
                extra={
                    "card_id": card.id,
                    "has_workflow_id": card.has_workflow_id,
                    "has_api_token": card.has_api_token,
                },
            )
            record_card_lookup(CardErrorCode.CONFIGURATION_INCOMPLETE.value)
            return GetCardResult(
                error=CardError(
                    code=CardErrorCode.CONFIGURATION_INCOMPLETE,
                    message=_MSG_INCOMPLETE,
                    details={
                        "hasWorkflowId": card.has_workflow_id,
                        "hasApiToken": card.has_api_token,
                    },
                )
            )

        record_card_lookup("ok")
        return GetCardResult(card=CardDetail.from_card(card))
