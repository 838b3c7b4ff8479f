"""
===============================================================================
CARD USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Name:
    Card Use Case Results

Business Goal:
    Consistent result and error types for the card use cases:
      - public lookup (get_card)
      - catalog listing
      - administration (create / update / delete / reorder)

-------------------------------------------------------------------------------
CRC CARD (Module-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Component:
    card_results models (module)

Responsibilities:
    - CardErrorCode as the stable set of error categories.
    - CardError as the minimal error contract (with optional details).
    - CardDetail as the public projection of an actionable card.
    - One result DTO per use case.

Collaborators:
    - domain.entities.FeatureCard
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from ....domain.entities import FeatureCard


class CardErrorCode(str, Enum):
    """
    Categories:
      - INVALID_INPUT: missing/blank identifier or invalid payload.
      - NOT_FOUND: card absent or disabled (indistinguishable).
      - CONFIGURATION_INCOMPLETE: enabled card without workflow_id/api_token.
    """

    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    CONFIGURATION_INCOMPLETE = "CONFIGURATION_INCOMPLETE"


@dataclass(frozen=True)
class CardError:
    code: CardErrorCode
    message: str
    details: Dict[str, Any] | None = None


@dataclass(frozen=True)
class CardDetail:
    """Public projection returned by the lookup. title is the stored name."""

    id: int
    title: str
    description: str
    icon: str
    background_color: str
    workflow_id: str
    api_token: str

    @classmethod
    def from_card(cls, card: FeatureCard) -> "CardDetail":
        return cls(
            id=card.id,
            title=card.name,
            description=card.description,
            icon=card.icon,
            background_color=card.background_color,
            workflow_id=card.workflow_id or "",
            api_token=card.api_token or "",
        )


@dataclass
class GetCardResult:
    """
    Contract:
      - success: card != None and error == None
      - failure: card == None and error != None
    """

    card: CardDetail | None = None
    error: CardError | None = None


@dataclass
class ListCardsResult:
    cards: List[FeatureCard] = field(default_factory=list)
    error: CardError | None = None


@dataclass
class CardResult:
    """Create/update outcome."""

    card: FeatureCard | None = None
    error: CardError | None = None


@dataclass
class DeleteCardResult:
    deleted_id: int | None = None
    error: CardError | None = None


@dataclass
class ReorderCardsResult:
    updated: int = 0
    error: CardError | None = None
