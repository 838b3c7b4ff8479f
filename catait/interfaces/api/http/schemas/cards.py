"""
===============================================================================
CRC CARD: schemas/cards.py
===============================================================================

Module:
    HTTP schemas for feature cards

Responsibilities:
    - Request/response DTOs for the card endpoints.
    - Public views never carry api_token except the actionable lookup.
    - Admin views expose workflowId and hasApiToken, never the token.

Collaborators:
    - domain.entities.FeatureCard
    - application.usecases.cards.CardDetail
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import Field

from catait.application.usecases import cards as card_usecases
from catait.domain.entities import CardDraft, FeatureCard

from .base import CamelModel

# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------


class CardWriteReq(CamelModel):
    """Create/update payload. Required fields are checked by the use case."""

    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    icon: str | None = Field(default=None, max_length=100)
    background_color: str | None = Field(default=None, max_length=100)
    sort_order: int = 0
    enabled: bool = True
    workflow_id: str | None = Field(default=None, max_length=255)
    api_token: str | None = None

    def to_draft(self) -> CardDraft:
        return CardDraft(
            name=self.name or "",
            description=self.description or "",
            icon=self.icon or "",
            background_color=self.background_color or "",
            sort_order=self.sort_order,
            enabled=self.enabled,
            workflow_id=self.workflow_id,
            api_token=self.api_token,
        )


class ReorderCardsReq(CamelModel):
    card_ids: Annotated[list[int], Field(max_length=1000)]


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------


class CardDetailRes(CamelModel):
    """Actionable card: what the presentation layer needs to call the workflow."""

    id: int
    title: str
    description: str
    icon: str
    background_color: str
    workflow_id: str
    api_token: str

    @classmethod
    def from_detail(cls, detail: card_usecases.CardDetail) -> "CardDetailRes":
        return cls(
            id=detail.id,
            title=detail.title,
            description=detail.description,
            icon=detail.icon,
            background_color=detail.background_color,
            workflow_id=detail.workflow_id,
            api_token=detail.api_token,
        )


class GetCardRes(CamelModel):
    success: bool = True
    data: CardDetailRes


class CardSummaryRes(CamelModel):
    """Catalog entry (public listing)."""

    id: int
    name: str
    description: str
    icon: str
    background_color: str
    sort_order: int
    enabled: bool
    workflow_configured: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_card(cls, card: FeatureCard) -> "CardSummaryRes":
        return cls(
            id=card.id,
            name=card.name,
            description=card.description,
            icon=card.icon,
            background_color=card.background_color,
            sort_order=card.sort_order,
            enabled=card.enabled,
            workflow_configured=card.is_actionable,
            created_at=card.created_at,
            updated_at=card.updated_at,
        )


class AdminCardRes(CardSummaryRes):
    """Administration view: adds workflowId and hasApiToken."""

    workflow_id: str | None = None
    has_api_token: bool = False

    @classmethod
    def from_card(cls, card: FeatureCard) -> "AdminCardRes":
        base = CardSummaryRes.from_card(card).model_dump()
        return cls(
            **base,
            workflow_id=card.workflow_id,
            has_api_token=card.has_api_token,
        )


class CardsListRes(CamelModel):
    success: bool = True
    data: list[CardSummaryRes]


class AdminCardsListRes(CamelModel):
    success: bool = True
    data: list[AdminCardRes]


class AdminCardEnvelopeRes(CamelModel):
    success: bool = True
    data: AdminCardRes


class DeleteCardRes(CamelModel):
    success: bool = True
    id: int


class ReorderCardsRes(CamelModel):
    success: bool = True
    updated: int
