"""
===============================================================================
Card input normalization (identifiers + drafts)
===============================================================================

Responsibilities:
    - Turn a raw card identifier into an int, or a typed error.
    - Normalize a CardDraft: trimmed required fields, blank workflow fields -> None.

Collaborators:
    - card_results.CardError / CardErrorCode
    - domain.entities.CardDraft
===============================================================================
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Final, Optional, Tuple

from ....domain.entities import DEFAULT_BACKGROUND_COLOR, CardDraft
from .card_results import CardError, CardErrorCode

# R: feature_cards.id is an INTEGER column; larger ids can never match a row.
MAX_CARD_ID: Final[int] = 2**31 - 1

_DIGITS = re.compile(r"[0-9]+")

_MSG_MISSING_ID: Final[str] = "Card ID is required"
_MSG_NOT_FOUND: Final[str] = "Card not found or disabled"


def card_not_found() -> CardError:
    return CardError(code=CardErrorCode.NOT_FOUND, message=_MSG_NOT_FOUND)


def parse_card_id(raw: Optional[str]) -> Tuple[Optional[int], Optional[CardError]]:
    """
    Returns (card_id, None) or (None, error).

    - None / "" / whitespace      -> INVALID_INPUT
    - not a positive integer      -> NOT_FOUND (no row could match)
    """
    if raw is None or not str(raw).strip():
        return None, CardError(code=CardErrorCode.INVALID_INPUT, message=_MSG_MISSING_ID)

    text = str(raw).strip()
    if not _DIGITS.fullmatch(text):
        return None, card_not_found()

    card_id = int(text)
    if card_id < 1 or card_id > MAX_CARD_ID:
        return None, card_not_found()

    return card_id, None


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def normalize_draft(draft: CardDraft) -> Tuple[Optional[CardDraft], Optional[CardError]]:
    """Validate required fields and store empty workflow fields as NULL."""
    name = (draft.name or "").strip()
    description = (draft.description or "").strip()
    icon = (draft.icon or "").strip()

    missing = [
        field_name
        for field_name, value in (
            ("name", name),
            ("description", description),
            ("icon", icon),
        )
        if not value
    ]
    if missing:
        return None, CardError(
            code=CardErrorCode.INVALID_INPUT,
            message="Name, description and icon are required",
            details={"missingFields": missing},
        )

    return (
        replace(
            draft,
            name=name,
            description=description,
            icon=icon,
            background_color=(draft.background_color or "").strip()
            or DEFAULT_BACKGROUND_COLOR,
            workflow_id=_blank_to_none(draft.workflow_id),
            api_token=_blank_to_none(draft.api_token),
        ),
        None,
    )
