"""
============================================================
CRC CARD: infrastructure/repositories/in_memory/card.py
============================================================
Class: InMemoryCardRepository

Responsibilities:
  - Keep feature cards in memory (tests / local dev).
  - Mirror the PostgreSQL repository semantics:
      - enabled-only lookup
      - ORDER BY sort_order ASC, id ASC
      - reorder updates only ids that exist

Collaborators:
  - domain.entities.FeatureCard, CardDraft
  - domain.repositories.CardRepository

Constraints / Notes:
  - Thread-safe: every access under a Lock.
  - Returns copies so callers never mutate the stored records.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional

from ....domain.entities import CardDraft, FeatureCard
from ....domain.repositories import CardRepository


class InMemoryCardRepository(CardRepository):
    """Thread-safe in-memory card store with auto-incrementing ids."""

    def __init__(self, cards: Optional[List[FeatureCard]] = None) -> None:
        self._lock = Lock()
        self._cards: Dict[int, FeatureCard] = {}
        self._next_id = 1
        for card in cards or []:
            self.add_card(card)

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def add_card(self, card: FeatureCard) -> FeatureCard:
        """Seed a card with an explicit id (tests)."""
        with self._lock:
            stored = replace(
                card,
                created_at=card.created_at or self._now(),
                updated_at=card.updated_at or self._now(),
            )
            self._cards[card.id] = stored
            self._next_id = max(self._next_id, card.id + 1)
            return replace(stored)

    def get_enabled_card(self, card_id: int) -> Optional[FeatureCard]:
        with self._lock:
            card = self._cards.get(card_id)
            if card is None or not card.enabled:
                return None
            return replace(card)

    def get_card(self, card_id: int) -> Optional[FeatureCard]:
        """Test helper: any card, enabled or not."""
        with self._lock:
            card = self._cards.get(card_id)
            return replace(card) if card else None

    def list_cards(self, *, include_disabled: bool = False) -> List[FeatureCard]:
        with self._lock:
            items = [
                c for c in self._cards.values() if include_disabled or c.enabled
            ]
            return [replace(c) for c in sorted(items, key=lambda c: (c.sort_order, c.id))]

    def create_card(self, draft: CardDraft) -> FeatureCard:
        with self._lock:
            now = self._now()
            card = FeatureCard(
                id=self._next_id,
                name=draft.name,
                description=draft.description,
                icon=draft.icon,
                background_color=draft.background_color,
                sort_order=draft.sort_order,
                enabled=draft.enabled,
                workflow_id=draft.workflow_id,
                api_token=draft.api_token,
                created_at=now,
                updated_at=now,
            )
            self._cards[card.id] = card
            self._next_id += 1
            return replace(card)

    def update_card(self, card_id: int, draft: CardDraft) -> Optional[FeatureCard]:
        with self._lock:
            current = self._cards.get(card_id)
            if current is None:
                return None
            updated = replace(
                current,
                name=draft.name,
                description=draft.description,
                icon=draft.icon,
                background_color=draft.background_color,
                sort_order=draft.sort_order,
                enabled=draft.enabled,
                workflow_id=draft.workflow_id,
                api_token=draft.api_token,
                updated_at=self._now(),
            )
            self._cards[card_id] = updated
            return replace(updated)

    def delete_card(self, card_id: int) -> bool:
        with self._lock:
            return self._cards.pop(card_id, None) is not None

    def reorder_cards(self, card_ids: List[int]) -> int:
        with self._lock:
            updated = 0
            now = self._now()
            for position, card_id in enumerate(card_ids):
                card = self._cards.get(card_id)
                if card is None:
                    continue
                self._cards[card_id] = replace(card, sort_order=position, updated_at=now)
                updated += 1
            return updated

    def ping(self) -> bool:
        return True
