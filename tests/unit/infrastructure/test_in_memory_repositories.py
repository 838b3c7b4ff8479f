"""
Name: In-Memory Repository Tests

Responsibilities:
  - Same ordering and filters as PostgreSQL
  - Returned entities are copies
  - Strict token expiry and single consumption
  - Administration: uniqueness, partial update, soft deactivate
  - Audit events get ids and timestamps
"""

from datetime import timedelta

import pytest

from catait.crosscutting.exceptions import ConflictError
from catait.domain.audit import AuditEvent
from catait.domain.entities import CardDraft, NewUser, User, UserChanges
from catait.infrastructure.repositories import (
    InMemoryAuditEventRepository,
    InMemoryCardRepository,
    InMemoryUserRepository,
)

pytestmark = pytest.mark.unit


def test_enabled_lookup_hides_disabled(card_repository):
    assert card_repository.get_enabled_card(7) is None
    assert card_repository.get_card(7) is not None


def test_returned_cards_are_copies(card_repository):
    card = card_repository.get_enabled_card(5)
    card.name = "mutated"

    assert card_repository.get_enabled_card(5).name == "Smart Writer"


def test_ties_break_on_id():
    repo = InMemoryCardRepository()
    repo.create_card(CardDraft(name="b", description="d", icon="i", sort_order=1))
    repo.create_card(CardDraft(name="a", description="d", icon="i", sort_order=1))
    repo.create_card(CardDraft(name="c", description="d", icon="i", sort_order=0))

    assert [c.id for c in repo.list_cards()] == [3, 1, 2]


def test_update_missing_card_is_none(card_repository):
    draft = CardDraft(name="x", description="y", icon="z")

    assert card_repository.update_card(404, draft) is None


def test_token_expiry_is_strict(fixed_now):
    repo = InMemoryUserRepository(
        [
            User(
                id=1,
                username="alice",
                email="alice@example.com",
                reset_token="t",
                reset_token_expiry=fixed_now,
            )
        ]
    )

    assert repo.get_user_by_reset_token("t", now=fixed_now) is None
    assert (
        repo.get_user_by_reset_token("t", now=fixed_now - timedelta(seconds=1))
        is not None
    )


def test_password_reset_consumes_token(user_repository, fixed_now):
    now = user_repository.get_user(1).reset_token_expiry - timedelta(minutes=1)

    first = user_repository.reset_password_with_token(
        "live-token", password_hash="h", now=now
    )
    second = user_repository.reset_password_with_token(
        "live-token", password_hash="h2", now=now
    )

    assert first.id == 1
    assert second is None
    assert user_repository.get_user(1).password_hash == "h"


def test_set_password_by_username_clears_token(user_repository):
    assert user_repository.set_password_by_username("alice", password_hash="new")
    assert user_repository.get_user(1).reset_token is None
    assert user_repository.set_password_by_username("nobody", password_hash="x") is False


def test_find_user_for_reset_ignores_inactive(user_repository):
    found = user_repository.find_user_for_reset(
        username="carol", email="carol@example.com", phone="15000150000"
    )

    assert found is None


def test_create_user_rejects_duplicate_phone(user_repository):
    with pytest.raises(ConflictError) as exc_info:
        user_repository.create_user(
            NewUser(
                username="dave",
                email="dave@example.com",
                phone="13800138000",
                password_hash="h",
            )
        )

    assert exc_info.value.field == "phone"


def test_create_user_assigns_next_id(user_repository):
    user = user_repository.create_user(
        NewUser(username="dave", email="d@example.com", phone="13700137000", password_hash="h")
    )

    assert user.id == 4
    assert user.created_at is not None


def test_update_user_excludes_self_from_uniqueness(user_repository):
    updated = user_repository.update_user(1, UserChanges(username="alice", avatar="/a"))

    assert updated.avatar == "/a"
    assert updated.password_hash == "old-hash"


def test_update_missing_user_is_none(user_repository):
    assert user_repository.update_user(99, UserChanges(avatar="/a")) is None


def test_deactivate_user(user_repository):
    assert user_repository.deactivate_user(2) is True
    assert user_repository.get_user(2).is_active is False
    assert user_repository.deactivate_user(99) is False


def test_list_users_pages_and_counts(user_repository):
    page, total = user_repository.list_users(search="example", limit=2, offset=2)

    assert total == 3
    assert [u.id for u in page] == [1]


def test_audit_events_get_ids_and_filter_by_action():
    repo = InMemoryAuditEventRepository()
    repo.record_event(AuditEvent(action="a", actor="anonymous"))
    repo.record_event(AuditEvent(action="b", actor="anonymous"))

    assert [e.id for e in repo.events()] == [1, 2]
    assert [e.action for e in repo.events("b")] == ["b"]
    assert all(e.created_at is not None for e in repo.events())
