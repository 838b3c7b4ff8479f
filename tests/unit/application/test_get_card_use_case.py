"""
Name: GetCardUseCase Tests

Responsibilities:
  - Identifier parsing (blank -> INVALID_INPUT, non-numeric -> NOT_FOUND)
  - Enabled-only lookup (absent and disabled collapse into NOT_FOUND)
  - Workflow completeness with exact booleans
  - Projection contents and idempotence
"""

from unittest.mock import MagicMock

import pytest

from catait.application.usecases.cards import CardErrorCode, GetCardUseCase
from catait.crosscutting.exceptions import DatabaseError
from catait.domain.entities import FeatureCard
from catait.infrastructure.repositories import InMemoryCardRepository

pytestmark = pytest.mark.unit


@pytest.fixture
def use_case(card_repository) -> GetCardUseCase:
    return GetCardUseCase(card_repository)


def test_complete_card_returns_projection(use_case):
    result = use_case.execute("5")

    assert result.error is None
    card = result.card
    assert card.id == 5
    assert card.title == "Smart Writer"
    assert card.description == "Drafts copy"
    assert card.icon == "pen"
    assert card.background_color == "bg-green-500"
    assert card.workflow_id == "wf1"
    assert card.api_token == "tok-5"


def test_lookup_is_idempotent(use_case):
    first = use_case.execute("5")
    second = use_case.execute("5")

    assert first.card == second.card


def test_missing_workflow_id_is_configuration_incomplete(use_case):
    result = use_case.execute("6")

    assert result.card is None
    assert result.error.code == CardErrorCode.CONFIGURATION_INCOMPLETE
    assert result.error.message == "workflow configuration incomplete"
    assert result.error.details == {"hasWorkflowId": False, "hasApiToken": True}


def test_empty_api_token_is_configuration_incomplete(use_case):
    result = use_case.execute("8")

    assert result.error.code == CardErrorCode.CONFIGURATION_INCOMPLETE
    assert result.error.details == {"hasWorkflowId": True, "hasApiToken": False}


def test_disabled_card_is_not_found(use_case):
    result = use_case.execute("7")

    assert result.card is None
    assert result.error.code == CardErrorCode.NOT_FOUND


def test_absent_card_is_not_found(use_case):
    result = use_case.execute("999")

    assert result.error.code == CardErrorCode.NOT_FOUND


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_blank_identifier_is_invalid_input_without_store_access(raw):
    repo = MagicMock()
    result = GetCardUseCase(repo).execute(raw)

    assert result.error.code == CardErrorCode.INVALID_INPUT
    repo.get_enabled_card.assert_not_called()


@pytest.mark.parametrize("raw", ["abc", "5abc", "-1", "0", "1.5", "99999999999"])
def test_non_positive_integer_identifier_is_not_found_without_store_access(raw):
    repo = MagicMock()
    result = GetCardUseCase(repo).execute(raw)

    assert result.error.code == CardErrorCode.NOT_FOUND
    repo.get_enabled_card.assert_not_called()


def test_identifier_is_trimmed_before_lookup():
    repo = MagicMock()
    repo.get_enabled_card.return_value = None

    GetCardUseCase(repo).execute(" 5 ")

    repo.get_enabled_card.assert_called_once_with(5)


def test_store_failure_propagates_as_database_error():
    repo = MagicMock()
    repo.get_enabled_card.side_effect = DatabaseError("connection refused")

    with pytest.raises(DatabaseError):
        GetCardUseCase(repo).execute("5")


def test_card_without_any_workflow_fields():
    repo = InMemoryCardRepository(
        [
            FeatureCard(
                id=10,
                name="Bare",
                description="No workflow",
                icon="box",
                workflow_id=None,
                api_token=None,
            )
        ]
    )

    result = GetCardUseCase(repo).execute("10")

    assert result.error.details == {"hasWorkflowId": False, "hasApiToken": False}
