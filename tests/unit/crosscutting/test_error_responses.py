"""
Name: RFC 7807 Error Response Tests

Responsibilities:
  - Factories set status and code
  - The handler renders problem+json with error/details extensions
"""

import json
from types import SimpleNamespace

import pytest

from catait.crosscutting.error_responses import (
    ErrorCode,
    app_exception_handler,
    configuration_incomplete,
    conflict,
    forbidden,
    invalid_input,
    not_found,
    unauthorized,
)

pytestmark = pytest.mark.unit


class _FakeRequest:
    def __init__(self, request_id=None):
        self.state = SimpleNamespace(request_id=request_id)
        self.url = "http://testserver/cards/6"


@pytest.mark.parametrize(
    "factory,status,code",
    [
        (lambda: invalid_input("bad"), 400, ErrorCode.INVALID_INPUT),
        (lambda: not_found("missing"), 404, ErrorCode.NOT_FOUND),
        (lambda: unauthorized(), 401, ErrorCode.UNAUTHORIZED),
        (lambda: forbidden(), 403, ErrorCode.FORBIDDEN),
        (lambda: conflict("taken", {"field": "email"}), 409, ErrorCode.CONFLICT),
        (
            lambda: configuration_incomplete("incomplete", {"hasWorkflowId": False}),
            400,
            ErrorCode.CONFIGURATION_INCOMPLETE,
        ),
    ],
)
def test_factories(factory, status, code):
    exc = factory()

    assert exc.status_code == status
    assert exc.code == code


@pytest.mark.asyncio
async def test_handler_renders_problem_json():
    exc = configuration_incomplete(
        "workflow configuration incomplete",
        {"hasWorkflowId": False, "hasApiToken": True},
    )

    response = await app_exception_handler(_FakeRequest("req-1"), exc)

    assert response.status_code == 400
    assert response.media_type == "application/problem+json"
    body = json.loads(response.body)
    assert body["code"] == "CONFIGURATION_INCOMPLETE"
    assert body["error"] == "workflow configuration incomplete"
    assert body["detail"] == body["error"]
    assert body["details"] == {"hasWorkflowId": False, "hasApiToken": True}
    assert body["instance"] == "http://testserver/cards/6"
    assert body["errors"] == [{"request_id": "req-1"}]


@pytest.mark.asyncio
async def test_handler_omits_empty_members():
    response = await app_exception_handler(_FakeRequest(), not_found("missing"))

    body = json.loads(response.body)
    assert "details" not in body
    assert "errors" not in body
