"""
Name: Structured Logger Tests

Responsibilities:
  - Secrets in "extra" are redacted
  - Request context is attached to each record
"""

import json
import logging

import pytest

from catait.context import clear_context, set_request_context
from catait.crosscutting.logger import JSONFormatter

pytestmark = pytest.mark.unit


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="catait",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="password reset requested",
        args=(),
        exc_info=None,
    )
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_sensitive_keys_are_redacted():
    line = JSONFormatter().format(
        _record(
            reset_token="deadbeef",
            api_token="tok-5",
            password="hunter2",
            user_id=1,
        )
    )

    payload = json.loads(line)
    assert payload["reset_token"] == "***REDACTED***"
    assert payload["api_token"] == "***REDACTED***"
    assert payload["password"] == "***REDACTED***"
    assert payload["user_id"] == 1
    assert "deadbeef" not in line


def test_nested_secrets_are_redacted():
    payload = json.loads(
        JSONFormatter().format(_record(body={"token": "t", "username": "alice"}))
    )

    assert payload["body"] == {"token": "***REDACTED***", "username": "alice"}


def test_request_context_is_included():
    set_request_context(request_id="req-9", method="GET", path="/cards/5")
    try:
        payload = json.loads(JSONFormatter().format(_record()))
    finally:
        clear_context()

    assert payload["request_id"] == "req-9"
    assert payload["method"] == "GET"
    assert payload["path"] == "/cards/5"
    assert payload["message"] == "password reset requested"
