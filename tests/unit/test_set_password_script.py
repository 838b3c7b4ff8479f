"""
Name: Set Password Script Tests

Responsibilities:
  - --hash-only prints an Argon2 hash without a database
  - Unknown usernames exit with an error
"""

import importlib.util
from pathlib import Path

import pytest

pytestmark = pytest.mark.unit

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "set_password.py"


@pytest.fixture
def script():
    module_spec = importlib.util.spec_from_file_location("set_password_script", SCRIPT)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


def test_hash_only_prints_hash(script, capsys):
    script.main(["--hash-only", "--password", "s3cret!"])

    assert capsys.readouterr().out.strip().startswith("$argon2")


def test_username_required_without_hash_only(script):
    with pytest.raises(SystemExit, match="--username"):
        script.main(["--password", "s3cret!"])


def test_unknown_user_exits(script, monkeypatch):
    monkeypatch.setattr(script, "_set_password", lambda *_: False)

    with pytest.raises(SystemExit, match="User not found"):
        script.main(["--username", "ghost", "--password", "s3cret!"])


def test_known_user_is_updated(script, monkeypatch, capsys):
    calls = []
    monkeypatch.setattr(
        script, "_set_password", lambda url, user, pw: calls.append((user, pw)) or True
    )

    script.main(["--", "--username", " alice ", "--password", "s3cret!"])

    assert calls == [("alice", "s3cret!")]
    assert "username=alice" in capsys.readouterr().out
