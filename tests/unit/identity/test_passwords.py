"""
Name: Password Hashing Tests
"""

import pytest

from catait.identity.passwords import hash_password, verify_password

pytestmark = pytest.mark.unit


def test_hash_is_argon2_and_salted():
    first = hash_password("s3cret!")
    second = hash_password("s3cret!")

    assert first.startswith("$argon2")
    assert first != second


def test_verify_password():
    stored = hash_password("s3cret!")

    assert verify_password("s3cret!", stored) is True
    assert verify_password("wrong", stored) is False


def test_verify_against_garbage_hash_is_false():
    assert verify_password("s3cret!", "$argon2id$garbage") is False
