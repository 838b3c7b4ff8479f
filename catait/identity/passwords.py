"""
===============================================================================
CRC CARD: identity/passwords.py
===============================================================================

Module:
    Password hashing (Argon2)

Responsibilities:
    - Hash new passwords for the reset flow and the operator script.
    - Verify a password against a stored hash.

Collaborators:
    - argon2.PasswordHasher
===============================================================================
"""

from __future__ import annotations

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

_password_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a password using Argon2."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False
