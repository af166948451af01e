"""Salted PBKDF2 hashing for share-link passwords.

Hashes are stored as ``<salt_hex>:<hash_hex>``.
"""

from __future__ import annotations

import hashlib
import hmac
import os

__all__ = ["hash_password", "verify_password"]

_PBKDF2_ITERATIONS = 100_000
_SALT_BYTES = 16


def _derive(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)


def hash_password(password: str) -> str:
    """Return a salted PBKDF2 hash for *password*."""
    salt = os.urandom(_SALT_BYTES)
    return f"{salt.hex()}:{_derive(password, salt).hex()}"


def verify_password(password: str | None, stored_hash: str) -> bool:
    """Check *password* against a stored ``salt:hash`` string.

    A missing password never matches.
    """
    if password is None:
        return False
    try:
        salt_hex, hash_hex = stored_hash.split(":", 1)
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    return hmac.compare_digest(_derive(password, salt), expected)
