"""Encryption boundary for the personally identifying part of a résumé.

Only ``content["personal"]`` is encrypted.  It is serialized to JSON and
sealed with Fernet, so ``decrypt(encrypt(x)) == x`` holds for any personal
dict, including ones with absent or empty fields.  All other sections pass
through untouched.

Keys come from ``RESUME_ENCRYPTION_KEY``: a comma-separated list of Fernet
keys.  The first key encrypts; every key is tried on decrypt, which allows
rotation without re-encrypting stored documents.
"""

from __future__ import annotations

import json
from typing import Any

from cryptography.fernet import Fernet, InvalidToken, MultiFernet

from resume_builder.config import get_settings
from resume_builder.errors import DecryptionFailed, PersonalDataError

__all__ = [
    "ENCRYPTION_SCHEME",
    "decrypt_personal_data",
    "encrypt_personal_data",
    "is_encrypted",
]

ENCRYPTION_SCHEME = "fernet-v1"


def _cipher() -> MultiFernet:
    keys = get_settings().encryption_keys
    if not keys:
        raise PersonalDataError("Encryption key is not configured")
    try:
        return MultiFernet([Fernet(key.encode("ascii")) for key in keys])
    except (ValueError, UnicodeEncodeError) as exc:
        raise PersonalDataError("Encryption key is malformed") from exc


def is_encrypted(personal: Any) -> bool:
    return (
        isinstance(personal, dict)
        and personal.get("scheme") == ENCRYPTION_SCHEME
        and "ciphertext" in personal
    )


def encrypt_personal_data(content: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *content* with the ``personal`` subtree sealed.

    Already-sealed content is returned unchanged.
    """
    result = dict(content)
    personal = result.get("personal")
    if personal is None or is_encrypted(personal):
        return result
    payload = json.dumps(personal, separators=(",", ":"), sort_keys=True).encode("utf-8")
    token = _cipher().encrypt(payload)
    result["personal"] = {"scheme": ENCRYPTION_SCHEME, "ciphertext": token.decode("ascii")}
    return result


def decrypt_personal_data(content: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of *content* with the ``personal`` subtree in plaintext.

    Plain (never encrypted) personal dicts from older documents pass through.

    Raises:
        DecryptionFailed: If the ciphertext is corrupt, was sealed with an
            unknown key, or no key is configured.
    """
    result = dict(content)
    personal = result.get("personal")
    if not is_encrypted(personal):
        return result
    try:
        plaintext = _cipher().decrypt(personal["ciphertext"].encode("ascii"))
    except PersonalDataError as exc:
        raise DecryptionFailed(f"Failed to decrypt personal data: {exc.detail}") from exc
    except (InvalidToken, UnicodeEncodeError, AttributeError) as exc:
        raise DecryptionFailed() from exc
    try:
        result["personal"] = json.loads(plaintext)
    except ValueError as exc:
        raise DecryptionFailed() from exc
    return result
