"""Opaque password handling for persisted connection descriptors.

When ``password_encryption`` is enabled the stored form is
``"b64:" + base64(salt + password + salt)``; the prefix lets the decoder tell
encoded values from plain ones. This is obfuscation for configuration stores,
not encryption.
"""

import base64
import binascii
from typing import Optional

from dbsource.config import Settings, get_settings

ENCODED_PREFIX = "b64:"


def encode_password(password: Optional[str], settings: Optional[Settings] = None) -> str:
    if not password:
        return ""
    settings = settings or get_settings()
    if not settings.password_encryption:
        return password
    salted = f"{settings.password_salt}{password}{settings.password_salt}"
    return ENCODED_PREFIX + base64.b64encode(salted.encode("utf-8")).decode("ascii")


def decode_password(stored: Optional[str], settings: Optional[Settings] = None) -> str:
    """Reverse ``encode_password``; plain values pass through unchanged."""
    if not stored:
        return ""
    if not stored.startswith(ENCODED_PREFIX):
        return stored
    settings = settings or get_settings()
    try:
        salted = base64.b64decode(stored[len(ENCODED_PREFIX):], validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ValueError(f"Stored password is not valid encoded data: {e}") from e

    salt = settings.password_salt or ""
    if not salt:
        return salted
    if salted.startswith(salt) and salted.endswith(salt) and len(salted) >= 2 * len(salt):
        return salted[len(salt): len(salted) - len(salt)]
    raise ValueError("Stored password was encoded with a different salt")
