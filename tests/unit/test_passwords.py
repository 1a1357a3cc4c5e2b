"""Tests for stored password encoding."""

import pytest

from dbsource.config import Settings
from dbsource.passwords import decode_password, encode_password


def test_plain_when_encryption_disabled():
    assert encode_password("secret") == "secret"
    assert decode_password("secret") == "secret"


def test_empty_values():
    assert encode_password("", Settings(password_encryption=True)) == ""
    assert encode_password(None) == ""
    assert decode_password(None) == ""


def test_encoded_round_trip(encrypting_settings):
    stored = encode_password("p@ss:word", encrypting_settings)
    assert stored.startswith("b64:")
    assert "p@ss:word" not in stored
    assert decode_password(stored, encrypting_settings) == "p@ss:word"


def test_uses_cached_settings(default_settings):
    default_settings.password_encryption = True
    stored = encode_password("secret")
    assert stored.startswith("b64:")
    assert decode_password(stored) == "secret"


def test_wrong_salt(encrypting_settings):
    stored = encode_password("secret", encrypting_settings)
    with pytest.raises(ValueError, match="different salt"):
        decode_password(stored, Settings(password_encryption=True, password_salt="other"))


def test_corrupt_value(encrypting_settings):
    with pytest.raises(ValueError, match="not valid encoded data"):
        decode_password("b64:%%%not-base64", encrypting_settings)


def test_empty_salt_round_trip():
    settings = Settings(password_encryption=True, password_salt="")
    stored = encode_password("secret", settings)
    assert stored.startswith("b64:")
    assert decode_password(stored, settings) == "secret"
