"""Unit tests for identifier and short-code generation utilities."""

from shortener.codes import BASE62_ALPHABET, derive_short_code, generate_identifier
from shortener.config import get_settings

settings = get_settings()


def test_generate_identifier_default_length() -> None:
    identifier = generate_identifier()
    assert len(identifier) == settings.CODE_ID_LENGTH


def test_generate_identifier_custom_length() -> None:
    identifier = generate_identifier(length=30)
    assert len(identifier) == 30


def test_generate_identifier_only_base62() -> None:
    for _ in range(100):
        identifier = generate_identifier()
        assert all(c in BASE62_ALPHABET for c in identifier)


def test_generate_identifier_uniqueness() -> None:
    identifiers = {generate_identifier() for _ in range(1000)}
    assert len(identifiers) == 1000


def test_derive_short_code_is_prefix() -> None:
    identifier = generate_identifier()
    code = derive_short_code(identifier)
    assert len(code) == settings.SHORT_CODE_LENGTH
    assert identifier.startswith(code)


def test_derive_short_code_custom_length() -> None:
    assert derive_short_code("abcdefghijklmnop", length=5) == "abcde"
    assert derive_short_code("abcdefgh", length=8) == "abcdefgh"
