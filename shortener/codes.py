"""Identifier and short-code generation.

Every record gets a random base62 identifier drawn with nanoid. The public
short code is a fixed-length prefix of that identifier. A prefix is far more
likely to collide than the full identifier, so the registry re-draws whenever a
prefix is already taken (see CodeRegistry.register).

Key Behaviours
===============
- 22 base62 characters carry ~131 bits of randomness.
- Codes are URL-safe: letters and digits only.
"""

from nanoid import generate

from shortener.config import get_settings

__all__ = ["BASE62_ALPHABET", "generate_identifier", "derive_short_code"]

settings = get_settings()

BASE62_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"


def generate_identifier(length: int = settings.CODE_ID_LENGTH) -> str:
    assert isinstance(length, int) and length > 0, f"length must be a positive integer, got {length!r}"
    return generate(BASE62_ALPHABET, length)


def derive_short_code(identifier: str, length: int = settings.SHORT_CODE_LENGTH) -> str:
    assert len(identifier) >= length, f"identifier shorter than code length {length}: {identifier!r}"
    return identifier[:length]
