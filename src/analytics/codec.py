"""
UUID Binary Codec

Converts canonical UUID strings to and from BSON binary subtype 4, the
encoding the store uses for `orders.customerId` and `products._id`.

A string never compares equal to a stored binary key, so every lookup by
string id has to go through `encode` first.
"""

import re
import uuid
from typing import Any

from bson.binary import Binary, UUID_SUBTYPE

from src.analytics.errors import InvalidBinaryLength, InvalidUuidFormat

UUID_BYTES = 16

_HEX_32 = re.compile(r"[0-9a-fA-F]{32}")


def encode(value: str) -> Binary:
    """
    Encode a UUID string as a subtype-4 binary.

    Args:
        value: UUID string, hyphenated or not

    Returns:
        Binary: 16 raw bytes tagged with the UUID subtype

    Raises:
        InvalidUuidFormat: If the input does not hold exactly 32 hex digits
    """
    if not isinstance(value, str):
        raise InvalidUuidFormat(value)

    hex_digits = value.replace("-", "")
    if not _HEX_32.fullmatch(hex_digits):
        raise InvalidUuidFormat(value)

    return Binary(bytes.fromhex(hex_digits), UUID_SUBTYPE)


def decode(value: Binary) -> str:
    """
    Decode a 16-byte binary back to the hyphenated lowercase UUID string.

    Raises:
        InvalidBinaryLength: If the payload is not exactly 16 bytes
    """
    raw = bytes(value)
    if len(raw) != UUID_BYTES:
        raise InvalidBinaryLength(len(raw))
    return str(uuid.UUID(bytes=raw))


def equals(value: str, key: Any) -> bool:
    """Compare a UUID string against a stored binary key. Never raises."""
    if not isinstance(key, Binary):
        return False
    try:
        encoded = encode(value)
    except InvalidUuidFormat:
        return False
    return key.subtype == encoded.subtype and bytes(key) == bytes(encoded)


def key_of(value: Binary) -> tuple:
    """
    Hashable identity of a binary key: subtype and raw bytes.

    Two keys have the same `key_of` exactly when `equals` holds between one
    and the decoded string of the other, so dict lookups on it implement the
    same comparison in O(1).
    """
    return (value.subtype, bytes(value))


def as_uuid_string(value: Any) -> str:
    """
    Best-effort string form of an identifier read from a document.

    Subtype-4 binaries are decoded; anything else is converted with `str()`.
    """
    if isinstance(value, Binary) and value.subtype == UUID_SUBTYPE:
        return decode(value)
    return str(value)
