"""Key derivation for flyweight caches.

A flyweight key must be derived from every intrinsic attribute of the shared
object and from nothing else. Three forms are provided:

- intrinsic_key(): an in-process hashable key (cachetools.keys.hashkey)
- joined_key(): a readable string key, e.g. "Oak_green"
- digest_key(): a SHA-256 digest that is stable across processes
"""

import hashlib
from collections.abc import Hashable, Mapping, Sequence
from decimal import Decimal
from typing import Any

from cachetools.keys import hashkey


def intrinsic_key(*attrs: Hashable, **named: Hashable) -> Hashable:
    """Build a hashable cache key from intrinsic attributes.

    Positional order matters; keyword order does not.

    Examples:
        >>> intrinsic_key("Oak", "green") == intrinsic_key("Oak", "green")
        True
        >>> intrinsic_key(name="Oak", color="green") == intrinsic_key(color="green", name="Oak")
        True
    """
    return hashkey(*attrs, **named)


def joined_key(*parts: Any, sep: str = "_") -> str:
    """Join intrinsic attributes into a single string key.

    Args:
        *parts: Attribute values; each is converted with str().
        sep: Separator placed between parts.

    Returns:
        The joined key, e.g. ``joined_key("Oak", "green") == "Oak_green"``.

    Raises:
        ValueError: If no parts are given.
    """
    if not parts:
        raise ValueError("joined_key() needs at least one part")
    return sep.join(str(part) for part in parts)


def digest_key(value: Any) -> str:
    """Recursively hash a value to produce a deterministic SHA-256 key.

    Supports:
    - str, bytes, int, bool: Hashed with a type tag, so 1, "1" and True differ
    - Decimal: Canonicalized to string, tagged, then hashed
    - None: Special hash value
    - dict/Mapping: Sorts entries by key digest, recursively hashes values
    - list/tuple/Sequence: Recursively hashes each element in order

    Args:
        value: The value to hash.

    Returns:
        A hexadecimal SHA-256 hash string (64 characters).

    Raises:
        TypeError: If value type is not supported.
    """
    if value is None:
        return hashlib.sha256(b"none:").hexdigest()

    if isinstance(value, str):
        return hashlib.sha256(b"str:" + value.encode("utf-8")).hexdigest()

    # bytes before Sequence, which would hash them as a list of ints
    if isinstance(value, (bytes, bytearray)):
        return hashlib.sha256(b"bytes:" + bytes(value)).hexdigest()

    # bool before int since bool is a subclass of int
    if isinstance(value, bool):
        return hashlib.sha256(f"bool:{value}".encode("utf-8")).hexdigest()

    if isinstance(value, int):
        return hashlib.sha256(f"int:{value}".encode("utf-8")).hexdigest()

    if isinstance(value, Decimal):
        canonical = str(value)
        return hashlib.sha256(f"dec:{canonical}".encode("utf-8")).hexdigest()

    if isinstance(value, Mapping):
        # Sort by key digest: deterministic even for keys like 1 and "1"
        entries = sorted((digest_key(key), digest_key(val)) for key, val in value.items())
        hasher = hashlib.sha256(b"map")
        for key_digest, val_digest in entries:
            hasher.update(key_digest.encode("utf-8"))
            hasher.update(val_digest.encode("utf-8"))
        return hasher.hexdigest()

    if isinstance(value, Sequence):
        hasher = hashlib.sha256(b"seq")
        for item in value:
            hasher.update(digest_key(item).encode("utf-8"))
        return hasher.hexdigest()

    raise TypeError(
        f"Unsupported type for key derivation: {type(value).__name__}. "
        f"Value must be str, bytes, int, bool, Decimal, None, a mapping or a sequence."
    )
