"""
Seed derivation for path keys.

Hashes a path key such as ``"GET /users/{id}.name"`` into a non-negative
integer seed. The hash only needs to be reproducible, not strong: the same
key and base seed always give the same result, in every process.
"""

from __future__ import annotations

from collections.abc import Iterator

DEFAULT_SEED = 12345

_MASK_32 = 0xFFFFFFFF


def _to_int32(value: int) -> int:
    """Truncate to a signed 32-bit integer."""
    value &= _MASK_32
    return value - 0x100000000 if value & 0x80000000 else value


def _code_units(key: str) -> Iterator[int]:
    """Yield the UTF-16 code units of ``key`` (astral characters become surrogate pairs)."""
    for char in key:
        point = ord(char)
        if point > 0xFFFF:
            point -= 0x10000
            yield 0xD800 + (point >> 10)
            yield 0xDC00 + (point & 0x3FF)
        else:
            yield point


def derive_seed(base_seed: int, key: str) -> int:
    """Derive a deterministic seed from a base seed and a path key.

    Args:
        base_seed: Operator-configured base seed (default ``12345``).
        key: Path key identifying the generation site.

    Returns:
        ``abs(base_seed + hash(key))`` where the hash is a rolling 32-bit
        multiplicative hash over the key's UTF-16 code units.
    """
    hash_value = 0
    for unit in _code_units(key):
        hash_value = _to_int32((hash_value * 31 - hash_value) + unit)
    return abs(base_seed + hash_value)
