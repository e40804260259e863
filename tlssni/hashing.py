"""Classic 32-bit string hash functions used for hash-table bucketing.

Each function takes a bytes-like key and returns an unsigned 32-bit integer.
``jen`` (Bob Jenkins' lookup2 mix) is the default choice.
"""

from __future__ import annotations

from collections.abc import Callable

__all__ = [
    "HashFunction",
    "ber",
    "sax",
    "fnv",
    "oat",
    "jen",
    "HASH_FUNCTIONS",
    "DEFAULT_HASH",
]

HashFunction = Callable[[bytes], int]

_MASK = 0xFFFFFFFF
_FNV_OFFSET_BASIS = 2166136261
_FNV_PRIME = 16777619
_JEN_GOLDEN_RATIO = 0x9E3779B9
_JEN_INITIAL = 0xFEEDBEEF


def _as_bytes(key: bytes | bytearray | memoryview) -> bytes:
    if isinstance(key, str):
        raise TypeError("hash keys must be bytes-like, not str")
    return bytes(key)


def ber(key: bytes | bytearray | memoryview) -> int:
    """Bernstein hash: ``h = h * 33 + byte``."""
    hashv = 0
    for byte in _as_bytes(key):
        hashv = ((hashv << 5) + hashv + byte) & _MASK
    return hashv


def sax(key: bytes | bytearray | memoryview) -> int:
    """Shift-add-xor hash."""
    hashv = 0
    for byte in _as_bytes(key):
        hashv ^= ((hashv << 5) + (hashv >> 2) + byte) & _MASK
    return hashv


def fnv(key: bytes | bytearray | memoryview) -> int:
    """FNV-1a 32-bit hash."""
    hashv = _FNV_OFFSET_BASIS
    for byte in _as_bytes(key):
        hashv = ((hashv ^ byte) * _FNV_PRIME) & _MASK
    return hashv


def oat(key: bytes | bytearray | memoryview) -> int:
    """Jenkins one-at-a-time hash."""
    hashv = 0
    for byte in _as_bytes(key):
        hashv = (hashv + byte) & _MASK
        hashv = (hashv + (hashv << 10)) & _MASK
        hashv ^= hashv >> 6
    hashv = (hashv + (hashv << 3)) & _MASK
    hashv ^= hashv >> 11
    hashv = (hashv + (hashv << 15)) & _MASK
    return hashv


def _jen_mix(a: int, b: int, c: int) -> tuple[int, int, int]:
    a = (a - b - c) & _MASK
    a ^= c >> 13
    b = (b - c - a) & _MASK
    b ^= (a << 8) & _MASK
    c = (c - a - b) & _MASK
    c ^= b >> 13
    a = (a - b - c) & _MASK
    a ^= c >> 12
    b = (b - c - a) & _MASK
    b ^= (a << 16) & _MASK
    c = (c - a - b) & _MASK
    c ^= b >> 5
    a = (a - b - c) & _MASK
    a ^= c >> 3
    b = (b - c - a) & _MASK
    b ^= (a << 10) & _MASK
    c = (c - a - b) & _MASK
    c ^= b >> 15
    return a, b, c


def jen(key: bytes | bytearray | memoryview) -> int:
    """Bob Jenkins' lookup2 hash with a fixed initial value."""
    data = _as_bytes(key)
    length = len(data)
    a = b = _JEN_GOLDEN_RATIO
    c = _JEN_INITIAL

    full = length - length % 12
    for start in range(0, full, 12):
        a = (a + int.from_bytes(data[start:start + 4], "little")) & _MASK
        b = (b + int.from_bytes(data[start + 4:start + 8], "little")) & _MASK
        c = (c + int.from_bytes(data[start + 8:start + 12], "little")) & _MASK
        a, b, c = _jen_mix(a, b, c)

    c = (c + length) & _MASK
    # The low byte of c is reserved for the length, so tail bytes 8..10
    # land one byte higher than their position would suggest.
    for offset, byte in enumerate(data[full:]):
        if offset < 4:
            a = (a + (byte << (8 * offset))) & _MASK
        elif offset < 8:
            b = (b + (byte << (8 * (offset - 4)))) & _MASK
        else:
            c = (c + (byte << (8 * (offset - 7)))) & _MASK
    _, _, c = _jen_mix(a, b, c)
    return c


HASH_FUNCTIONS: dict[str, HashFunction] = {
    "ber": ber,
    "sax": sax,
    "fnv": fnv,
    "oat": oat,
    "jen": jen,
}

DEFAULT_HASH: HashFunction = jen