"""Block-oriented 32-bit hash functions: SuperFastHash and MurmurHash3.

Both read their input as little-endian words and return an unsigned
32-bit integer, so results do not depend on the host byte order.
"""

from __future__ import annotations

__all__ = ["sfh", "mur", "SFH_INITIAL", "MUR_SEED"]

_MASK = 0xFFFFFFFF

SFH_INITIAL = 0xCAFEBABE
MUR_SEED = 0xF88D5353

_MUR_C1 = 0xCC9E2D51
_MUR_C2 = 0x1B873593


def _as_bytes(key: bytes | bytearray | memoryview) -> bytes:
    if isinstance(key, str):
        raise TypeError("hash keys must be bytes-like, not str")
    return bytes(key)


def _u16(data: bytes, pos: int) -> int:
    return data[pos] | (data[pos + 1] << 8)


def sfh(key: bytes | bytearray | memoryview) -> int:
    """Paul Hsieh's SuperFastHash, started from a fixed initial value."""
    data = _as_bytes(key)
    remainder = len(data) & 3
    full = len(data) - remainder
    hashv = SFH_INITIAL

    for start in range(0, full, 4):
        hashv = (hashv + _u16(data, start)) & _MASK
        tmp = ((_u16(data, start + 2) << 11) ^ hashv) & _MASK
        hashv = ((hashv << 16) ^ tmp) & _MASK
        hashv = (hashv + (hashv >> 11)) & _MASK

    tail = data[full:]
    if remainder == 3:
        hashv = (hashv + _u16(tail, 0)) & _MASK
        hashv ^= (hashv << 16) & _MASK
        hashv ^= (tail[2] << 18) & _MASK
        hashv = (hashv + (hashv >> 11)) & _MASK
    elif remainder == 2:
        hashv = (hashv + _u16(tail, 0)) & _MASK
        hashv ^= (hashv << 11) & _MASK
        hashv = (hashv + (hashv >> 17)) & _MASK
    elif remainder == 1:
        hashv = (hashv + tail[0]) & _MASK
        hashv ^= (hashv << 10) & _MASK
        hashv = (hashv + (hashv >> 1)) & _MASK

    # Force avalanching of the final bits.
    hashv ^= (hashv << 3) & _MASK
    hashv = (hashv + (hashv >> 5)) & _MASK
    hashv ^= (hashv << 4) & _MASK
    hashv = (hashv + (hashv >> 17)) & _MASK
    hashv ^= (hashv << 25) & _MASK
    hashv = (hashv + (hashv >> 6)) & _MASK
    return hashv


def _rotl32(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & _MASK


def _fmix(h: int) -> int:
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & _MASK
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & _MASK
    h ^= h >> 16
    return h


def _scramble(k: int) -> int:
    k = (k * _MUR_C1) & _MASK
    k = _rotl32(k, 15)
    return (k * _MUR_C2) & _MASK


def _murmur3_32(key: bytes | bytearray | memoryview, seed: int) -> int:
    """MurmurHash3 (x86, 32-bit) of ``key`` with the given seed."""
    data = _as_bytes(key)
    length = len(data)
    full = length - (length & 3)
    h1 = seed & _MASK

    for start in range(0, full, 4):
        k1 = int.from_bytes(data[start:start + 4], "little")
        h1 ^= _scramble(k1)
        h1 = _rotl32(h1, 13)
        h1 = (h1 * 5 + 0xE6546B64) & _MASK

    tail = data[full:]
    if tail:
        h1 ^= _scramble(int.from_bytes(tail, "little"))

    h1 ^= length & _MASK
    return _fmix(h1)


def mur(key: bytes | bytearray | memoryview) -> int:
    """MurmurHash3 (x86, 32-bit) with a fixed seed."""
    return _murmur3_32(key, MUR_SEED)