import pytest
from hypothesis import given
from hypothesis import strategies as st

from tlssni.mixhash import MUR_SEED, _murmur3_32, mur, sfh


@pytest.mark.parametrize(
    "key, seed, expected",
    [
        (b"", 0, 0),
        (b"", 1, 0x514E28B7),
        (b"\x00\x00\x00\x00", 0, 0x2362F9DE),
        (b"The quick brown fox jumps over the lazy dog", 0, 0x2E4FF723),
    ],
)
def test_murmur3_reference_vectors(key, seed, expected):
    assert _murmur3_32(key, seed) == expected


def test_mur_uses_fixed_seed():
    key = b"example.com"
    assert mur(key) == _murmur3_32(key, MUR_SEED)
    assert mur(key) != _murmur3_32(key, 0)


def test_mur_single_bytes_are_all_distinct():
    results = {mur(bytes([b])) for b in range(256)}
    assert len(results) == 256


def test_sfh_single_bytes_spread_well():
    results = {sfh(bytes([b])) for b in range(256)}
    assert len(results) > 250


@pytest.mark.parametrize("func", [sfh, mur])
def test_rejects_str(func):
    with pytest.raises(TypeError):
        func("example.com")


@pytest.mark.parametrize("func", [sfh, mur])
def test_every_tail_length_differs(func):
    keys = [b"abcdefgh"[:n] for n in range(9)]
    assert len({func(k) for k in keys}) == len(keys)


@given(st.binary(max_size=64))
def test_sfh_range_and_input_types(key):
    value = sfh(key)
    assert 0 <= value <= 0xFFFFFFFF
    assert sfh(bytearray(key)) == value
    assert sfh(memoryview(key)) == value


@given(st.binary(max_size=64))
def test_mur_range_and_input_types(key):
    value = mur(key)
    assert 0 <= value <= 0xFFFFFFFF
    assert mur(bytearray(key)) == value
    assert mur(memoryview(key)) == value


@given(st.binary(min_size=1, max_size=32), st.integers(min_value=0, max_value=255))
def test_mur_sensitive_to_appended_byte(key, extra):
    assert mur(key + bytes([extra])) != mur(key) or len(key) == 0


@given(st.binary(max_size=32))
def test_deterministic(key):
    assert sfh(key) == sfh(bytes(key))
    assert mur(key) == mur(bytes(key))