import pytest
from hypothesis import given, strategies as st

from tlssni.hashing import fnv
from tlssni.hashtable import BUCKET_CAPACITY_THRESHOLD, INITIAL_NUM_BUCKETS, HashTable


def constant_hash(key):
    return 0


def by_value(a, b):
    return (a[1] > b[1]) - (a[1] < b[1])


def keys(n):
    return [b"key-%d" % i for i in range(n)]


def test_add_and_find():
    table = HashTable()
    table.add(b"alpha", 1)
    table.add(b"beta", 2)
    assert table.find(b"alpha") == 1
    assert table.find(b"beta") == 2
    assert table.find(b"gamma") is None
    assert len(table) == 2


def test_find_missing_returns_none():
    table = HashTable()
    table.add(b"present", 1)
    assert table.find(b"missing") is None
    assert b"missing" not in table
    assert table.find(b"present") == 1


def test_duplicate_add_raises():
    table = HashTable()
    table.add(b"k", 1)
    with pytest.raises(KeyError):
        table.add(b"k", 2)
    assert table.find(b"k") == 1


def test_str_key_rejected():
    table = HashTable()
    with pytest.raises(TypeError):
        table.add("text", 1)


def test_contains():
    table = HashTable()
    table.add(bytearray(b"abc"), 1)
    assert b"abc" in table
    assert b"abd" not in table
    assert "abc" not in table


def test_iteration_follows_insertion_order():
    table = HashTable()
    for index, key in enumerate(keys(50)):
        table.add(key, index)
    assert list(table) == keys(50)
    assert list(table.items()) == [(k, i) for i, k in enumerate(keys(50))]


def test_initial_bucket_count():
    assert HashTable().num_buckets() == INITIAL_NUM_BUCKETS


def test_bucket_doubles_when_chain_reaches_threshold():
    table = HashTable(constant_hash)
    for key in keys(BUCKET_CAPACITY_THRESHOLD - 1):
        table.add(key, None)
    assert table.num_buckets() == INITIAL_NUM_BUCKETS
    table.add(b"one-more", None)
    assert table.num_buckets() == INITIAL_NUM_BUCKETS * 2
    assert not table.expansion_inhibited()


def test_bad_hash_inhibits_expansion():
    table = HashTable(constant_hash)
    for key in keys(500):
        table.add(key, key)
    assert table.expansion_inhibited()
    size = table.num_buckets()
    for key in keys(600)[500:]:
        table.add(key, key)
    assert table.num_buckets() == size
    assert all(table.find(key) == key for key in keys(600))


def test_good_hash_keeps_expanding():
    table = HashTable()
    for key in keys(2000):
        table.add(key, key)
    assert not table.expansion_inhibited()
    buckets = table.num_buckets()
    assert buckets > INITIAL_NUM_BUCKETS
    assert buckets & (buckets - 1) == 0
    assert all(table.find(key) == key for key in keys(2000))


def test_delete_returns_value_and_removes():
    table = HashTable()
    for index, key in enumerate(keys(5)):
        table.add(key, index)
    assert table.delete(b"key-2") == 2
    assert b"key-2" not in table
    assert list(table) == [b"key-0", b"key-1", b"key-3", b"key-4"]


def test_delete_missing_raises():
    table = HashTable()
    table.add(b"a", 1)
    with pytest.raises(KeyError):
        table.delete(b"b")


def test_deleting_last_entry_resets_table():
    table = HashTable(constant_hash)
    for key in keys(30):
        table.add(key, None)
    assert table.num_buckets() > INITIAL_NUM_BUCKETS
    for key in keys(30):
        table.delete(key)
    assert len(table) == 0
    assert table.num_buckets() == INITIAL_NUM_BUCKETS


def test_clear():
    table = HashTable(constant_hash)
    for key in keys(500):
        table.add(key, None)
    table.clear()
    assert len(table) == 0
    assert list(table) == []
    assert table.num_buckets() == INITIAL_NUM_BUCKETS
    assert not table.expansion_inhibited()


def test_replace_returns_old_and_moves_to_end():
    table = HashTable()
    table.add(b"a", 1)
    table.add(b"b", 2)
    assert table.replace(b"a", 10) == 1
    assert list(table.items()) == [(b"b", 2), (b"a", 10)]
    assert table.replace(b"c", 3) is None
    assert table.find(b"c") == 3


def test_add_inorder_keeps_sorted_and_stable():
    table = HashTable()
    for key, value in [(b"x", 5), (b"y", 1), (b"z", 3), (b"w", 3), (b"v", 9)]:
        table.add_inorder(key, value, by_value)
    assert list(table.items()) == [(b"y", 1), (b"z", 3), (b"w", 3), (b"x", 5), (b"v", 9)]


def test_add_inorder_duplicate_raises():
    table = HashTable()
    table.add_inorder(b"x", 1, by_value)
    with pytest.raises(KeyError):
        table.add_inorder(b"x", 2, by_value)


def test_replace_inorder():
    table = HashTable()
    for key, value in [(b"a", 1), (b"b", 2), (b"c", 3)]:
        table.add_inorder(key, value, by_value)
    assert table.replace_inorder(b"a", 4, by_value) == 1
    assert list(table) == [b"b", b"c", b"a"]


def test_sort_is_stable_and_lookup_survives():
    table = HashTable()
    data = [(b"a", 3), (b"b", 1), (b"c", 3), (b"d", 0)]
    for key, value in data:
        table.add(key, value)
    table.sort(by_value)
    assert list(table.items()) == sorted(data, key=lambda pair: pair[1])
    assert all(table.find(key) == value for key, value in data)


def test_select_picks_matching_entries():
    table = HashTable(fnv)
    for index, key in enumerate(keys(100)):
        table.add(key, index)
    evens = table.select(lambda key, value: value % 2 == 0)
    assert len(evens) == 50
    assert sorted(evens.items(), key=lambda pair: pair[1]) == [
        (b"key-%d" % i, i) for i in range(0, 100, 2)
    ]
    assert len(table) == 100


@given(st.lists(st.binary(max_size=20), unique=True, max_size=200))
def test_roundtrip_property(data):
    table = HashTable()
    for index, key in enumerate(data):
        table.add(key, index)
    assert len(table) == len(data)
    assert list(table) == data
    assert all(table.find(key) == index for index, key in enumerate(data))


@given(
    st.lists(st.binary(max_size=8), unique=True, max_size=100),
    st.data(),
)
def test_delete_subset_property(data, draw):
    table = HashTable()
    for key in data:
        table.add(key, key)
    removed = draw.draw(st.sets(st.sampled_from(data))) if data else set()
    for key in removed:
        assert table.delete(key) == key
    remaining = [key for key in data if key not in removed]
    assert list(table) == remaining
    assert all(key not in table for key in removed)