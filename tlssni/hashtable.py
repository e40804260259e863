"""A chained hash table with bucket doubling and application-order iteration.

Entries are kept in two orders at once: the application order (insertion
order, or whatever order ``add_inorder`` and ``sort`` produce) and the bucket
chains used for lookup. The table starts with 32 buckets and doubles them
whenever a chain reaches its capacity threshold. If two doublings in a row
leave more than half of the items in over-long chains, the hash function is
judged a poor fit for the keys and further doubling is switched off.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from tlssni.hashing import DEFAULT_HASH, HashFunction
from tlssni.mergesort import merge_sort

__all__ = [
    "HashTable",
    "INITIAL_NUM_BUCKETS",
    "BUCKET_CAPACITY_THRESHOLD",
]

INITIAL_NUM_BUCKETS = 32
_INITIAL_NUM_BUCKETS_LOG2 = 5
BUCKET_CAPACITY_THRESHOLD = 10

Pair = tuple[bytes, Any]
Compare = Callable[[Pair, Pair], int]


@dataclass(eq=False)
class _Entry:
    key: bytes
    value: Any
    hashv: int

    @property
    def pair(self) -> Pair:
        return (self.key, self.value)


@dataclass(eq=False)
class _Bucket:
    # Most recently added entry first.
    chain: list[_Entry] = field(default_factory=list)
    expand_mult: int = 0


def _as_key(key: bytes | bytearray | memoryview) -> bytes:
    if isinstance(key, str):
        raise TypeError("keys must be bytes-like, not str")
    return bytes(key)


class HashTable:
    """Map bytes keys to values, keeping an explicit application order.

    Comparison functions given to ``add_inorder``, ``replace_inorder`` and
    ``sort`` receive two ``(key, value)`` pairs and return a negative number,
    zero or a positive number.
    """

    def __init__(self, hash_function: HashFunction = DEFAULT_HASH) -> None:
        self._hash = hash_function
        self._reset()

    def _reset(self) -> None:
        self._order: list[_Entry] = []
        self._buckets = [_Bucket() for _ in range(INITIAL_NUM_BUCKETS)]
        self._log2_num_buckets = _INITIAL_NUM_BUCKETS_LOG2
        self._ideal_chain_maxlen = 0
        self._nonideal_items = 0
        self._ineff_expands = 0
        self._noexpand = False

    def _bucket_for(self, hashv: int) -> _Bucket:
        return self._buckets[hashv & (len(self._buckets) - 1)]

    def _locate(self, key: bytes) -> _Entry | None:
        hashv = self._hash(key)
        return next(
            (
                entry
                for entry in self._bucket_for(hashv).chain
                if entry.hashv == hashv and entry.key == key
            ),
            None,
        )

    def _expand(self) -> None:
        num_items = len(self._order)
        new_count = len(self._buckets) * 2
        new_buckets = [_Bucket() for _ in range(new_count)]
        self._ideal_chain_maxlen = (num_items >> (self._log2_num_buckets + 1)) + (
            1 if num_items & (new_count - 1) else 0
        )
        self._nonideal_items = 0
        for bucket in self._buckets:
            for entry in bucket.chain:
                target = new_buckets[entry.hashv & (new_count - 1)]
                target.chain.insert(0, entry)
                if len(target.chain) > self._ideal_chain_maxlen:
                    self._nonideal_items += 1
                    target.expand_mult = len(target.chain) // self._ideal_chain_maxlen
        self._buckets = new_buckets
        self._log2_num_buckets += 1
        if self._nonideal_items > (num_items >> 1):
            self._ineff_expands += 1
        else:
            self._ineff_expands = 0
        if self._ineff_expands > 1:
            self._noexpand = True

    def _insert(self, key: bytes, value: Any, position: int) -> None:
        entry = _Entry(key, value, self._hash(key))
        self._order.insert(position, entry)
        bucket = self._bucket_for(entry.hashv)
        bucket.chain.insert(0, entry)
        limit = (bucket.expand_mult + 1) * BUCKET_CAPACITY_THRESHOLD
        if len(bucket.chain) >= limit and not self._noexpand:
            self._expand()

    def _remove(self, entry: _Entry) -> None:
        if len(self._order) == 1:
            self._reset()
            return
        self._order = [e for e in self._order if e is not entry]
        bucket = self._bucket_for(entry.hashv)
        bucket.chain = [e for e in bucket.chain if e is not entry]

    def _inorder_position(self, key: bytes, value: Any, compare: Compare) -> int:
        new_pair = (key, value)
        return next(
            (
                index
                for index, entry in enumerate(self._order)
                if compare(entry.pair, new_pair) > 0
            ),
            len(self._order),
        )

    def add(self, key: bytes | bytearray | memoryview, value: Any) -> None:
        """Append a new entry; raise KeyError if the key is already present."""
        key = _as_key(key)
        if self._locate(key) is not None:
            raise KeyError(key)
        self._insert(key, value, len(self._order))

    def add_inorder(
        self, key: bytes | bytearray | memoryview, value: Any, compare: Compare
    ) -> None:
        """Insert before the first entry that sorts after the new one."""
        key = _as_key(key)
        if self._locate(key) is not None:
            raise KeyError(key)
        self._insert(key, value, self._inorder_position(key, value, compare))

    def find(self, key: bytes | bytearray | memoryview) -> Any:
        """Return the value stored under ``key``, or None when it is absent."""
        entry = self._locate(_as_key(key))
        return None if entry is None else entry.value

    def __getitem__(self, key: bytes | bytearray | memoryview) -> Any:
        entry = self._locate(_as_key(key))
        if entry is None:
            raise KeyError(bytes(key))
        return entry.value

    def replace(self, key: bytes | bytearray | memoryview, value: Any) -> Any:
        """Store ``value`` at the end of the order; return the replaced value."""
        key = _as_key(key)
        old = self._locate(key)
        if old is not None:
            self._remove(old)
        self._insert(key, value, len(self._order))
        return None if old is None else old.value

    def replace_inorder(
        self, key: bytes | bytearray | memoryview, value: Any, compare: Compare
    ) -> Any:
        """Like ``replace`` but place the new entry as ``add_inorder`` does."""
        key = _as_key(key)
        old = self._locate(key)
        if old is not None:
            self._remove(old)
        self._insert(key, value, self._inorder_position(key, value, compare))
        return None if old is None else old.value

    def delete(self, key: bytes | bytearray | memoryview) -> Any:
        """Remove ``key`` and return its value; raise KeyError if absent."""
        key = _as_key(key)
        entry = self._locate(key)
        if entry is None:
            raise KeyError(key)
        self._remove(entry)
        return entry.value

    def sort(self, compare: Compare) -> None:
        """Reorder the application order with a stable merge sort."""
        self._order = merge_sort(self._order, lambda a, b: compare(a.pair, b.pair))

    def select(self, predicate: Callable[[bytes, Any], bool]) -> HashTable:
        """Return a new table holding the entries for which ``predicate`` holds.

        Entries are taken bucket by bucket, so the new table's order follows
        the source's bucket layout rather than its application order.
        """
        selected = HashTable(self._hash)
        for bucket in self._buckets:
            for entry in bucket.chain:
                if predicate(entry.key, entry.value):
                    selected.add(entry.key, entry.value)
        return selected

    def clear(self) -> None:
        """Remove every entry and return the table to its initial size."""
        self._reset()

    def __len__(self) -> int:
        return len(self._order)

    def __iter__(self) -> Iterator[bytes]:
        return iter([entry.key for entry in self._order])

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (bytes, bytearray, memoryview)):
            return False
        return self._locate(bytes(key)) is not None

    def items(self) -> Iterator[Pair]:
        """Yield ``(key, value)`` pairs in application order."""
        return iter([entry.pair for entry in self._order])

    def num_buckets(self) -> int:
        """Return the current number of buckets."""
        return len(self._buckets)

    def expansion_inhibited(self) -> bool:
        """Return True once bucket doubling has been switched off."""
        return self._noexpand