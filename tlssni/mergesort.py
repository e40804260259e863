"""Stable bottom-up merge sort driven by a three-way comparison function.

Runs of doubling length are merged pairwise, left to right, until a single
run remains. On ties the element from the left run goes first, so the sort
is stable.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

__all__ = ["merge_sort"]

T = TypeVar("T")

Compare = Callable[[T, T], int]


def _merge(left: list[T], right: list[T], compare: Compare) -> list[T]:
    merged: list[T] = []
    li = ri = 0
    while li < len(left) and ri < len(right):
        if compare(left[li], right[ri]) <= 0:
            merged.append(left[li])
            li += 1
        else:
            merged.append(right[ri])
            ri += 1
    merged.extend(left[li:])
    merged.extend(right[ri:])
    return merged


def merge_sort(items: Iterable[T], compare: Compare) -> list[T]:
    """Return a new list of ``items`` sorted by ``compare``.

    ``compare(a, b)`` returns a negative number, zero or a positive number
    when ``a`` sorts before, equal to or after ``b``. The input is left
    untouched and equal elements keep their original order.
    """
    runs = [[item] for item in items]
    if not runs:
        return []
    while len(runs) > 1:
        pending = iter(runs)
        next_runs = []
        for left in pending:
            right = next(pending, None)
            next_runs.append(left if right is None else _merge(left, right, compare))
        runs = next_runs
    return runs[0]