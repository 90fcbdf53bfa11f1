"""
Property helpers for validating partition results.

These functions provide lightweight checks used in tests and by the benchmark
runner for sanity validation.

Public API (stable):
    is_zero_partitioned(xs: Sequence[int], boundary: int, zero=0) -> bool
    first_partition_violation_index(xs, boundary, zero=0) -> int | None
    is_permutation(a: Sequence[int], b: Sequence[int]) -> bool
    permutation_counter_diff(a: Sequence[int], b: Sequence[int]) -> dict[int, int]
    nonzero_order_preserved(before, after, zero=0) -> bool
    assert_no_mutation(before: Sequence[int], after: Sequence[int]) -> None

Notes
-----
- Order among zeros is never checked: equal zeros are indistinguishable by
  value, and no algorithm here claims to keep it.
- `nonzero_order_preserved` is diagnostic only. The two-pointer partition does
  not preserve the order of non-zeros in general.
"""

from __future__ import annotations

from typing import Any, Dict, Sequence

from .multiset import Multiset

__all__ = [
    "is_zero_partitioned",
    "first_partition_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "nonzero_order_preserved",
    "assert_no_mutation",
]


def is_zero_partitioned(xs: Sequence[int], boundary: int, zero: Any = 0) -> bool:
    """Return True iff 0 <= boundary <= len(xs), xs[:boundary] is all zero and xs[boundary:] has none."""
    return first_partition_violation_index(xs, boundary, zero) is None


def first_partition_violation_index(xs: Sequence[int], boundary: int, zero: Any = 0) -> int | None:
    """
    Return the first index breaking the zero-prefix/non-zero-suffix layout, or None.

    An out-of-range boundary is reported as the boundary itself.

    Useful for precise error messages:
        p = first_partition_violation_index(out, i)
        assert p is None, f"bad partition at p={p}: {out[p]!r} (boundary={i})"
    """
    n = len(xs)
    if not (0 <= boundary <= n):
        return boundary
    for p in range(boundary):
        if xs[p] != zero:
            return p
    for p in range(boundary, n):
        if xs[p] == zero:
            return p
    return None


def is_permutation(a: Sequence[int], b: Sequence[int]) -> bool:
    """
    Return True iff `a` and `b` contain exactly the same multiset of values.
    """
    if len(a) != len(b):
        return False
    return Multiset.from_iterable(a) == Multiset.from_iterable(b)


def permutation_counter_diff(a: Sequence[int], b: Sequence[int]) -> Dict[int, int]:
    """
    Return a dict of value -> count difference (count_a - count_b).

    Empty dict means `a` and `b` have identical multiplicities.
    Positive values indicate extra occurrences in `a`, negative in `b`.
    """
    ca = Multiset.from_iterable(a)
    cb = Multiset.from_iterable(b)
    diff: Dict[int, int] = {}
    for k in {k for k, _ in ca} | {k for k, _ in cb}:
        d = ca.get(k) - cb.get(k)
        if d != 0:
            diff[k] = d
    return diff


def nonzero_order_preserved(before: Sequence[int], after: Sequence[int], zero: Any = 0) -> bool:
    """Return True iff the non-zero elements appear in the same relative order in both sequences."""
    return [x for x in before if x != zero] == [x for x in after if x != zero]


def assert_no_mutation(before: Sequence[int], after: Sequence[int]) -> None:
    """
    Assert that two sequences are exactly equal (element-wise).

    Used to check that the oracle leaves its input alone and that
    re-partitioning an already partitioned sequence changes nothing.

    Raises AssertionError with a concise message if they differ.
    """
    if len(before) != len(after):
        raise AssertionError(
            f"Sequence changed: length went from {len(before)} to {len(after)}"
        )
    if list(before) == list(after):
        return
    for i, (x, y) in enumerate(zip(before, after)):
        if x != y:
            raise AssertionError(
                f"Sequence changed at index {i}: before={x}, after={y}"
            )
    raise AssertionError("Sequence changed (values differ)")
