"""
Oracle for zero-partition correctness.

The reference partition is a plain stable filter:
    [x for x in a if x == zero] + [x for x in a if x != zero]
- Obviously correct boundary (the number of zeros)
- Deterministic and portable
- Stable, so it also serves as the baseline for order-preservation checks

Public API (stable):
    oracle_partition(a: list[int], zero=0) -> tuple[list[int], int]
    equals_oracle(a: list[int], out: list[int], boundary: int, zero=0) -> bool

Conventions:
- The oracle never mutates its input and always returns a **new** list.
- In-place algorithms are not required to match the oracle's non-zero order,
  only its boundary, its zero prefix and the multiset of its non-zero suffix.
"""

from __future__ import annotations

from typing import Any, List, Tuple

from .multiset import Multiset

ORACLE_NAME: str = "stable_filter_partition"

__all__ = ["ORACLE_NAME", "oracle_partition", "equals_oracle"]


def oracle_partition(a: List[int], zero: Any = 0) -> Tuple[List[int], int]:
    """
    Return the ground-truth partition of `a` and its boundary.

    Parameters
    ----------
    a : list[int]
        Input sequence. The oracle does not mutate `a`.
    zero : Any
        Sentinel value; defaults to 0.

    Returns
    -------
    (list[int], int)
        A new list holding every zero first, then the non-zeros in their
        original order; and the index of the first non-zero.
    """
    zeros = [x for x in a if x == zero]
    rest = [x for x in a if x != zero]
    return zeros + rest, len(zeros)


def equals_oracle(a: List[int], out: List[int], boundary: int, zero: Any = 0) -> bool:
    """
    Check whether an algorithm's output agrees with the oracle.

    True iff `boundary` matches, `out` has the oracle's zero prefix, and the
    suffixes hold the same multiset of values.
    """
    expected, expected_boundary = oracle_partition(a, zero)
    if boundary != expected_boundary or len(out) != len(expected):
        return False
    if out[:boundary] != expected[:boundary]:
        return False
    return Multiset.from_iterable(out[boundary:]) == Multiset.from_iterable(expected[boundary:])
