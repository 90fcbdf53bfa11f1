"""
Tests for the oracle and the property helpers.
"""

from __future__ import annotations

import pytest

from zeropart.validate import (
    ORACLE_NAME,
    assert_no_mutation,
    equals_oracle,
    first_partition_violation_index,
    is_permutation,
    is_zero_partitioned,
    nonzero_order_preserved,
    oracle_partition,
    permutation_counter_diff,
)


# ------------------------- oracle ------------------------- #

def test_oracle_is_stable_and_does_not_mutate(scenario) -> None:
    before = list(scenario)
    out, boundary = oracle_partition(scenario)

    assert_no_mutation(before, scenario)
    assert out == [0, 0, 0, 1, 2, 5, 10]
    assert boundary == 3
    assert out is not scenario
    assert ORACLE_NAME == "stable_filter_partition"


def test_oracle_custom_zero() -> None:
    assert oracle_partition([2, 9, 2], zero=2) == ([2, 2, 9], 2)


def test_equals_oracle_accepts_reordered_suffix() -> None:
    assert equals_oracle([1, 2, 0], [0, 2, 1], 1)


@pytest.mark.parametrize(
    "out, boundary",
    [
        ([0, 2, 1], 2),     # wrong boundary
        ([0, 2, 2], 1),     # suffix multiset differs
        ([0, 2], 1),        # length differs
        ([2, 0, 1], 1),     # prefix not zero
    ],
)
def test_equals_oracle_rejects(out, boundary) -> None:
    assert not equals_oracle([1, 2, 0], out, boundary)


# ------------------------- properties ------------------------- #

@pytest.mark.parametrize(
    "xs, boundary, expected",
    [
        ([], 0, None),
        ([0, 0, 1], 2, None),
        ([0, 1, 0], 1, 2),
        ([1, 0], 0, 1),
        ([0, 1], 2, 1),
        ([0, 1], 3, 3),
        ([0, 1], -1, -1),
    ],
)
def test_first_partition_violation_index(xs, boundary, expected) -> None:
    assert first_partition_violation_index(xs, boundary) == expected
    assert is_zero_partitioned(xs, boundary) == (expected is None)


def test_is_permutation() -> None:
    assert is_permutation([0, 1, 2], [2, 0, 1])
    assert not is_permutation([0, 1], [0, 1, 1])
    assert not is_permutation([0, 1, 1], [0, 0, 1])


def test_permutation_counter_diff() -> None:
    assert permutation_counter_diff([1, 1, 2], [1, 2, 3]) == {1: 1, 3: -1}
    assert permutation_counter_diff([0, 5], [5, 0]) == {}


def test_nonzero_order_preserved() -> None:
    assert nonzero_order_preserved([3, 0, 4], [0, 3, 4])
    assert not nonzero_order_preserved([3, 0, 4], [0, 4, 3])


def test_assert_no_mutation_reports_index() -> None:
    assert_no_mutation([1, 2], [1, 2])
    with pytest.raises(AssertionError, match="index 1"):
        assert_no_mutation([1, 2], [1, 3])
    with pytest.raises(AssertionError, match="length"):
        assert_no_mutation([1, 2], [1])
