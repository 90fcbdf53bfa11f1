"""
Validation utilities public API.

Re-exports:
    - Multiset counting:
        Multiset
        build_multiset
        count
        equals

    - Oracle:
        ORACLE_NAME
        oracle_partition
        equals_oracle

    - Property checks:
        is_zero_partitioned
        first_partition_violation_index
        is_permutation
        permutation_counter_diff
        nonzero_order_preserved
        assert_no_mutation
"""

from .multiset import Multiset, count, equals
from .multiset import build as build_multiset
from .oracle import ORACLE_NAME, equals_oracle, oracle_partition
from .properties import (
    assert_no_mutation,
    first_partition_violation_index,
    is_permutation,
    is_zero_partitioned,
    nonzero_order_preserved,
    permutation_counter_diff,
)

__all__ = [
    "Multiset",
    "build_multiset",
    "count",
    "equals",
    "ORACLE_NAME",
    "oracle_partition",
    "equals_oracle",
    "is_zero_partitioned",
    "first_partition_violation_index",
    "is_permutation",
    "permutation_counter_diff",
    "nonzero_order_preserved",
    "assert_no_mutation",
]
