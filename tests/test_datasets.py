"""
Tests for the dataset generators.
"""

from __future__ import annotations

import numpy as np
import pytest

from zeropart.datasets import SUPPORTED_DISTS, make_dataset


def _rng(seed: int = 0) -> np.random.Generator:
    return np.random.default_rng(seed)


SPECS = [
    {"dist": "random", "params": {"range": [-3, 3]}},
    {"dist": "sparse", "params": {"zero_frac": 0.25}},
    {"dist": "all_zeros"},
    {"dist": "no_zeros", "params": {"range": [-5, 5]}},
    {"dist": "zeros_last", "params": {"zero_frac": 0.5}},
]


def test_every_supported_dist_has_a_spec() -> None:
    assert {s["dist"] for s in SPECS} == SUPPORTED_DISTS


@pytest.mark.parametrize("spec", SPECS)
@pytest.mark.parametrize("n", [0, 1, 17, 500])
def test_length_and_type(spec, n: int) -> None:
    out = make_dataset(n, spec, _rng())

    assert isinstance(out, list)
    assert len(out) == n
    assert all(isinstance(x, int) for x in out)


@pytest.mark.parametrize("spec", SPECS)
def test_deterministic_for_seed(spec) -> None:
    assert make_dataset(200, spec, _rng(42)) == make_dataset(200, spec, _rng(42))


def test_random_respects_inclusive_range() -> None:
    out = make_dataset(2000, {"dist": "random", "params": {"range": [0, 2]}}, _rng())
    assert set(out) == {0, 1, 2}


def test_sparse_extremes() -> None:
    none = make_dataset(300, {"dist": "sparse", "params": {"zero_frac": 0.0}}, _rng())
    every = make_dataset(300, {"dist": "sparse", "params": {"zero_frac": 1.0}}, _rng())

    assert 0 not in none
    assert every == [0] * 300


def test_sparse_default_range() -> None:
    out = make_dataset(1000, {"dist": "sparse"}, _rng())
    assert all(x == 0 or 1 <= x <= 255 for x in out)
    assert 0 in out


def test_no_zeros_never_emits_zero() -> None:
    out = make_dataset(2000, {"dist": "no_zeros", "params": {"range": [-1, 1]}}, _rng())
    assert set(out) == {-1, 1}


def test_all_zeros() -> None:
    assert make_dataset(5, {"dist": "all_zeros"}, _rng()) == [0] * 5


def test_zeros_last_layout() -> None:
    out = make_dataset(8, {"dist": "zeros_last", "params": {"zero_frac": 0.25}}, _rng())
    assert out == [1, 2, 3, 4, 5, 6, 0, 0]


@pytest.mark.parametrize("n, zero_frac, zeros", [(100, 0.07, 7), (100, 0.29, 29), (10, 0.3, 3), (3, 0.01, 1)])
def test_zeros_last_count_exact_for_decimal_fractions(n: int, zero_frac: float, zeros: int) -> None:
    out = make_dataset(n, {"dist": "zeros_last", "params": {"zero_frac": zero_frac}}, _rng())
    assert out.count(0) == zeros
    assert out[n - zeros:] == [0] * zeros


@pytest.mark.parametrize(
    "n, spec",
    [
        (-1, {"dist": "all_zeros"}),
        (1.5, {"dist": "all_zeros"}),
        (3, "random"),
        (3, {"dist": "gaussian"}),
        (3, {"dist": "random"}),
        (3, {"dist": "random", "params": {"range": [5, 1]}}),
        (3, {"dist": "random", "params": {"range": [0, 1, 2]}}),
        (3, {"dist": "random", "params": {"range": [0.5, 1]}}),
        (3, {"dist": "sparse", "params": {"zero_frac": 1.5}}),
        (3, {"dist": "sparse", "params": {"zero_frac": "lots"}}),
        (3, {"dist": "no_zeros", "params": {"range": [0, 0]}}),
        (3, {"dist": "zeros_last", "params": [0.5]}),
    ],
)
def test_invalid_inputs_raise(n, spec) -> None:
    with pytest.raises(ValueError):
        make_dataset(n, spec, _rng())
