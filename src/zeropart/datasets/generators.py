"""
Dataset generators for zero-partition tests and benchmarks.

Currently implemented:
- dist == "random":
    Integer arrays drawn uniformly from an inclusive range (zeros appear
    only if the range contains 0).

- dist == "sparse":
    Each element is zero with probability zero_frac; non-zeros are drawn
    uniformly from an inclusive range with 0 excluded.

- dist == "all_zeros":
    Deterministic [0, 0, ..., 0].

- dist == "no_zeros":
    Non-zero integers drawn uniformly from an inclusive range, 0 excluded.

- dist == "zeros_last":
    Deterministic [1, 2, ..., n-k, 0, ..., 0] with k = ceil(zero_frac * n).
    Every zero is found after the whole non-zero run, so each one costs a swap.

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]

Conventions:
- All ranges in params["range"] are **inclusive** on both ends.
- For "sparse" and "no_zeros":
    * Optional "range" (defaults to [1, 255]); it must contain at least one
      non-zero value. Draws that land on 0 are redrawn.
- For "all_zeros" and "zeros_last":
    * Ignore the RNG.
- Returns a Python `list[int]` (algorithms stay NumPy-agnostic).
- The caller supplies the RNG (for reproducibility across runs where applicable).
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np

SUPPORTED_DISTS = {
    "random",
    "sparse",
    "all_zeros",
    "no_zeros",
    "zeros_last",
}
_DEFAULT_NONZERO_RANGE = (1, 255)
__all__ = ["SUPPORTED_DISTS", "make_dataset"]


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate an integer dataset according to `spec`, using the provided RNG.

    Parameters
    ----------
    n : int
        Number of elements to generate. Must be >= 0.
    spec : dict
        Distribution specification.

        Random:
            {
                "dist": "random",
                "params": { "range": [min_int, max_int] }  # inclusive
            }

        Sparse:
            {
                "dist": "sparse",
                "params": {
                    "zero_frac": 0.5,                      # in [0.0, 1.0]
                    "range": [min_int, max_int]            # optional; inclusive; default [1, 255]
                }
            }

        All-zeros:
            { "dist": "all_zeros" }

        No-zeros:
            {
                "dist": "no_zeros",
                "params": { "range": [min_int, max_int] }  # optional; default [1, 255]
            }

        Zeros-last:
            {
                "dist": "zeros_last",
                "params": { "zero_frac": 0.5 }             # in [0.0, 1.0]
            }

    rng : numpy.random.Generator
        Random number generator owned by the caller (seeded upstream).

    Returns
    -------
    list[int]
        A list of length `n` containing integers consistent with `spec`.

    Raises
    ------
    ValueError
        If inputs are invalid or if the distribution is unsupported.
    """
    _validate_n(n)

    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist", None)
    if dist not in SUPPORTED_DISTS:
        raise ValueError(
            f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}"
        )

    params = spec.get("params", None) or {}
    if not isinstance(params, dict):
        raise ValueError(f"{dist}.params must be a dict")

    if dist == "random":
        lo, hi = _parse_inclusive_range(params)
        if n == 0:
            return []
        # Generator.integers is half-open [low, high); +1 makes hi inclusive.
        arr = rng.integers(lo, hi + 1, size=n, dtype=np.int64)  # type: ignore[arg-type]
        return arr.tolist()

    if dist == "sparse":
        zero_frac = _parse_zero_frac(dist, params)
        lo, hi = _parse_nonzero_range(dist, params)
        if n == 0:
            return []
        mask = rng.random(size=n) < zero_frac
        vals = _draw_nonzero(rng, lo, hi, n)
        vals[mask] = 0
        return vals.tolist()

    if dist == "all_zeros":
        return [0] * n

    if dist == "no_zeros":
        lo, hi = _parse_nonzero_range(dist, params)
        if n == 0:
            return []
        return _draw_nonzero(rng, lo, hi, n).tolist()

    if dist == "zeros_last":
        zero_frac = _parse_zero_frac(dist, params)
        if n == 0:
            return []
        # ceil so any nonzero frac yields at least one zero
        k = int(np.ceil(round(zero_frac * n, 9)))
        return list(range(1, n - k + 1)) + [0] * k

    raise ValueError(f"Unhandled dataset dist: {dist!r}")


# ------------------------- helpers ------------------------- #


def _validate_n(n: int) -> None:
    if not isinstance(n, int) or isinstance(n, bool):
        raise ValueError("n must be an int")
    if n < 0:
        raise ValueError("n must be nonnegative")


def _draw_nonzero(rng: np.random.Generator, lo: int, hi: int, n: int) -> np.ndarray:
    """Draw `n` values uniformly from [lo, hi] \\ {0}."""
    arr = rng.integers(lo, hi + 1, size=n, dtype=np.int64)  # type: ignore[arg-type]
    zeros = arr == 0
    while zeros.any():
        arr[zeros] = rng.integers(lo, hi + 1, size=int(zeros.sum()), dtype=np.int64)  # type: ignore[arg-type]
        zeros = arr == 0
    return arr


def _parse_range_pair(dist: str, raw: Any) -> Tuple[int, int]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise ValueError(f"{dist}.params.range must be a 2-element list/tuple [min, max]")
    lo_raw, hi_raw = raw
    if not _is_int_like(lo_raw) or not _is_int_like(hi_raw):
        raise ValueError(f"{dist}.params.range values must be integers")
    lo, hi = int(lo_raw), int(hi_raw)
    if lo > hi:
        raise ValueError(f"{dist}.params.range invalid: min > max ({lo} > {hi})")
    return lo, hi


def _parse_inclusive_range(params: Dict[str, Any]) -> Tuple[int, int]:
    """
    Validate and parse the inclusive integer range from params (REQUIRED).

    Expected:
        params["range"] == [min_int, max_int]  (both inclusive)
    """
    if "range" not in params:
        raise ValueError(
            "random.params.range must be provided as [min, max] (inclusive)"
        )
    return _parse_range_pair("random", params["range"])


def _parse_nonzero_range(dist: str, params: Dict[str, Any]) -> Tuple[int, int]:
    """
    Parse an optional inclusive range for non-zero draws.
    Defaults to [1, 255]; [0, 0] is rejected since it holds no non-zero value.
    """
    if "range" not in params:
        return _DEFAULT_NONZERO_RANGE
    lo, hi = _parse_range_pair(dist, params["range"])
    if lo == 0 and hi == 0:
        raise ValueError(f"{dist}.params.range must contain a non-zero value; got [0, 0]")
    return lo, hi


def _parse_zero_frac(dist: str, params: Dict[str, Any]) -> float:
    """
    Parse and validate zero_frac in [0.0, 1.0].
    Default to 0.5 if not provided.
    """
    val = params.get("zero_frac", 0.5)
    try:
        x = float(val)
    except (TypeError, ValueError) as e:
        raise ValueError(
            f"{dist}.params.zero_frac must be a float in [0.0, 1.0]; got {val!r}"
        ) from e
    if not (0.0 <= x <= 1.0):
        raise ValueError(
            f"{dist}.params.zero_frac must be in [0.0, 1.0]; got {x}"
        )
    return x


def _is_int_like(x: Any) -> bool:
    # Accept Python ints and NumPy integer types
    return isinstance(x, (int, np.integer)) and not isinstance(x, bool)
