"""
Zero-prefix partition: move every zero to the front of the array, in place.

Algorithm (two pointers, single pass, O(n) time, O(1) extra space):

    [0, 0, 0, 1, 2, 5, 0, 10, ...]
              ^        ^
              i        j

- `i` is the boundary of the confirmed zero prefix, `j` the scan cursor.
- When a[j] is zero, swap a[i] and a[j] and advance `i`.
- `j` advances on every iteration.

Loop invariant (before and after every iteration, with i <= j <= n):
    (1) a[p] == zero  for p < i
    (2) a[p] != zero  for i <= p < j

If a[j] is zero the swap puts it at `i`, growing (1) by one, and moves the
former a[i] (non-zero, or a[j] itself when i == j) into slot j, so (2) still
holds over [i + 1, j + 1). Otherwise a[j] already satisfies (2) once `j` moves.
`j` strictly increases up to n, so the loop runs exactly n times; at exit
(1) covers [0, i) and (2) covers [i, n).

Public API (stable):
    partition(a: list[int], *, config: dict | None = None) -> int

Conventions:
- The input list is mutated in place; the return value is the boundary `i`.
- Relative order among non-zero elements is NOT guaranteed
  (e.g. [1, 2, 0] becomes [0, 2, 1]).
- config["zero"] selects the sentinel compared against (default 0).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

ALGO_NAME: str = "push_zero_start"
DEFAULT_ZERO: int = 0

_KNOWN_CONFIG_KEYS = {"zero"}

__all__ = ["ALGO_NAME", "DEFAULT_ZERO", "partition", "push_zero_start"]


def push_zero_start(a: List[int], zero: Any = DEFAULT_ZERO) -> int:
    """
    Partition `a` in place so that all elements equal to `zero` come first.

    Parameters
    ----------
    a : list[int]
        Sequence to rearrange. Mutated in place; must not be aliased
        by the caller for the duration of the call.
    zero : Any
        Sentinel value; defaults to 0.

    Returns
    -------
    int
        Boundary `i` with a[:i] all equal to `zero` and a[i:] all different.
    """
    i = 0
    j = 0
    n = len(a)
    while j < n:
        if a[j] == zero:
            a[i], a[j] = a[j], a[i]
            i += 1
        j += 1
    return i


def partition(a: List[int], *, config: Optional[Dict[str, Any]] = None) -> int:
    """Registry entry point used by the benchmark runner and tests."""
    zero = _parse_config(config)
    return push_zero_start(a, zero)


def _parse_config(config: Optional[Dict[str, Any]]) -> Any:
    if config is None:
        return DEFAULT_ZERO
    if not isinstance(config, dict):
        raise ValueError(f"{ALGO_NAME}: config must be a dict or None; got {type(config).__name__}")
    unknown = set(config) - _KNOWN_CONFIG_KEYS
    if unknown:
        raise ValueError(
            f"{ALGO_NAME}: unknown config keys {sorted(unknown)}. Supported: {sorted(_KNOWN_CONFIG_KEYS)}"
        )
    return config.get("zero", DEFAULT_ZERO)
