"""
Timing harness for partition algorithms.

We measure exactly one call to an algorithm's `partition(a, config=...)` per
sample, using a monotonic high-resolution clock. Partitions mutate their
input, so every sample runs on a fresh copy made outside the timed block,
together with GC handling and warmup.

Public API (stable):
    time_partition_call(... ) -> dict

Returned dict schema:
    {
        "algo": str,
        "repeats": int,
        "samples_ns": list[int],            # elapsed ns for each successful sample
        "boundary": int | None,             # boundary returned by the last successful call
        "status": "ok" | "timeout" | "error",
        "error": str | None,                # populated if status == "error"
        "timed_out_on_repeat": int | None,  # 0-based repeat index if timeout occurred
    }
"""

from __future__ import annotations

import gc
import logging
import time
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

__all__ = ["time_partition_call"]


def time_partition_call(
    *,
    algo_name: str,
    algo_fn: Callable[..., int],
    a: List[int],
    config: Optional[Dict[str, Any]],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
) -> Dict[str, Any]:
    """
    Time repeated calls to `algo_fn(copy_of_a, config=config)`.

    Parameters
    ----------
    algo_name : str
        Logical name of the algorithm (for logs/records).
    algo_fn : Callable[..., int]
        Callable implementing partition(a: list[int], *, config: dict | None) -> int.
    a : list[int]
        Input array. Never passed to the algorithm directly; each call gets a copy.
    config : dict | None
        Algorithm configuration passed through unchanged.
    repeats : int
        Number of timed samples to collect.
    warmup : bool
        If True, make one untimed call before timing.
    disable_gc : bool
        If True, collect and disable Python GC during the timed loop; restore afterward.
    timeout_seconds : float
        Per-sample timeout threshold. If a single call exceeds this threshold,
        we mark status="timeout" and stop further sampling.

    Returns
    -------
    dict
        See module docstring for exact schema.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    result: Dict[str, Any] = {
        "algo": algo_name,
        "repeats": repeats,
        "samples_ns": [],  # type: List[int]
        "boundary": None,
        "status": "ok",
        "error": None,
        "timed_out_on_repeat": None,
    }

    # ---- Warmup (outside GC disable & outside timed block) ----
    if warmup and repeats > 0:
        try:
            algo_fn(list(a), config=config)
        except Exception as e:
            logger.error("%s: warmup failed on n=%d: %r", algo_name, len(a), e)
            result["status"] = "error"
            result["error"] = f"warmup failed: {e!r}"
            return result

    # ---- GC control ----
    prev_gc_enabled = gc.isenabled()
    try:
        if disable_gc:
            gc.collect()
            gc.disable()

        # ---- Timed loop ----
        threshold_ns = int(timeout_seconds * 1e9)
        for r in range(repeats):
            try:
                arg = list(a)

                t0 = time.perf_counter_ns()
                boundary = algo_fn(arg, config=config)
                t1 = time.perf_counter_ns()

                elapsed = t1 - t0
                result["samples_ns"].append(int(elapsed))
                result["boundary"] = int(boundary)

                if elapsed > threshold_ns:
                    logger.warning(
                        "%s: sample %d took %.3fs (> %.3fs timeout) on n=%d",
                        algo_name, r, elapsed / 1e9, timeout_seconds, len(a),
                    )
                    result["status"] = "timeout"
                    result["timed_out_on_repeat"] = r
                    break

            except Exception as e:
                logger.error("%s: run failed at repeat %d on n=%d: %r", algo_name, r, len(a), e)
                result["status"] = "error"
                result["error"] = f"run failed at repeat {r}: {e!r}"
                break

    finally:
        # Leave GC disabled if the caller had it disabled already.
        if disable_gc and prev_gc_enabled:
            gc.enable()

    return result
