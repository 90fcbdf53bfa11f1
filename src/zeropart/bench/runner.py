"""
Experiment runner: orchestrates a full partition benchmarking sweep from a YAML config.

Usage (from repo root):
    python -m zeropart.bench.runner experiments/configs/01_sparse_scaling.yaml
    zeropart-bench experiments/configs/01_sparse_scaling.yaml --log-level DEBUG

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one JSON line per successful timing sample
    - summary.csv             # median + IQR per (algo, n)
    - (console) rich/tqdm summaries

Design notes:
- For each size n, we generate ONE dataset and give a copy of it to every algorithm.
- Harness handles warmup/GC and copies; we keep timing clean.
- With `validate: true` (default), each (algo, n) that finished with status "ok" is
  checked against the oracle and the partition/permutation properties outside
  the timed loop; timed-out or failed runs get no extra call.
- On timeout/error for an algorithm at size n, we skip larger sizes for that algo.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import importlib
import json
import logging
import os
import platform
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from tqdm import tqdm

from zeropart.bench.measure import time_partition_call
from zeropart.datasets import make_dataset
from zeropart.validate import (
    equals_oracle,
    first_partition_violation_index,
    is_permutation,
    permutation_counter_diff,
)

logger = logging.getLogger(__name__)
_console = Console()

REQUIRED_KEYS = [
    "experiment_name",
    "output_dir",
    "seed",
    "repeats",
    "warmup",
    "disable_gc",
    "timeout_seconds",
    "dataset",
    "sizes",
    "algorithms",
]
_SUMMARY_COLUMNS = ["algo", "n", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns"]


# ------------------------- data structures ------------------------- #

@dataclass(frozen=True)
class AlgoSpec:
    name: str
    partition_fn: Any
    config: Dict[str, Any]


# ------------------------- helpers: IO & meta ------------------------- #

def _load_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    if not isinstance(cfg, dict):
        raise ValueError(f"Config {path} must contain a YAML mapping at top level")
    return cfg


def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _timestamp() -> str:
    return _dt.datetime.now().strftime("%Y%m%d_%H%M%S")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    run_dir = base_dir / f"{_timestamp()}_{experiment_name}"
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL)
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip()


def _gather_meta() -> Dict[str, Any]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }


def _resolve_algorithms(cfg_algos: List[Dict[str, Any]]) -> List[AlgoSpec]:
    specs: List[AlgoSpec] = []
    seen = set()
    for entry in cfg_algos:
        name = entry.get("name", None)
        if not name or not isinstance(name, str):
            raise ValueError("Each algorithm must have a string 'name' field")
        if name in seen:
            raise ValueError(f"Duplicate algorithm name in config: {name}")
        seen.add(name)

        try:
            mod = importlib.import_module(f"zeropart.algorithms.{name}")
        except ImportError as e:
            raise ImportError(f"Could not import algorithm module 'zeropart.algorithms.{name}': {e!r}") from e

        if not callable(getattr(mod, "partition", None)):
            raise AttributeError(f"Algorithm module '{name}' must define a callable `partition(a, *, config=None)`")

        config = entry.get("config", {})
        if config is None:
            config = {}
        elif not isinstance(config, dict):
            raise ValueError(f"Algorithm '{name}': 'config' must be a dict if provided")

        specs.append(AlgoSpec(name=name, partition_fn=getattr(mod, "partition"), config=config))
    return specs


def _validate_output(a_spec: AlgoSpec, base_a: List[int]) -> bool:
    """Run the algorithm once on a copy and check it against the oracle and properties."""
    zero = a_spec.config.get("zero", 0)
    out = list(base_a)
    boundary = a_spec.partition_fn(out, config=a_spec.config)

    p = first_partition_violation_index(out, boundary, zero)
    if p is not None:
        logger.error("%s: not partitioned at index %d (boundary=%d, n=%d)", a_spec.name, p, boundary, len(out))
        return False
    if not is_permutation(base_a, out):
        logger.error(
            "%s: output is not a permutation of its input; diff=%s",
            a_spec.name, permutation_counter_diff(base_a, out),
        )
        return False
    if not equals_oracle(base_a, out, boundary, zero):
        logger.error("%s: output disagrees with the oracle (boundary=%d, n=%d)", a_spec.name, boundary, len(out))
        return False
    return True


def _aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    if not jsonl_path.exists():
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True)
    # Status lines (timeout/error) have no time_ns
    if "time_ns" not in df.columns:
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)
    df = df[df["time_ns"].notna()]
    if df.empty:
        return pd.DataFrame(columns=_SUMMARY_COLUMNS)

    out = (
        df.groupby(["algo", "n"], as_index=False)
        .agg(
            samples_ok=("time_ns", "count"),
            median_ns=("time_ns", "median"),
            q1_ns=("time_ns", lambda s: s.quantile(0.25)),
            q3_ns=("time_ns", lambda s: s.quantile(0.75)),
            min_ns=("time_ns", "min"),
            max_ns=("time_ns", "max"),
        )
    )
    out["iqr_ns"] = out["q3_ns"] - out["q1_ns"]
    out = out.drop(columns=["q1_ns", "q3_ns"])
    out[["median_ns", "iqr_ns", "min_ns", "max_ns"]] = out[["median_ns", "iqr_ns", "min_ns", "max_ns"]].astype("int64")
    return out[_SUMMARY_COLUMNS].sort_values(["algo", "n"], ignore_index=True)


def _print_rich_summary(summary: pd.DataFrame, sizes: List[int]) -> None:
    # Rich table with first/middle/last n (if present)
    table = Table(title="Benchmark Summary (median ± IQR in ms)")
    table.add_column("Algorithm", style="bold")
    picks: List[Tuple[str, Optional[int]]] = []
    if sizes:
        first = sizes[0]
        mid = sizes[len(sizes)//2]
        last = sizes[-1]
        picks = [("n=" + str(first), first), ("n=" + str(mid), mid), ("n=" + str(last), last)]
        for hdr, _ in picks:
            table.add_column(hdr, justify="right")

    def _format_cell(median_ns: Optional[int], iqr_ns: Optional[int]) -> str:
        if median_ns is None:
            return "—"
        median_ms = median_ns / 1e6
        if iqr_ns is None:
            return f"{median_ms:.3f}"
        return f"{median_ms:.3f} ± {iqr_ns / 1e6:.3f}"

    for algo in summary["algo"].unique():
        row = [f"[bold]{algo}[/]"]
        for _, npick in picks:
            s = summary[(summary["algo"] == algo) & (summary["n"] == npick)]
            if s.empty:
                row.append("—")
            else:
                row.append(_format_cell(int(s["median_ns"].values[0]), int(s["iqr_ns"].values[0])))
        table.add_row(*row)
    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #

def run_experiment(config_path: Path) -> Path:
    cfg = _load_yaml(config_path)

    missing = [k for k in REQUIRED_KEYS if k not in cfg]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    experiment_name: str = str(cfg["experiment_name"])
    output_dir = Path(cfg["output_dir"])
    sizes: List[int] = list(cfg["sizes"])
    repeats: int = int(cfg["repeats"])
    warmup: bool = bool(cfg["warmup"])
    disable_gc: bool = bool(cfg["disable_gc"])
    timeout_seconds: float = float(cfg["timeout_seconds"])
    dataset_spec: Dict[str, Any] = dict(cfg["dataset"])
    algos_cfg: List[Dict[str, Any]] = list(cfg["algorithms"])
    validate: bool = bool(cfg.get("validate", True))

    if not sizes:
        raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")
    if not algos_cfg:
        raise ValueError("Config 'algorithms' must list at least one algorithm")

    # Resolve before creating the run directory so a bad name leaves nothing behind
    algos: List[AlgoSpec] = _resolve_algorithms(algos_cfg)

    run_dir = _ensure_run_dir(output_dir, experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    _write_yaml(cfg, cfg_resolved_path)

    meta = _gather_meta()
    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(meta, f, indent=2)

    rng = np.random.default_rng(int(cfg["seed"]))

    # Per-algorithm skip flags (set on timeout/error)
    per_algo_skip = {a.name: False for a in algos}

    logger.info("Run directory: %s", run_dir)
    logger.info("Experiment: %s; algorithms: %s", experiment_name, ", ".join(a.name for a in algos))

    for n in tqdm(sizes, desc="Sizes", unit="n"):
        base_a = make_dataset(int(n), dataset_spec, rng)

        for a_spec in algos:
            if per_algo_skip[a_spec.name]:
                logger.debug("%s: skipped at n=%d after earlier timeout/error", a_spec.name, int(n))
                continue

            res = time_partition_call(
                algo_name=a_spec.name,
                algo_fn=a_spec.partition_fn,
                a=base_a,
                config=a_spec.config,
                repeats=repeats,
                warmup=warmup,
                disable_gc=disable_gc,
                timeout_seconds=timeout_seconds,
            )

            valid: Optional[bool] = None
            if validate and res["status"] == "ok":
                valid = _validate_output(a_spec, base_a)

            for trial_idx, t_ns in enumerate(res["samples_ns"]):
                _append_jsonl(
                    {
                        "algo": a_spec.name,
                        "n": int(n),
                        "dataset": dataset_spec,
                        "trial": int(trial_idx),
                        "time_ns": int(t_ns),
                        "boundary": res["boundary"],
                        "valid": valid,
                        "config": a_spec.config,
                    },
                    results_path,
                )

            status = res.get("status", "ok")
            if status == "timeout":
                per_algo_skip[a_spec.name] = True
                _append_jsonl(
                    {
                        "algo": a_spec.name,
                        "n": int(n),
                        "status": "timeout",
                        "timed_out_on_repeat": res.get("timed_out_on_repeat"),
                        "config": a_spec.config,
                    },
                    results_path,
                )
            elif status == "error":
                per_algo_skip[a_spec.name] = True
                _append_jsonl(
                    {
                        "algo": a_spec.name,
                        "n": int(n),
                        "status": "error",
                        "error": res.get("error"),
                        "config": a_spec.config,
                    },
                    results_path,
                )

    summary_df = _aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)

    _print_rich_summary(summary_df, sizes)

    logger.info("Done. Wrote %s, %s, %s, %s", results_path, summary_path, meta_path, cfg_resolved_path)
    return run_dir


# ------------------------- CLI ------------------------- #

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run a zero-partition benchmark experiment from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    p.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    return p.parse_args(argv)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_console, rich_tracebacks=True)],
    )


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    _setup_logging(args.log_level)
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()
