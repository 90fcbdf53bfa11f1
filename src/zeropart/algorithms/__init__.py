"""
Partition algorithms.

Each module in this package exposes `partition(a, *, config=None) -> int`
and is resolved by module name from experiment configs, e.g.:
    algorithms:
      - name: push_zero_start
"""
