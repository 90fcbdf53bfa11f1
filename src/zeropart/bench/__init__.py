"""
Benchmark harness public API.

    from zeropart.bench import time_partition_call
"""

from .measure import time_partition_call

__all__ = ["time_partition_call"]
