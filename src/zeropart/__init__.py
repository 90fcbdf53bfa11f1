"""
zeropart: in-place zero-prefix partition with multiset-based verification.

Subpackages:
    zeropart.algorithms  - partition implementations (`partition(a, *, config=None) -> int`)
    zeropart.validate    - Multiset counter, oracle and property checks
    zeropart.datasets    - seeded input generators
    zeropart.bench       - timing harness and YAML-driven experiment runner
"""

__version__ = "0.1.0"
