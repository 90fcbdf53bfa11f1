"""Shared test configuration for zeropart tests."""

from __future__ import annotations

import pathlib
import sys

import pytest

# Ensure `src/` is importable when running `pytest` from the repo root without installing
_REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))


@pytest.fixture
def scenario():
    """The worked example: three zeros mixed with four non-zeros."""
    return [0, 1, 0, 2, 5, 0, 10]
