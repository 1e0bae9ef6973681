"""Test-suite layout checks."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

TESTS_DIR = Path(__file__).parent


def test_module_basenames_unique():
    # tests/ has no __init__.py, so pytest imports modules by basename.
    names = Counter(p.name for p in TESTS_DIR.rglob("test_*.py"))
    assert [name for name, count in names.items() if count > 1] == []
