"""Pytest configuration and test categorization.

Tests keep the flat `tests/` layout and are categorized into `unit`,
`regression`, `e2e` and `benchmark` via markers so CI can run subsets.
"""

from __future__ import annotations

import os
import pathlib
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from fortran_kernels.loader import reset_kernel_cache

_KERNEL_ENV = (
    "COMPUTE_KERNELS_ENABLE_FORTRAN",
    "COMPUTE_KERNELS_DISABLE_FORTRAN_MATMUL",
    "COMPUTE_KERNELS_DISABLE_FORTRAN_PRIMES",
)


def pytest_configure(config: pytest.Config) -> None:
    for name in ("unit", "regression", "e2e", "benchmark"):
        config.addinivalue_line("markers", f"{name}: {name} tests")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Auto-apply test category markers based on filename conventions."""
    for item in items:
        path = pathlib.Path(str(item.fspath))
        name = path.name.lower()

        if "benchmark" in name:
            item.add_marker(pytest.mark.benchmark)
            continue

        if "e2e" in name or "end_to_end" in name:
            item.add_marker(pytest.mark.e2e)
            continue

        if "regression" in name:
            item.add_marker(pytest.mark.regression)
            continue

        item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def python_kernels_only(monkeypatch):
    """Run every test against the pure-Python engine unless it opts in."""
    for name in _KERNEL_ENV:
        monkeypatch.delenv(name, raising=False)
    reset_kernel_cache()
    yield
    reset_kernel_cache()
