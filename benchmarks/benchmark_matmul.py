"""Benchmark the dispatching 3x3 matrix product."""

from __future__ import annotations

import os
import sys
import time

import numpy as np

# Ensure the project root is in sys.path when running via benchmarks/suite.py.
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from kernels.matrix import multiply

SIZE = 3
REPEATS = 20000


def benchmark(size: int = SIZE, repeats: int = REPEATS) -> float:
    """Return the average seconds per `multiply` call on `size x size` inputs."""
    rng = np.random.default_rng(2024)
    a = rng.integers(-100, 100, size=(size, size), dtype=np.int64)
    b = rng.integers(-100, 100, size=(size, size), dtype=np.int64)

    start_time = time.perf_counter()
    for _ in range(repeats):
        multiply(a, b)
    end_time = time.perf_counter()

    return (end_time - start_time) / max(repeats, 1)


if __name__ == "__main__":
    t = benchmark()
    print(f"Average multiply time ({SIZE}x{SIZE}): {t * 1e6:.2f}us")
