"""Benchmark prime counting over increasing limits."""

from __future__ import annotations

import os
import sys
import time

# Ensure the project root is in sys.path when running via benchmarks/suite.py.
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from kernels.primes import count_primes

# Limits and known counts of primes <= limit.
LIMITS = {100: 25, 1000: 168, 10000: 1229, 50000: 5133}


def benchmark(limits=None) -> float:
    """Return the average seconds per `count_primes` call over `limits`."""
    limits = LIMITS if limits is None else limits

    start_time = time.perf_counter()
    for limit, expected in limits.items():
        found = count_primes(limit)
        if found != expected:
            raise AssertionError(
                f"count_primes({limit}) returned {found}, expected {expected}"
            )
    end_time = time.perf_counter()

    return (end_time - start_time) / max(len(limits), 1)


if __name__ == "__main__":
    t = benchmark()
    print(f"Average count_primes time: {t:.4f}s")
