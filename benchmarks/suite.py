#!/usr/bin/env python3
"""Run all benchmarks and track performance history.

This script executes the kernel benchmarks, records their average runtimes,
and compares them against the stored "best" results in ``results.json``.
"""

import json
import os
import sys
from datetime import datetime
from pathlib import Path

# Add local directory to path to import benchmark modules
sys.path.append(os.path.dirname(__file__))

import benchmark_matmul
import benchmark_primes

RESULTS_FILE = Path(__file__).parent / "inputs" / "results.json"
REGRESSION_PCT = 5.0

BENCHMARKS = {
    "matmul_3x3": benchmark_matmul.benchmark,
    "count_primes": benchmark_primes.benchmark,
}


def load_results(path=RESULTS_FILE):
    path = Path(path)
    if not path.exists():
        return {}
    try:
        with open(path, "r") as f:
            return json.load(f)
    except json.JSONDecodeError:
        return {}


def save_results(results, path=RESULTS_FILE):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(results, f, indent=2)


def compare(avg_time, best_record):
    """Return (change label, is_regression) for `avg_time` against the best."""
    if not best_record:
        return "N/A", False
    best_time = best_record["time"]
    pct = (avg_time - best_time) / best_time * 100
    label = f"{pct:+.1f}%"
    if pct > REGRESSION_PCT:
        return label + " (SLOW)", True
    if pct < -REGRESSION_PCT:
        return label + " (FAST)", False
    return label, False


def run_suite(benchmarks=None, results_file=RESULTS_FILE):
    """Run `benchmarks`, update the stored best times, return True on regression."""
    benchmarks = BENCHMARKS if benchmarks is None else benchmarks
    print(f"Running benchmarking suite on {sys.platform}...")
    history = load_results(results_file)
    timestamp = datetime.now().isoformat()
    any_regression = False

    print(f"{'Benchmark':<25} | {'Current':<10} | {'Best':<10} | {'Change':<10}")
    print("-" * 65)

    for name, func in benchmarks.items():
        avg_time = func()
        best_record = history.get(name)
        best_time = best_record["time"] if best_record else float("inf")
        change_str, regressed = compare(avg_time, best_record)
        any_regression = any_regression or regressed

        print(f"{name:<25} | {avg_time:.6f}s  | {best_time:.6f}s  | {change_str}")

        # Only a faster run replaces the stored best.
        if avg_time < best_time:
            history[name] = {"time": avg_time, "timestamp": timestamp}

    print("-" * 65)
    if any_regression:
        print("WARNING: Performance regression detected!")
    else:
        print("Performance is stable or improved.")

    save_results(history, results_file)
    print(f"Results saved to {results_file}")
    return any_regression


def main():
    return 1 if run_suite() else 0


if __name__ == "__main__":
    sys.exit(main())
