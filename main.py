import argparse
import logging
import sys

from commands.context import CommandContext
from commands.executor import execute_call, run_instructions
from core.parameters.config_io import load_config
from core.parameters.global_parameters import GlobalParameters
from fortran_kernels.loader import describe_backends
from kernels.matrix import format_matrix
from kernels.primes import primes_up_to
from runtime.logging_config import setup_logging

logger = logging.getLogger("compute_kernels")


def run_matrix_demo(context: CommandContext) -> int:
    result = execute_call(context, "multiply_matrices")
    if not result.ok:
        print(f"Matrix demo failed: {result.error}", file=sys.stderr)
        return 1

    print("Matrix A:")
    print(format_matrix(context.default_a), end="")
    print("\nMatrix B:")
    print(format_matrix(context.default_b), end="")
    print("\nResult (A × B):")
    print(format_matrix(result.value), end="")
    return 0


def run_primes_demo(context: CommandContext, *, list_all: bool = False):
    """Print the prime summary; return the prime count, or None on failure."""
    limit = context.params.get("prime_limit")
    print(f"Checking primes up to {limit}...")

    counted = execute_call(context, "count_primes", limit)
    if not counted.ok:
        print(f"Prime count failed: {counted.error}", file=sys.stderr)
        return None
    print(f"Found {counted.value} prime numbers")

    first = execute_call(context, "first_primes")
    if not first.ok:
        print(f"Prime listing failed: {first.error}", file=sys.stderr)
        return None
    k = context.params.get("first_primes_count")
    print(f"\nFirst {k} primes: " + "".join(f"{p} " for p in first.value))

    if list_all:
        print("\nAll primes: " + "".join(f"{p} " for p in primes_up_to(limit)))
    return counted.value


def main():
    parser = argparse.ArgumentParser(description="Matrix and prime kernel driver")
    parser.add_argument(
        "--demo",
        choices=["matrix", "primes", "all", "none"],
        default="all",
        help="Which demo to print (default: all).",
    )
    parser.add_argument("--config", help="Optional JSON/YAML parameter file")
    parser.add_argument(
        "--instructions", help="Optional instruction file (one call per line)"
    )
    parser.add_argument(
        "--limit", type=int, default=None, help="Override prime_limit."
    )
    parser.add_argument(
        "--count", type=int, default=None, help="Override first_primes_count."
    )
    parser.add_argument(
        "--list-primes",
        action="store_true",
        help="Also print every prime up to the limit in the primes demo.",
    )
    parser.add_argument(
        "--exit-with-count",
        action="store_true",
        help="Use the prime count as the process exit code.",
    )
    parser.add_argument(
        "--backends",
        action="store_true",
        help="Print which implementation each kernel uses and exit.",
    )
    parser.add_argument("--log", default=None, help="Optional log file")
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Suppress console logging"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable verbose debug logging"
    )
    args = parser.parse_args()

    global logger
    logger = setup_logging(args.log, quiet=args.quiet, debug=args.debug)

    if args.config:
        try:
            params = load_config(args.config)
        except (OSError, ValueError) as exc:
            print(f"Could not load configuration: {exc}", file=sys.stderr)
            return 1
    else:
        params = GlobalParameters()
    if args.limit is not None:
        params.prime_limit = args.limit
    if args.count is not None:
        params.first_primes_count = args.count

    context = CommandContext(params=params)
    logger.debug("Parameters: %s", params)

    if args.backends:
        for name, backend in describe_backends().items():
            print(f"{name}: {backend}")
        return 0

    status = 0
    prime_count = None

    if args.demo in ("matrix", "all"):
        status |= run_matrix_demo(context)
        if args.demo == "all":
            print()

    if args.demo in ("primes", "all"):
        prime_count = run_primes_demo(context, list_all=args.list_primes)
        if prime_count is None:
            status = 1

    if args.instructions:
        try:
            with open(args.instructions, "r") as f:
                lines = f.readlines()
        except OSError as exc:
            print(f"Could not read instructions: {exc}", file=sys.stderr)
            return 1
        for result in run_instructions(context, lines):
            if result.ok:
                print(f"{result.name}: {result.value}")
            else:
                print(f"{result.name}: ERROR {result.error_type}: {result.error}")
                status = 1

    if args.exit_with_count and prime_count is not None:
        return prime_count
    return status


if __name__ == "__main__":
    sys.exit(main())
