import re

from commands.kernels import (
    BackendsCommand,
    CountPrimesCommand,
    FirstPrimesCommand,
    IsPrimeCommand,
    MultiplyMatricesCommand,
)

COMMAND_REGISTRY = {
    "multiply_matrices": MultiplyMatricesCommand(),
    "multiply": MultiplyMatricesCommand(),
    "mm": MultiplyMatricesCommand(),
    "is_prime": IsPrimeCommand(),
    "count_primes": CountPrimesCommand(),
    "first_primes": FirstPrimesCommand(),
    "first_n_primes": FirstPrimesCommand(),
    "backends": BackendsCommand(),
}

_SHORTHAND = re.compile(r"([pf])([0-9]+)")


def get_command(name):
    # Handle p1000 as count_primes 1000 and f10 as first_primes 10.
    match = _SHORTHAND.fullmatch(name)
    if match:
        target = "count_primes" if match.group(1) == "p" else "first_primes"
        return COMMAND_REGISTRY[target], [int(match.group(2))]

    cmd = COMMAND_REGISTRY.get(name.lower())
    return cmd, []
