"""Prime enumeration by 6k +/- 1 trial division.

``is_prime`` and ``count_primes`` dispatch to the compiled Fortran kernels
when they are loaded and the argument fits their 64-bit integer, and to the
pure-Python loop otherwise. Nothing is cached between calls.
"""

from __future__ import annotations

import logging
import operator
from typing import Iterator, Literal

import numpy as np

from core.exceptions import InvalidRangeError
from fortran_kernels.loader import get_count_primes_kernel, get_is_prime_kernel

logger = logging.getLogger("compute_kernels")

NegativePolicy = Literal["empty", "reject"]

_INT64_MIN = int(np.iinfo(np.int64).min)
_INT64_MAX = int(np.iinfo(np.int64).max)


def _fits_int64(value: int) -> bool:
    return _INT64_MIN <= value <= _INT64_MAX


def _as_int(value) -> int:
    # operator.index would accept True and False as 1 and 0.
    if isinstance(value, (bool, np.bool_)):
        raise TypeError(f"Expected an integer, got {type(value).__name__}")
    return operator.index(value)


def _check_bound(bound: int, negative_policy: NegativePolicy) -> None:
    if negative_policy not in ("empty", "reject"):
        raise ValueError(f"Unknown negative range policy: {negative_policy!r}")
    if bound < 0 and negative_policy == "reject":
        raise InvalidRangeError(bound)


def _is_prime_python(n: int) -> bool:
    if n <= 1:
        return False
    if n <= 3:
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False

    i = 5
    # Same stopping rule as i * i > n, written so it cannot overflow in a
    # fixed-width port.
    while i <= n // i:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True


def is_prime(n: int, *, use_compiled: bool = True) -> bool:
    """Return True iff ``n`` is prime.

    Total over all integers: values <= 1 are never prime. Non-integral
    arguments raise ``TypeError``.
    """
    n = _as_int(n)
    if use_compiled and _fits_int64(n):
        kernel = get_is_prime_kernel()
        if kernel is not None:
            return bool(kernel.func(n))
    return _is_prime_python(n)


def primes_up_to(limit: int) -> Iterator[int]:
    """Yield the primes in ``[2, limit]`` in ascending order."""
    limit = _as_int(limit)
    for candidate in range(2, limit + 1):
        if _is_prime_python(candidate):
            yield candidate


def count_primes(
    limit: int,
    *,
    negative_policy: NegativePolicy = "empty",
    use_compiled: bool = True,
) -> int:
    """Count the primes in ``[2, limit]``.

    Returns 0 for ``limit < 2``. With ``negative_policy="reject"`` a negative
    ``limit`` raises ``InvalidRangeError`` instead.
    """
    limit = _as_int(limit)
    _check_bound(limit, negative_policy)
    if limit < 2:
        return 0

    if use_compiled and _fits_int64(limit):
        kernel = get_count_primes_kernel()
        if kernel is not None:
            logger.debug("count_primes(%d): compiled kernel %s", limit, kernel.module)
            return int(kernel.func(limit))

    logger.debug("count_primes(%d): python loop", limit)
    count = 0
    for candidate in range(2, limit + 1):
        if _is_prime_python(candidate):
            count += 1
    return count


class PrimeSequence:
    """The first ``count`` primes, recomputed on every iteration.

    Iterating scans upward from 2 and stops after ``count`` primes, so the
    sequence is finite and can be iterated any number of times.
    """

    __hash__ = None

    def __init__(self, count: int) -> None:
        self.count = count

    def __iter__(self) -> Iterator[int]:
        found = 0
        candidate = 2
        while found < self.count:
            if _is_prime_python(candidate):
                yield candidate
                found += 1
            candidate += 1

    def __len__(self) -> int:
        return max(self.count, 0)

    def __eq__(self, other) -> bool:
        if isinstance(other, PrimeSequence):
            return len(self) == len(other)
        if isinstance(other, (list, tuple)):
            return list(self) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"PrimeSequence(count={self.count})"


def first_n_primes(n: int, *, negative_policy: NegativePolicy = "empty") -> PrimeSequence:
    """Return the lazy sequence of the first ``n`` primes.

    ``n <= 0`` gives an empty sequence; with ``negative_policy="reject"`` a
    negative ``n`` raises ``InvalidRangeError``.
    """
    n = _as_int(n)
    _check_bound(n, negative_policy)
    return PrimeSequence(n)


__all__ = [
    "PrimeSequence",
    "count_primes",
    "first_n_primes",
    "is_prime",
    "primes_up_to",
]
