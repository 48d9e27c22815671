"""Helpers for loading optional compiled kernels.

This module centralizes the logic for importing the f2py-built extension
modules and picking the callable they expose. Kernel modules should use these
helpers instead of re-implementing import heuristics.
"""

from __future__ import annotations

import importlib
import logging
import os
from dataclasses import dataclass
from typing import Callable

logger = logging.getLogger("compute_kernels")

_TRUTHY = {"1", "true", "TRUE"}


@dataclass(frozen=True)
class KernelSpec:
    """Resolved kernel callable with metadata."""

    name: str
    func: Callable
    module: str


# None = not resolved yet, False = resolved as unavailable.
_MATMUL_KERNEL: KernelSpec | None | bool = None
_IS_PRIME_KERNEL: KernelSpec | None | bool = None
_COUNT_PRIMES_KERNEL: KernelSpec | None | bool = None


def fortran_opt_in_enabled() -> bool:
    """Return True if compiled kernels are allowed to load.

    Compiled kernels are opt-in so default installs stay pure-Python on
    systems without a working compiler toolchain.
    """
    return os.environ.get("COMPUTE_KERNELS_ENABLE_FORTRAN") in _TRUTHY


def _disabled(*env_names: str) -> bool:
    return any(os.environ.get(name) in _TRUTHY for name in env_names)


def _import_candidates(module_name: str) -> list:
    candidates = []
    for dotted in (f"fortran_kernels.{module_name}", module_name):
        try:
            candidates.append(importlib.import_module(dotted))
        except ImportError:
            continue
    return candidates


def _resolve(module_name: str, submodule: str, func_name: str) -> KernelSpec | None:
    """Find `func_name` at the top level of the module or inside `submodule`.

    Depending on the f2py version the routine is exposed either directly or
    under the Fortran module object (e.g. `prime_checker.prime_checker_mod`).
    """
    for mod in _import_candidates(module_name):
        fn = getattr(mod, func_name, None)
        if not callable(fn):
            sub = getattr(mod, submodule, None)
            fn = getattr(sub, func_name, None) if sub is not None else None
        if callable(fn):
            logger.debug("Loaded compiled kernel %s from %s", func_name, mod.__name__)
            return KernelSpec(name=func_name, func=fn, module=mod.__name__)
    return None


def get_matmul_kernel() -> KernelSpec | None:
    """Return the compiled `multiply_matrices` kernel, if available.

    Disabled when `COMPUTE_KERNELS_DISABLE_FORTRAN_MATMUL=1`.
    """
    global _MATMUL_KERNEL
    if _MATMUL_KERNEL is False:
        return None
    if isinstance(_MATMUL_KERNEL, KernelSpec):
        return _MATMUL_KERNEL

    if not fortran_opt_in_enabled() or _disabled(
        "COMPUTE_KERNELS_DISABLE_FORTRAN_MATMUL"
    ):
        _MATMUL_KERNEL = False
        return None

    spec = _resolve("matrix_multiply", "matrix_multiply_mod", "multiply_matrices")
    _MATMUL_KERNEL = spec if spec is not None else False
    return spec


def get_is_prime_kernel() -> KernelSpec | None:
    """Return the compiled `is_prime` kernel, if available.

    Disabled when `COMPUTE_KERNELS_DISABLE_FORTRAN_PRIMES=1`.
    """
    global _IS_PRIME_KERNEL
    if _IS_PRIME_KERNEL is False:
        return None
    if isinstance(_IS_PRIME_KERNEL, KernelSpec):
        return _IS_PRIME_KERNEL

    if not fortran_opt_in_enabled() or _disabled(
        "COMPUTE_KERNELS_DISABLE_FORTRAN_PRIMES"
    ):
        _IS_PRIME_KERNEL = False
        return None

    spec = _resolve("prime_checker", "prime_checker_mod", "is_prime")
    _IS_PRIME_KERNEL = spec if spec is not None else False
    return spec


def get_count_primes_kernel() -> KernelSpec | None:
    """Return the compiled `count_primes` kernel, if available.

    Disabled when `COMPUTE_KERNELS_DISABLE_FORTRAN_PRIMES=1`.
    """
    global _COUNT_PRIMES_KERNEL
    if _COUNT_PRIMES_KERNEL is False:
        return None
    if isinstance(_COUNT_PRIMES_KERNEL, KernelSpec):
        return _COUNT_PRIMES_KERNEL

    if not fortran_opt_in_enabled() or _disabled(
        "COMPUTE_KERNELS_DISABLE_FORTRAN_PRIMES"
    ):
        _COUNT_PRIMES_KERNEL = False
        return None

    spec = _resolve("prime_checker", "prime_checker_mod", "count_primes")
    _COUNT_PRIMES_KERNEL = spec if spec is not None else False
    return spec


def reset_kernel_cache() -> None:
    """Forget resolved kernels so the next lookup re-reads the environment."""
    global _MATMUL_KERNEL, _IS_PRIME_KERNEL, _COUNT_PRIMES_KERNEL
    _MATMUL_KERNEL = None
    _IS_PRIME_KERNEL = None
    _COUNT_PRIMES_KERNEL = None


def describe_backends() -> dict[str, str]:
    """Return which implementation each kernel currently dispatches to."""
    return {
        "multiply_matrices": "fortran" if get_matmul_kernel() else "numpy",
        "is_prime": "fortran" if get_is_prime_kernel() else "python",
        "count_primes": "fortran" if get_count_primes_kernel() else "python",
    }
