import numpy as np
import pytest

from fortran_kernels.loader import (
    get_count_primes_kernel,
    get_is_prime_kernel,
    get_matmul_kernel,
    reset_kernel_cache,
)
from kernels.matrix import multiply, multiply_reference, to_nested_list
from kernels.primes import count_primes, is_prime


@pytest.fixture
def fortran_enabled(monkeypatch):
    monkeypatch.setenv("COMPUTE_KERNELS_ENABLE_FORTRAN", "1")
    reset_kernel_cache()
    yield
    reset_kernel_cache()


@pytest.mark.parametrize("n", [1, 3, 8])
def test_compiled_matmul_matches_reference(fortran_enabled, n):
    if get_matmul_kernel() is None:
        pytest.skip("matrix_multiply f2py module not available")

    rng = np.random.default_rng(123 + n)
    a = rng.integers(-10_000, 10_000, size=(n, n), dtype=np.int64)
    b = rng.integers(-10_000, 10_000, size=(n, n), dtype=np.int64)

    assert to_nested_list(multiply(a, b)) == multiply_reference(a, b)


def test_compiled_matmul_literal_case(fortran_enabled):
    if get_matmul_kernel() is None:
        pytest.skip("matrix_multiply f2py module not available")

    a = [[1, 2, 3], [4, 5, 6], [7, 8, 9]]
    b = [[9, 8, 7], [6, 5, 4], [3, 2, 1]]
    assert to_nested_list(multiply(a, b)) == [
        [30, 24, 18],
        [84, 69, 54],
        [138, 114, 90],
    ]


def test_compiled_is_prime_matches_python(fortran_enabled):
    if get_is_prime_kernel() is None:
        pytest.skip("prime_checker f2py module not available")

    for n in range(-5, 3000):
        assert is_prime(n) == is_prime(n, use_compiled=False), n


def test_compiled_count_primes_matches_python(fortran_enabled):
    if get_count_primes_kernel() is None:
        pytest.skip("prime_checker f2py module not available")

    for limit in (-1, 0, 1, 2, 100, 1000, 10_000):
        assert count_primes(limit) == count_primes(limit, use_compiled=False)
    assert count_primes(1000) == 168
