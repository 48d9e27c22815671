"""Square integer matrix multiplication.

Matrices are NumPy ``int64`` arrays of shape ``(N, N)``. ``multiply`` is the
dispatching entry point: it validates both operands, checks that the 64-bit
accumulator cannot overflow, and then runs either the compiled Fortran kernel
(when loaded, see ``fortran_kernels.loader``) or the NumPy product.
``multiply_reference`` is the literal triple loop over Python integers and is
the ground truth both fast paths are tested against.
"""

from __future__ import annotations

import logging

import numpy as np

from core.exceptions import DimensionMismatchError
from fortran_kernels.loader import get_matmul_kernel

logger = logging.getLogger("compute_kernels")

ACCUMULATOR_DTYPE = np.int64
_INT64_MIN = int(np.iinfo(np.int64).min)
_INT64_MAX = int(np.iinfo(np.int64).max)

Matrix = np.ndarray


def _shape_of(values) -> tuple[int, ...]:
    try:
        return tuple(np.shape(values))
    except ValueError:
        # Ragged nested lists have no well-defined shape.
        return (len(values),)


def as_matrix(values, size: int | None = None) -> Matrix:
    """Coerce ``values`` into an ``(N, N)`` int64 array.

    Raises
    ------
    DimensionMismatchError
        If ``values`` is ragged, not two-dimensional, not square, empty, or
        not of the expected ``size``.
    TypeError
        If the entries are not integers.
    OverflowError
        If an entry does not fit in a signed 64-bit integer.
    """
    shape = _shape_of(values)
    if len(shape) != 2 or shape[0] != shape[1] or shape[0] == 0:
        raise DimensionMismatchError(shape)
    if size is not None and shape[0] != size:
        raise DimensionMismatchError(
            shape,
            message=f"Expected a {size}x{size} matrix, got shape {shape}.",
        )

    if not isinstance(values, np.ndarray) and any(
        isinstance(v, (bool, np.bool_)) for v in np.asarray(values, dtype=object).flat
    ):
        raise TypeError("Matrix entries must be integers, not booleans.")

    arr = np.asarray(values)
    if arr.dtype == object:
        if not all(isinstance(v, (int, np.integer)) for v in arr.flat):
            raise TypeError("Matrix entries must be integers.")
        if any(not _INT64_MIN <= int(v) <= _INT64_MAX for v in arr.flat):
            raise OverflowError("Matrix entry does not fit in a signed 64-bit integer.")
    elif arr.dtype == np.bool_ or not np.issubdtype(arr.dtype, np.integer):
        raise TypeError(f"Matrix entries must be integers, got dtype {arr.dtype}.")
    elif arr.dtype == np.uint64 and arr.size and int(arr.max()) > _INT64_MAX:
        raise OverflowError("Matrix entry does not fit in a signed 64-bit integer.")

    return np.array(arr, dtype=ACCUMULATOR_DTYPE)


def identity(size: int) -> Matrix:
    """Return the ``size x size`` integer identity matrix."""
    if size <= 0:
        raise DimensionMismatchError((size, size))
    return np.eye(size, dtype=ACCUMULATOR_DTYPE)


def _max_abs(m: Matrix) -> int:
    if m.size == 0:
        return 0
    return max(abs(int(m.min())), abs(int(m.max())))


def product_may_overflow(a: Matrix, b: Matrix) -> bool:
    """Return True if some ``sum_k a[i,k] * b[k,j]`` could exceed int64.

    Uses the bound ``N * max|a| * max|b|`` in exact Python arithmetic, so a
    False result guarantees the fixed-width product is exact. The bound is
    conservative: a True result (for instance any entry equal to INT64_MIN)
    does not mean the product actually overflows.
    """
    n = a.shape[0]
    return n * _max_abs(a) * _max_abs(b) > _INT64_MAX


def multiply_reference(a, b) -> list[list[int]]:
    """Triple-loop product over Python integers.

    Accepts nested sequences or arrays and never overflows; used as the
    exact baseline for the NumPy and compiled paths.
    """
    rows_a = [[int(v) for v in row] for row in a]
    rows_b = [[int(v) for v in row] for row in b]
    n = len(rows_a)
    if (
        n == 0
        or len(rows_b) != n
        or any(len(row) != n for row in rows_a)
        or any(len(row) != n for row in rows_b)
    ):
        raise DimensionMismatchError(_shape_of(a), _shape_of(b))

    result = [[0] * n for _ in range(n)]
    for i in range(n):
        for j in range(n):
            acc = 0
            for k in range(n):
                acc += rows_a[i][k] * rows_b[k][j]
            result[i][j] = acc
    return result


def _multiply_numpy(a: Matrix, b: Matrix) -> Matrix:
    out = np.zeros_like(a, dtype=ACCUMULATOR_DTYPE)
    np.matmul(a, b, out=out)
    return out


def _multiply_compiled(func, a: Matrix, b: Matrix) -> Matrix:
    a_f = np.asfortranarray(a, dtype=ACCUMULATOR_DTYPE)
    b_f = np.asfortranarray(b, dtype=ACCUMULATOR_DTYPE)
    # f2py exposes c = multiply_matrices(a, b, [n]).
    out = func(a_f, b_f)
    return np.ascontiguousarray(out, dtype=ACCUMULATOR_DTYPE)


def multiply(
    a,
    b,
    *,
    expected_size: int | None = None,
    check_overflow: bool = True,
    use_compiled: bool = True,
) -> Matrix:
    """Return the product ``a @ b`` of two square integer matrices.

    Parameters
    ----------
    a, b:
        Square integer matrices (arrays or nested sequences) of equal size.
    expected_size:
        When given, both operands must be exactly this size.
    check_overflow:
        Raise ``OverflowError`` if an entry of the product does not fit in
        the 64-bit accumulator. When
        False the product wraps around on overflow, like native fixed-width
        integers.
    use_compiled:
        Allow dispatch to the compiled Fortran kernel when it is loaded.

    Returns
    -------
    numpy.ndarray
        A freshly allocated ``(N, N)`` int64 array owned by the caller.
    """
    a_m = as_matrix(a, expected_size)
    b_m = as_matrix(b, expected_size)
    if a_m.shape != b_m.shape:
        raise DimensionMismatchError(a_m.shape, b_m.shape)

    if check_overflow and product_may_overflow(a_m, b_m):
        # The bound is conservative (e.g. at INT64_MIN); settle it exactly.
        exact = multiply_reference(a_m, b_m)
        if any(not _INT64_MIN <= v <= _INT64_MAX for row in exact for v in row):
            raise OverflowError(
                f"Product of {a_m.shape[0]}x{a_m.shape[0]} matrices exceeds the "
                "64-bit accumulator; use multiply_reference for exact results."
            )
        return np.array(exact, dtype=ACCUMULATOR_DTYPE)

    kernel = get_matmul_kernel() if use_compiled else None
    if kernel is not None:
        logger.debug("multiply: compiled kernel %s", kernel.module)
        return _multiply_compiled(kernel.func, a_m, b_m)

    logger.debug("multiply: numpy path for %dx%d", *a_m.shape)
    return _multiply_numpy(a_m, b_m)


def format_matrix(matrix) -> str:
    """Render ``matrix`` as rows of ``"v "`` tokens, one line per row."""
    lines = []
    for row in np.asarray(matrix):
        lines.append("".join(f"{int(v)} " for v in row))
    return "".join(line + "\n" for line in lines)


def to_nested_list(matrix) -> list[list[int]]:
    """Convert a matrix to plain nested lists of Python ints."""
    return [[int(v) for v in row] for row in np.asarray(matrix)]


__all__ = [
    "ACCUMULATOR_DTYPE",
    "Matrix",
    "as_matrix",
    "format_matrix",
    "identity",
    "multiply",
    "multiply_reference",
    "product_may_overflow",
    "to_nested_list",
]
