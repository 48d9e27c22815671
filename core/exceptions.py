"""Custom exception types for the compute kernels."""

from __future__ import annotations


class ComputeKernelsError(Exception):
    """Base class for domain-specific errors."""


class DimensionMismatchError(ComputeKernelsError, ValueError):
    """Raised when matrix operands are not square or not the same size."""

    def __init__(
        self,
        left_shape: tuple[int, ...],
        right_shape: tuple[int, ...] | None = None,
        message: str | None = None,
    ) -> None:
        if message is None:
            if right_shape is None:
                message = f"Matrix of shape {left_shape} is not a non-empty square matrix."
            else:
                message = (
                    f"Cannot multiply matrices of shape {left_shape} and {right_shape}; "
                    "operands must be square and of equal dimension."
                )
        super().__init__(message)
        self.left_shape = left_shape
        self.right_shape = right_shape


class InvalidRangeError(ComputeKernelsError, ValueError):
    """Raised when a negative enumeration bound is rejected."""

    def __init__(self, bound: int, message: str | None = None) -> None:
        if message is None:
            message = f"Enumeration bound {bound} is negative."
        super().__init__(message)
        self.bound = bound


__all__ = ["ComputeKernelsError", "DimensionMismatchError", "InvalidRangeError"]
