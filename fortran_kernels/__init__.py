"""Optional compiled kernels.

This package holds the Fortran sources for the matrix and prime kernels and,
once built with f2py, the compiled extension modules. The pure-Python engine
in `kernels/` always remains the fallback when these are not available.
"""
