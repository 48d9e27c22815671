"""Package utilities for compute-kernels.

The kernels live in the top-level packages `kernels/`, `commands/` and
`fortran_kernels/`. This package provides stable helper entry points such as
`python -m compute_kernels.build_ext`.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("compute-kernels")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
