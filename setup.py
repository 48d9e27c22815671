from __future__ import annotations

import os
import sys
from pathlib import Path

from setuptools import find_namespace_packages, setup
from setuptools.command.build_py import build_py as _build_py


def _truthy_env(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in {"1", "true", "yes", "on"}


class build_py(_build_py):
    """Optionally build the f2py kernels during packaging.

    Set `COMPUTE_KERNELS_BUILD_EXT=1` to attempt building the matrix and prime
    kernels as part of `pip install .` / `pip install -e .`. Build failures do
    not abort installation; the runtime always falls back to the Python kernels.
    """

    def run(self) -> None:
        super().run()

        if not _truthy_env("COMPUTE_KERNELS_BUILD_EXT"):
            return

        try:
            from compute_kernels.build_ext import build_extensions
        except ImportError as exc:
            print(
                f"compute-kernels: could not import build helper; skipping compiled kernels: {exc}",
                file=sys.stderr,
            )
            return

        try:
            repo_root = Path(__file__).resolve().parent
            source_dir = repo_root / "fortran_kernels"
            target_dir = Path(self.build_lib) / "fortran_kernels"
            build_extensions(source_dir=source_dir, target_dir=target_dir)
        except (OSError, RuntimeError) as exc:
            print(
                "compute-kernels: compiled kernel build failed; continuing without extensions: "
                f"{exc}",
                file=sys.stderr,
            )


setup(
    name="compute-kernels",
    version="0.1.0",
    description="Integer matrix multiplication and prime enumeration kernels",
    python_requires=">=3.9",
    packages=find_namespace_packages(
        include=[
            "commands",
            "compute_kernels",
            "core",
            "core.*",
            "fortran_kernels",
            "kernels",
            "runtime",
        ]
    ),
    py_modules=["main"],
    package_data={"fortran_kernels": ["*.f90"]},
    install_requires=[
        "numpy>=1.24",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7"],
        "build": ["meson", "ninja"],
    },
    entry_points={
        "console_scripts": [
            "compute-kernels=main:main",
            "compute-kernels-build-ext=compute_kernels.build_ext:main",
        ]
    },
    cmdclass={"build_py": build_py},
)
