"""Build the optional compiled kernels (Fortran / f2py).

Nothing is compiled on import. Building only happens when:
- you run `python -m compute_kernels.build_ext`, or
- you set `COMPUTE_KERNELS_BUILD_EXT=1` during `pip install .` / `pip install -e .`.
"""

from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

logger = logging.getLogger("compute_kernels")

DEFAULT_KERNELS = ("matrix_multiply", "prime_checker")


@dataclass(frozen=True)
class BuildResult:
    """Result of building a single kernel."""

    name: str
    output_dir: Path


def _run(cmd: Sequence[str], *, cwd: Path) -> None:
    proc = subprocess.run(
        list(cmd),
        cwd=str(cwd),
        text=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
    )
    if proc.returncode != 0:
        raise RuntimeError(proc.stdout.strip() or f"Command failed: {' '.join(cmd)}")


def f2py_command(kernel: str, source_path: Path) -> list[str]:
    """Return the f2py invocation that compiles `source_path` as `kernel`."""
    return [
        sys.executable,
        "-m",
        "numpy.f2py",
        "-c",
        "-m",
        kernel,
        str(source_path),
    ]


def build_extensions(
    *,
    source_dir: Path,
    target_dir: Path,
    kernels: Sequence[str] = DEFAULT_KERNELS,
    runner=_run,
) -> list[BuildResult]:
    """Build selected f2py kernels into `target_dir`.

    Parameters
    ----------
    source_dir:
        Directory containing Fortran sources like `prime_checker.f90`.
    target_dir:
        Output directory for the compiled extension modules. For in-place
        builds, pass the installed `fortran_kernels/` directory.
    kernels:
        Kernel module names to build (without file extension).
    runner:
        Callable executing the command; replaced in tests.

    Returns
    -------
    list[BuildResult]
        One entry per kernel that was built.
    """
    target_dir.mkdir(parents=True, exist_ok=True)

    # Check every source up front so a typo does not leave a partial build.
    sources = []
    for kernel in kernels:
        source_path = source_dir / f"{kernel}.f90"
        if not source_path.exists():
            raise FileNotFoundError(f"Missing Fortran source: {source_path}")
        sources.append((kernel, source_path.resolve()))

    results: list[BuildResult] = []
    for kernel, source_path in sources:
        logger.info("Building %s from %s", kernel, source_path)
        runner(f2py_command(kernel, source_path), cwd=target_dir)
        results.append(BuildResult(name=kernel, output_dir=target_dir))

    return results


def _default_target_dir() -> Path:
    import fortran_kernels

    return Path(fortran_kernels.__file__).resolve().parent


def _print_command(cmd: Sequence[str], *, cwd: Path) -> None:
    print(f"(cd {cwd} && {' '.join(cmd)})")


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Compile the f2py matrix and prime kernels."
    )
    parser.add_argument("--target-dir", type=Path, help="default: fortran_kernels/")
    parser.add_argument("--source-dir", type=Path, help="default: the target dir")
    parser.add_argument(
        "--kernels", nargs="*", default=list(DEFAULT_KERNELS), metavar="NAME"
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="print the f2py commands only"
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    target_dir = args.target_dir or _default_target_dir()
    source_dir = args.source_dir or target_dir
    runner = _print_command if args.dry_run else _run

    try:
        results = build_extensions(
            source_dir=source_dir,
            target_dir=target_dir,
            kernels=tuple(args.kernels),
            runner=runner,
        )
    except (OSError, RuntimeError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    if not args.dry_run:
        print(f"Built {', '.join(r.name for r in results)} into {target_dir}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
