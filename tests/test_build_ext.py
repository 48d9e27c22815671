import sys
from pathlib import Path

import pytest

import fortran_kernels
from compute_kernels import build_ext


def test_build_extensions_invokes_f2py_for_each_kernel(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "matrix_multiply.f90").write_text("! stub\n")
    (src / "prime_checker.f90").write_text("! stub\n")
    out = tmp_path / "out"

    calls = []

    def runner(cmd, *, cwd):
        calls.append((cmd, cwd))

    results = build_ext.build_extensions(source_dir=src, target_dir=out, runner=runner)

    assert out.is_dir()
    assert [r.name for r in results] == ["matrix_multiply", "prime_checker"]
    assert all(r.output_dir == out for r in results)
    cmd, cwd = calls[0]
    assert cwd == out
    assert cmd[:6] == [sys.executable, "-m", "numpy.f2py", "-c", "-m", "matrix_multiply"]
    assert cmd[6].endswith("matrix_multiply.f90")


def test_missing_source_fails_before_building(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "matrix_multiply.f90").write_text("! stub\n")

    calls = []
    with pytest.raises(FileNotFoundError, match="prime_checker.f90"):
        build_ext.build_extensions(
            source_dir=src,
            target_dir=tmp_path / "out",
            runner=lambda cmd, *, cwd: calls.append(cmd),
        )
    assert calls == []


def test_main_reports_errors(tmp_path, capsys):
    code = build_ext.main(
        ["--target-dir", str(tmp_path), "--kernels", "does_not_exist"]
    )
    assert code == 2
    assert "Missing Fortran source" in capsys.readouterr().err


def test_shipped_sources_exist():
    root = Path(fortran_kernels.__file__).resolve().parent
    for kernel in build_ext.DEFAULT_KERNELS:
        assert (root / f"{kernel}.f90").is_file()


def test_dry_run_prints_commands_without_building(tmp_path, capsys):
    code = build_ext.main(
        [
            "--target-dir",
            str(tmp_path),
            "--source-dir",
            str(Path(fortran_kernels.__file__).resolve().parent),
            "--dry-run",
        ]
    )
    out = capsys.readouterr().out
    assert code == 0
    assert "numpy.f2py -c -m matrix_multiply" in out
    assert "numpy.f2py -c -m prime_checker" in out
    assert "Built" not in out
