# topmark:header:start
#
#   project      : Wheelwright
#   file         : commands.py
#   file_relpath : src/wheelwright/tools/commands.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Command lines for the delegated tools.

Pure builders: each function returns a `ToolCommand` and performs no I/O. Python tools
run as ``<venv-python> -m <tool>`` so they always resolve inside the release virtual
environment; the Rust toolchain (``cargo``) is taken from ``PATH``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class ToolCommand(NamedTuple):
    """A labelled command line."""

    label: str
    argv: tuple[str, ...]


def _cmd(label: str, *argv: str | Path) -> ToolCommand:
    return ToolCommand(label, tuple(str(a) for a in argv))


# --- Environment manager ---


def create_venv(interpreter: str, venv_dir: Path) -> ToolCommand:
    """``<python> -m venv <venv_dir>``."""
    return _cmd("create virtual environment", interpreter, "-m", "venv", venv_dir)


def install_requirements(venv_python: Path, requirements: Path) -> ToolCommand:
    """``pip install -r <requirements>`` inside the venv."""
    return _cmd(
        f"install {requirements.name}",
        venv_python,
        "-m",
        "pip",
        "install",
        "-r",
        requirements,
    )


def install_local_wheel(venv_python: Path, dist_dir: Path, distribution: str) -> ToolCommand:
    """Install the freshly built wheel from ``dist_dir`` only, never from an index."""
    return _cmd(
        f"install {distribution}",
        venv_python,
        "-m",
        "pip",
        "install",
        "--no-index",
        "--find-links",
        dist_dir,
        "--force-reinstall",
        "--no-deps",
        distribution,
    )


# --- Compiler toolchain ---


def maturin_sdist(venv_python: Path, dist_dir: Path) -> ToolCommand:
    """``maturin sdist --out <dist_dir>``."""
    return _cmd("maturin sdist", venv_python, "-m", "maturin", "sdist", "--out", dist_dir)


def maturin_build(venv_python: Path, dist_dir: Path) -> ToolCommand:
    """``maturin build --release --out <dist_dir>``."""
    return _cmd(
        "maturin build",
        venv_python,
        "-m",
        "maturin",
        "build",
        "--release",
        "--out",
        dist_dir,
    )


def cargo_fmt_check() -> ToolCommand:
    """``cargo fmt --all -- --check``."""
    return _cmd("cargo fmt", "cargo", "fmt", "--all", "--", "--check")


def cargo_clippy() -> ToolCommand:
    """``cargo clippy --all-targets -- -D warnings``."""
    return _cmd("cargo clippy", "cargo", "clippy", "--all-targets", "--", "-D", "warnings")


# --- Python checks ---


def ruff_check(venv_python: Path, paths: Sequence[Path]) -> ToolCommand:
    """``ruff check <paths>``."""
    return _cmd("ruff check", venv_python, "-m", "ruff", "check", *paths)


def ruff_format_check(venv_python: Path, paths: Sequence[Path]) -> ToolCommand:
    """``ruff format --check <paths>``."""
    return _cmd("ruff format", venv_python, "-m", "ruff", "format", "--check", *paths)


def mypy(venv_python: Path, paths: Sequence[Path]) -> ToolCommand:
    """``mypy <paths>``."""
    return _cmd("mypy", venv_python, "-m", "mypy", *paths)


def pytest(venv_python: Path, paths: Sequence[Path]) -> ToolCommand:
    """``pytest <paths>``."""
    return _cmd("pytest", venv_python, "-m", "pytest", *paths)


# --- Documentation generator ---


def sphinx_build(
    venv_python: Path,
    builder: str,
    source_dir: Path,
    build_dir: Path,
    *,
    strict: bool,
) -> ToolCommand:
    """``sphinx-build -b <builder> [-W --keep-going] <source> <build>/<builder>``.

    Args:
        venv_python (Path): Interpreter of the release venv.
        builder (str): Sphinx builder name (``html``, ``doctest``).
        source_dir (Path): Documentation sources.
        build_dir (Path): Output root; each builder writes to its own subdirectory.
        strict (bool): Turn warnings into errors.

    Returns:
        ToolCommand: The command.
    """
    strict_args: tuple[str, ...] = ("-W", "--keep-going") if strict else ()
    return _cmd(
        f"sphinx {builder}",
        venv_python,
        "-m",
        "sphinx",
        "-b",
        builder,
        *strict_args,
        source_dir,
        build_dir / builder,
    )
