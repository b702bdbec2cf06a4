# topmark:header:start
#
#   project      : Wheelwright
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Wheelwright project automation via Nox (using uv-backed virtualenvs).

Sessions:
  - `lint`: Ruff + pydoclint on the package and the tests.
  - `lint_fixall`: Ruff lint autofix.
  - `format_check`: Verify formatting (ruff, mdformat).
  - `format`: Apply formatting (ruff, mdformat).
  - `qa`: Per-Python session that runs pytest and pyright.
  - `property_test`: Slow hypothesis profiles (opt-in).
  - `package_check`: Build sdist/wheel and validate metadata (twine).
  - `release_check`: Format + lint + tests + pyright + packaging in one environment.

Notes:
  - The default venv backend is `uv` for faster environment sync.
  - Markdown files are resolved from git via `git ls-files` to avoid scanning ignored files.

Common invocations:
  - `nox -s lint`
  - `nox -s qa` (runs for all configured Python versions)
"""

from __future__ import annotations

import pathlib
import sys
import tomllib
import warnings
from typing import Any, cast

import nox

CURRENT_PYTHON_VERSION: str = f"{sys.version_info[0]}.{sys.version_info[1]}"


def _parse_pyproject_toml() -> dict[str, Any]:
    """Parse `pyproject.toml` using stdlib TOML parsing.

    This runs at **noxfile import time**, so it must not depend on project
    runtime dependencies.

    Returns:
        dict[str, Any]: Parsed TOML document (top-level table).
    """
    path: pathlib.Path = pathlib.Path(__file__).parent / "pyproject.toml"
    if not path.exists():
        return {}
    with path.open("rb") as fh:
        return tomllib.load(fh)


def get_supported_pythons() -> list[str]:
    """Resolve supported Python versions from the `pyproject.toml` classifiers.

    Returns:
        list[str]: Supported versions like ["3.11", "3.12", ...], sorted.
    """
    project_any = _parse_pyproject_toml().get("project")
    classifiers_any = project_any.get("classifiers") if isinstance(project_any, dict) else None
    if not isinstance(classifiers_any, list):
        warnings.warn(
            f"No classifiers in pyproject.toml. Falling back to Python {CURRENT_PYTHON_VERSION}.",
            RuntimeWarning,
            stacklevel=2,
        )
        return [CURRENT_PYTHON_VERSION]

    prefix = "Programming Language :: Python :: "
    versions: set[tuple[int, int]] = set()
    for c in cast("list[str]", classifiers_any):
        parts: list[str] = c.removeprefix(prefix).strip().split(".")
        if c.startswith(prefix) and len(parts) == 2 and all(p.isdigit() for p in parts):
            versions.add((int(parts[0]), int(parts[1])))

    if not versions:
        return [CURRENT_PYTHON_VERSION]
    return [f"{major}.{minor}" for major, minor in sorted(versions)]


# Resolve versions once at startup
PYTHONS: list[str] = get_supported_pythons()

# Keep defaults fast; run QA (multi-Python) explicitly or in CI.
nox.options.sessions = ["lint", "format_check"]
nox.options.default_venv_backend = "uv"

MARKDOWN_PATTERNS = (":(glob)*.md",)


def get_git_files(session: nox.Session, *specs: str) -> list[str]:
    """Return tracked files matching the given git pathspecs."""
    out = session.run("git", "ls-files", "--", *specs, silent=True, external=True)
    out_s: str = str(out).strip()
    return out_s.splitlines() if out_s else []


def _run_pyright(session: nox.Session) -> None:
    py_ver = session.python
    if not isinstance(py_ver, str) or not py_ver:
        raise RuntimeError(f"Unexpected session.python value: {py_ver!r}")
    session.run("pyright", "--pythonversion", py_ver)


@nox.session(python=PYTHONS)
def qa(session: nox.Session) -> None:
    """Run tests + pyright (per Python version)."""
    session.install("-r", "requirements-dev.txt")
    session.run("pytest", "-q", "tests", "-m", "not hypothesis_slow", *session.posargs)
    _run_pyright(session)


@nox.session
def lint(session: nox.Session) -> None:
    """Static analysis."""
    session.install("-r", "requirements-dev.txt")
    session.run("ruff", "check", ".")
    session.run("pydoclint", "-q", "src/wheelwright")


@nox.session
def lint_fixall(session: nox.Session) -> None:
    """Run ruff with --fix (auto-fix lint issues)."""
    session.install("-r", "requirements-dev.txt")
    session.run("ruff", "check", "--fix", ".")


@nox.session
def format_check(session: nox.Session) -> None:
    """Check formatting for code and markdown."""
    session.install("-r", "requirements-dev.txt")
    session.run("ruff", "format", "--check", ".")
    md_files: list[str] = get_git_files(session, *MARKDOWN_PATTERNS)
    if md_files:
        session.run("mdformat", "--check", *md_files)


@nox.session
def format(session: nox.Session) -> None:
    """Format code and markdown (auto-fix)."""
    session.install("-r", "requirements-dev.txt")
    session.run("ruff", "format", ".")
    md_files: list[str] = get_git_files(session, *MARKDOWN_PATTERNS)
    if md_files:
        session.run("mdformat", *md_files)


@nox.session
def property_test(session: nox.Session) -> None:
    """Run the slow hypothesis property tests (developer only)."""
    session.install("-r", "requirements-dev.txt")
    session.run("pytest", "-vv", "tests", "-m", "hypothesis_slow", *session.posargs)


@nox.session(python=CURRENT_PYTHON_VERSION)
def package_check(session: nox.Session) -> None:
    """Build sdist/wheel and validate distribution metadata (twine)."""
    session.install("-r", "requirements-dev.txt")
    session.run("python", "-c", "import shutil; shutil.rmtree('dist', ignore_errors=True)")
    session.run("python", "-m", "build", "--sdist", "--wheel")
    session.run("twine", "check", "dist/*")


@nox.session(python=CURRENT_PYTHON_VERSION)
def release_check(session: nox.Session) -> None:
    """Release gate: formatting, lint, tests, pyright and packaging in one environment."""
    session.install("-r", "requirements-dev.txt")

    session.run("ruff", "format", "--check", ".")
    session.run("ruff", "check", ".")
    session.run("pydoclint", "-q", "src/wheelwright")
    session.run("pytest", "-q", "tests", "-m", "not hypothesis_slow", *session.posargs)
    _run_pyright(session)

    session.run("python", "-c", "import shutil; shutil.rmtree('dist', ignore_errors=True)")
    session.run("python", "-m", "build", "--sdist", "--wheel")
    session.run("twine", "check", "dist/*")
