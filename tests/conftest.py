# topmark:header:start
#
#   project      : Wheelwright
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the Wheelwright test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring consistent and verbose logging output during testing.

Notes:
    Release runs are exercised against a throw-away project tree (see
    `release_project`) with recording doubles for every external tool, so no test
    needs Rust, maturin or a network connection. Only tests marked ``integration``
    call a real ``git``.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from tests.fakes import FakeConsole, FakeRunner, FakeVcs, write_sdist, write_wheel
from wheelwright.config import logging
from wheelwright.config.model import BuildConfig, ProjectSettings
from wheelwright.constants import LOG_LEVEL_ENV
from wheelwright.manifest.guard import ManifestGuard
from wheelwright.pipeline.engine import run_release

if TYPE_CHECKING:
    from pathlib import Path

    from tests.fakes import Call
    from wheelwright.pipeline.outcomes import RunReport

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.hookimpl`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.hookimpl`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.fixture`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.fixture`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.fixture(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_wheelwright_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure Wheelwright's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


# --- Fake project layout ---

DISTRIBUTION: str = "my-ext"
LICENSE_TEXT: str = "MIT License\n\nCopyright (c) 2025 The my-ext authors\n"

MANIFEST_TEMPLATE: str = """\
[package]
name = "my-ext"
version = "1.0.0"
edition = "2021"

[lib]
crate-type = ["cdylib"]

[dependencies]
core = "1.4"
pyo3 = {{ version = "0.22", features = ["extension-module"] }}

{marker}
"""


def write_project(root: Path, *, eol: str = "\n") -> None:
    """Create a minimal extension-package tree under ``root``.

    Layout (matching the default settings, except for the dependency path)::

        LICENSE
        core/                       local core dependency crate
        python/Cargo.toml           manifest with the patch marker
        python/LICENSE              tracked license copy
        python/pyproject.toml       [project].name = "my-ext"
        python/requirements-dev.txt
        python/tests/ python/docs/

    Args:
        root (Path): Directory to populate (created when missing).
        eol (str): Line ending used for the manifest.
    """
    package: Path = root / "python"
    for directory in (root / "core", package / "tests", package / "docs"):
        directory.mkdir(parents=True, exist_ok=True)

    (root / "LICENSE").write_text(LICENSE_TEXT, encoding="utf-8")
    (package / "LICENSE").write_text(LICENSE_TEXT, encoding="utf-8")
    (package / "pyproject.toml").write_text(
        f'[project]\nname = "{DISTRIBUTION}"\nversion = "1.0.0"\n', encoding="utf-8"
    )
    (package / "requirements-dev.txt").write_text("maturin\npytest\n", encoding="utf-8")

    manifest: str = MANIFEST_TEMPLATE.format(marker="# wheelwright:patch-marker")
    (package / "Cargo.toml").write_bytes(manifest.replace("\n", eol).encode("utf-8"))


def make_settings(root: Path, **overrides: Any) -> ProjectSettings:
    """Return settings for a tree created by `write_project`.

    Args:
        root (Path): Project root.
        **overrides (Any): ``[tool.wheelwright]`` keys overriding the test defaults.

    Returns:
        ProjectSettings: The resolved settings.
    """
    table: dict[str, Any] = {"dependency_path": "core", **overrides}
    return ProjectSettings.from_toml_dict(table, root=root)


def make_build_config(root: Path, **overrides: Any) -> BuildConfig:
    """Return a `BuildConfig` for ``root`` using the running interpreter."""
    values: dict[str, Any] = {
        "interpreter_path": sys.executable,
        "project_root": root,
        "color": False,
        **overrides,
    }
    return BuildConfig(**values)


@dataclass
class ReleaseProject:
    """A fake project with recording collaborators.

    The runner fakes ``maturin``: ``maturin sdist`` archives the manifest as it is on
    disk at that moment, and ``maturin build`` drops one wheel for this platform into
    the dist directory and snapshots the manifest it was built against.

    Attributes:
        root (Path): Project root.
        settings (ProjectSettings): Resolved settings.
        runner (FakeRunner): Recording tool runner.
        vcs (FakeVcs): In-memory version control (manifest and license copy committed).
        console (FakeConsole): Program output sink.
        original_manifest (bytes): Committed manifest content.
        built_against (list[str]): Manifest text seen by each ``maturin build``.
    """

    root: Path
    settings: ProjectSettings
    runner: FakeRunner
    vcs: FakeVcs
    console: FakeConsole
    original_manifest: bytes
    built_against: list[str]

    @property
    def guard(self) -> ManifestGuard:
        """A guard over the project's manifest."""
        return ManifestGuard(self.settings, self.vcs)

    def manifest_bytes(self) -> bytes:
        """Current on-disk manifest content."""
        return self.settings.manifest.read_bytes()

    def config(self, **overrides: Any) -> BuildConfig:
        """A run configuration for this project."""
        return make_build_config(self.root, **overrides)

    def release(self, **overrides: Any) -> RunReport:
        """Run a release with `BuildConfig` ``overrides``."""
        return run_release(
            self.config(**overrides),
            self.settings,
            runner=self.runner,
            vcs=self.vcs,
            console=self.console,
        )


def new_release_project(root: Path, *, eol: str = "\n", **overrides: Any) -> ReleaseProject:
    """Create a `ReleaseProject` under ``root``.

    Args:
        root (Path): Project root (created when missing).
        eol (str): Line ending used for the manifest.
        **overrides (Any): Settings overrides, see `make_settings`.

    Returns:
        ReleaseProject: The project and its collaborators.
    """
    write_project(root, eol=eol)
    settings: ProjectSettings = make_settings(root, **overrides)
    vcs = FakeVcs()
    vcs.commit(settings.manifest, settings.license_target)

    runner = FakeRunner()
    built_against: list[str] = []

    def fake_sdist(_call: Call) -> None:
        text: str = settings.manifest.read_text(encoding="utf-8")
        write_sdist(
            settings.dist_dir / "my_ext-1.0.0.tar.gz",
            {"my_ext-1.0.0/Cargo.toml": text, "my_ext-1.0.0/pyproject.toml": "[project]\n"},
        )

    def fake_build(_call: Call) -> None:
        built_against.append(settings.manifest.read_text(encoding="utf-8"))
        write_wheel(settings.dist_dir, settings.wheel_name_prefix, settings.platform_fragment)

    runner.on("maturin sdist", fake_sdist)
    runner.on("maturin build", fake_build)

    return ReleaseProject(
        root=root,
        settings=settings,
        runner=runner,
        vcs=vcs,
        console=FakeConsole(),
        original_manifest=settings.manifest.read_bytes(),
        built_against=built_against,
    )


@pytest.fixture
def release_project(tmp_path: Path) -> ReleaseProject:
    """A fresh fake project in ``tmp_path/proj`` (LF line endings).

    Args:
        tmp_path (Path): The pytest-provided temporary directory for the test.

    Returns:
        ReleaseProject: The project and its recording collaborators.
    """
    return new_release_project(tmp_path / "proj")
