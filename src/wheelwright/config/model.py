# topmark:header:start
#
#   project      : Wheelwright
#   file         : model.py
#   file_relpath : src/wheelwright/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model for release runs.

This module defines two immutable snapshots:
    - `BuildConfig`: the run-time switches resolved once from the command line.
      It decides *which* stages run.
    - `ProjectSettings`: the project layout read from ``[tool.wheelwright]`` (or
      ``wheelwright.toml``). It decides *where* the stages look and write.

Both are ``frozen=True``; nothing mutates them once the pipeline starts.

Settings resolution order (lowest → highest precedence):
    1. Runtime defaults (`wheelwright.config.io.load_defaults_dict`).
    2. ``[tool.wheelwright]`` in ``<root>/pyproject.toml``.
    3. ``<root>/wheelwright.toml`` (top-level keys).
    4. An explicit ``--config FILE`` (``[tool.wheelwright]`` or top-level keys).

Path semantics:
    Every path-like setting is resolved against the project root.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from packaging.utils import canonicalize_name

from wheelwright.config.io import (
    extract_tool_table,
    get_bool_value,
    get_list_value,
    get_string_value,
    load_defaults_dict,
    load_toml_dict,
    read_project_name,
)
from wheelwright.config.keys import Toml
from wheelwright.config.logging import get_logger
from wheelwright.constants import PYPROJECT_TOML_NAME, WHEELWRIGHT_TOML_NAME
from wheelwright.core.errors import ConfigError

if TYPE_CHECKING:
    from wheelwright.config.io import TomlTable
    from wheelwright.config.logging import WheelwrightLogger

logger: WheelwrightLogger = get_logger(__name__)

# Wheel filename fragments identifying the platform tag family
_PLATFORM_FRAGMENTS: dict[str, str] = {
    "linux": "linux",
    "darwin": "macosx",
    "win32": "win",
    "cygwin": "win",
}


def default_interpreter() -> str:
    """Return the interpreter used when ``--python`` is not given."""
    return sys.executable


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Immutable run-time switches for one release run.

    The stage-selection fields mirror the command-line flags; their defaults are the
    values used when no flag is given. The remaining fields are ambient (output and
    discovery) and never influence stage selection.

    Attributes:
        full_check (bool): Run the lint stage (and, with ``generate_docs``, the docs stage).
        generate_docs (bool): Run the documentation stage when ``full_check`` is set.
        sdist_only (bool): Stop after the source distribution.
        set_compiler_flags (bool): Export the configured compiler flags to tool invocations.
        delete_old_env (bool): Remove the release virtual environment before recreating it.
        interpreter_path (str): Interpreter used to create the virtual environment.
        verbosity_level (int): Program-output verbosity (-1 quiet, 0 normal, >0 verbose).
        color (bool): Whether console output may use ANSI colors.
        project_root (Path): Root of the repository being released.
        config_file (Path | None): Explicit settings file from ``--config``.
        dry_run (bool): Print the stage plan and exit without side effects.
    """

    full_check: bool = True
    generate_docs: bool = True
    sdist_only: bool = False
    set_compiler_flags: bool = True
    delete_old_env: bool = True
    interpreter_path: str = field(default_factory=default_interpreter)

    verbosity_level: int = 0
    color: bool = True
    project_root: Path = field(default_factory=Path.cwd)
    config_file: Path | None = None
    dry_run: bool = False

    @property
    def runs_lint(self) -> bool:
        """Whether the lint stage is selected."""
        return not self.sdist_only and self.full_check

    @property
    def runs_docs(self) -> bool:
        """Whether the documentation stage is selected."""
        return self.runs_lint and self.generate_docs


@dataclass(frozen=True, slots=True)
class ProjectSettings:
    """Immutable project layout for a release run.

    All paths are absolute. Use `load_settings` to build an instance from the
    settings files, or `ProjectSettings.from_toml_dict` for an already-merged table.

    Attributes:
        root (Path): Project root.
        package_dir (Path): Directory of the binding crate / Python package.
        dist_dir (Path): Output directory for the sdist and the wheels.
        distribution (str): Python distribution name of the extension package.
        manifest (Path): The dependency manifest that gets patched.
        patch_marker (str): Sentinel line present while the manifest is unpatched.
        dependency (str): Name of the core dependency crate.
        dependency_path (Path): Local, in-tree location of the core dependency.
        registry (str): Registry name for the ``[patch.<registry>]`` table.
        venv_dir (Path): Release virtual environment.
        requirements (tuple[Path, ...]): Requirement files installed into the venv.
        compiler_flags_env (str): Environment variable receiving the compiler flags.
        compiler_flags (str): Compiler flags exported when enabled.
        license_source (Path): Canonical license file.
        license_target (Path): Tracked license copy inside the package tree.
        test_paths (tuple[Path, ...]): Test runner targets.
        lint_paths (tuple[Path, ...]): Python lint/type-check targets.
        docs_dir (Path): Documentation source directory.
        docs_build_dir (Path): Documentation output directory.
        docs_strict (bool): Treat documentation warnings as errors.
        wheel_platform (str): Platform fragment override for the wheel pattern.
        sources (tuple[Path, ...]): Settings files that contributed, in merge order.
    """

    root: Path
    package_dir: Path
    dist_dir: Path
    distribution: str
    manifest: Path
    patch_marker: str
    dependency: str
    dependency_path: Path
    registry: str
    venv_dir: Path
    requirements: tuple[Path, ...]
    compiler_flags_env: str
    compiler_flags: str
    license_source: Path
    license_target: Path
    test_paths: tuple[Path, ...]
    lint_paths: tuple[Path, ...]
    docs_dir: Path
    docs_build_dir: Path
    docs_strict: bool
    wheel_platform: str = ""
    sources: tuple[Path, ...] = ()

    @classmethod
    def from_toml_dict(
        cls,
        table: TomlTable,
        *,
        root: Path,
        sources: tuple[Path, ...] = (),
    ) -> ProjectSettings:
        """Build settings from a merged settings table.

        Missing keys take the runtime defaults. When ``distribution`` is empty it is
        read from ``[project].name`` of ``<package_dir>/pyproject.toml``.

        Args:
            table (TomlTable): Merged ``[tool.wheelwright]`` table.
            root (Path): Project root used to resolve relative paths.
            sources (tuple[Path, ...]): Provenance of the table.

        Returns:
            ProjectSettings: The resolved settings.

        Raises:
            ConfigError: If a value has the wrong type or the distribution name
                cannot be determined.
        """
        defaults: TomlTable = load_defaults_dict()
        merged: TomlTable = {**defaults, **table}
        root = root.resolve()

        def path_of(key: str) -> Path:
            raw: str = get_string_value(merged, key)
            if not raw:
                raise ConfigError(f"'{key}' must not be empty")
            return _abs_path(root, raw)

        def paths_of(key: str) -> tuple[Path, ...]:
            return tuple(_abs_path(root, raw) for raw in get_list_value(merged, key))

        package_dir: Path = path_of(Toml.KEY_PACKAGE_DIR)
        distribution: str = get_string_value(merged, Toml.KEY_DISTRIBUTION).strip()
        if not distribution:
            distribution = read_project_name(package_dir / PYPROJECT_TOML_NAME) or ""
        if not distribution:
            raise ConfigError(
                f"Cannot determine the distribution name: set '{Toml.KEY_DISTRIBUTION}' "
                f"or declare [project].name in {package_dir / PYPROJECT_TOML_NAME}"
            )

        patch_marker: str = get_string_value(merged, Toml.KEY_PATCH_MARKER).strip()
        if not patch_marker:
            raise ConfigError(f"'{Toml.KEY_PATCH_MARKER}' must not be empty")

        return cls(
            root=root,
            package_dir=package_dir,
            dist_dir=path_of(Toml.KEY_DIST_DIR),
            distribution=distribution,
            manifest=path_of(Toml.KEY_MANIFEST),
            patch_marker=patch_marker,
            dependency=get_string_value(merged, Toml.KEY_DEPENDENCY),
            dependency_path=path_of(Toml.KEY_DEPENDENCY_PATH),
            registry=get_string_value(merged, Toml.KEY_REGISTRY),
            venv_dir=path_of(Toml.KEY_VENV_DIR),
            requirements=paths_of(Toml.KEY_REQUIREMENTS),
            compiler_flags_env=get_string_value(merged, Toml.KEY_COMPILER_FLAGS_ENV),
            compiler_flags=get_string_value(merged, Toml.KEY_COMPILER_FLAGS),
            license_source=path_of(Toml.KEY_LICENSE_SOURCE),
            license_target=path_of(Toml.KEY_LICENSE_TARGET),
            test_paths=paths_of(Toml.KEY_TEST_PATHS),
            lint_paths=paths_of(Toml.KEY_LINT_PATHS),
            docs_dir=path_of(Toml.KEY_DOCS_DIR),
            docs_build_dir=path_of(Toml.KEY_DOCS_BUILD_DIR),
            docs_strict=get_bool_value(merged, Toml.KEY_DOCS_STRICT, default=True),
            wheel_platform=get_string_value(merged, Toml.KEY_WHEEL_PLATFORM),
            sources=sources,
        )

    @property
    def venv_python(self) -> Path:
        """Interpreter inside the release virtual environment."""
        if sys.platform == "win32":
            return self.venv_dir / "Scripts" / "python.exe"
        return self.venv_dir / "bin" / "python"

    @property
    def wheel_name_prefix(self) -> str:
        """Distribution name as it appears in wheel filenames (PEP 427 escaping)."""
        return canonicalize_name(self.distribution).replace("-", "_")

    @property
    def platform_fragment(self) -> str:
        """Wheel filename fragment identifying the running platform."""
        if self.wheel_platform:
            return self.wheel_platform
        for prefix, fragment in _PLATFORM_FRAGMENTS.items():
            if sys.platform.startswith(prefix):
                return fragment
        return sys.platform

    @property
    def wheel_pattern(self) -> str:
        """Glob pattern (relative to ``dist_dir``) of this platform's wheel."""
        return f"{self.wheel_name_prefix}-*{self.platform_fragment}*.whl"

    @property
    def any_wheel_pattern(self) -> str:
        """Glob pattern (relative to ``dist_dir``) matching any wheel of the distribution."""
        return f"{self.wheel_name_prefix}-*.whl"


def _abs_path(base: Path, raw: str) -> Path:
    p = Path(raw)
    return p.resolve() if p.is_absolute() else (base / p).resolve()


def _warn_unknown_keys(table: TomlTable, source: Path) -> None:
    known: set[str] = set(load_defaults_dict())
    for key in table:
        if key not in known:
            logger.warning("Ignoring unknown setting '%s' in %s", key, source)


def load_settings(root: Path, *, config_file: Path | None = None) -> ProjectSettings:
    """Discover, merge and resolve the project settings.

    Args:
        root (Path): Project root.
        config_file (Path | None): Explicit settings file (``--config``), merged last.

    Returns:
        ProjectSettings: The resolved settings.

    Raises:
        ConfigError: If the explicit file is missing or any source is invalid.
    """
    merged: TomlTable = {}
    sources: list[Path] = []

    pyproject: Path = root / PYPROJECT_TOML_NAME
    if pyproject.is_file():
        table: TomlTable | None = extract_tool_table(load_toml_dict(pyproject))
        if table is not None:
            logger.info("Loading settings from %s", pyproject)
            _warn_unknown_keys(table, pyproject)
            merged.update(table)
            sources.append(pyproject)

    local: Path = root / WHEELWRIGHT_TOML_NAME
    if local.is_file():
        logger.info("Loading settings from %s", local)
        table = load_toml_dict(local)
        _warn_unknown_keys(table, local)
        merged.update(table)
        sources.append(local)

    if config_file is not None:
        if not config_file.is_file():
            raise ConfigError(f"Settings file not found: {config_file}")
        logger.info("Loading explicit settings from %s", config_file)
        doc: TomlTable = load_toml_dict(config_file)
        table = extract_tool_table(doc)
        if table is None:
            table = doc
        _warn_unknown_keys(table, config_file)
        merged.update(table)
        sources.append(config_file)

    if not sources:
        logger.info("No settings found under %s; using defaults", root)

    logger.trace("Merged settings table: %s", merged)
    return ProjectSettings.from_toml_dict(merged, root=root, sources=tuple(sources))
