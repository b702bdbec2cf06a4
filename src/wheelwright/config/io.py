# topmark:header:start
#
#   project      : Wheelwright
#   file         : io.py
#   file_relpath : src/wheelwright/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML settings sources and extract typed values.

This module provides I/O helpers for reading Wheelwright settings from on-disk TOML
files (``wheelwright.toml`` / ``pyproject.toml``) and the runtime defaults defined in
code. Parsing is done with `tomlkit` and returned as plain `dict` structures.

The getters are *checked*: a value of the wrong shape raises
`wheelwright.core.errors.ConfigError` instead of silently falling back to the
default, because a release run must not proceed with a half-understood layout.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeGuard, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from wheelwright.config.keys import Toml
from wheelwright.config.logging import get_logger
from wheelwright.constants import DEFAULT_PATCH_MARKER
from wheelwright.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from wheelwright.config.logging import WheelwrightLogger

TomlTable = dict[str, Any]

logger: WheelwrightLogger = get_logger(__name__)


def is_toml_table(obj: object) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping."""
    return isinstance(obj, dict)


def load_defaults_dict() -> TomlTable:
    """Return Wheelwright's **runtime defaults** as a Python dict.

    This function performs no I/O. The returned value is a new dict so callers can
    mutate it safely.

    Returns:
        TomlTable: The defaults, keyed by `wheelwright.config.keys.Toml` names.
    """
    return {
        Toml.KEY_PACKAGE_DIR: "python",
        Toml.KEY_DIST_DIR: "dist",
        Toml.KEY_DISTRIBUTION: "",
        Toml.KEY_MANIFEST: "python/Cargo.toml",
        Toml.KEY_PATCH_MARKER: DEFAULT_PATCH_MARKER,
        Toml.KEY_DEPENDENCY: "core",
        Toml.KEY_DEPENDENCY_PATH: ".",
        Toml.KEY_REGISTRY: "crates-io",
        Toml.KEY_VENV_DIR: ".venv-release",
        Toml.KEY_REQUIREMENTS: ["python/requirements-dev.txt"],
        Toml.KEY_COMPILER_FLAGS_ENV: "RUSTFLAGS",
        Toml.KEY_COMPILER_FLAGS: "-D warnings",
        Toml.KEY_LICENSE_SOURCE: "LICENSE",
        Toml.KEY_LICENSE_TARGET: "python/LICENSE",
        Toml.KEY_TEST_PATHS: ["python/tests"],
        Toml.KEY_LINT_PATHS: ["python"],
        Toml.KEY_DOCS_DIR: "python/docs",
        Toml.KEY_DOCS_BUILD_DIR: "python/docs/_build",
        Toml.KEY_DOCS_STRICT: True,
        Toml.KEY_WHEEL_PLATFORM: "",
    }


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document.

    Returns:
        TomlTable: The parsed TOML content as plain Python values.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if is_toml_table(data_any) else {}


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table, returning a new empty dict when missing.

    Args:
        table (TomlTable): Parent table.
        key (str): Sub-table key.

    Returns:
        TomlTable: The sub-table if present.

    Raises:
        ConfigError: If the key is present but is not a table.
    """
    value: Any | None = table.get(key)
    if value is None:
        return {}
    if not is_toml_table(value):
        raise ConfigError(f"'{key}' must be a table, got {type(value).__name__}")
    return value


def get_string_value(table: TomlTable, key: str, default: str = "") -> str:
    """Extract a string value from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.
        default (str): Value returned when the key is missing.

    Returns:
        str: The string value, or ``default``.

    Raises:
        ConfigError: If the key is present but is not a string.
    """
    value: Any | None = table.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string, got {value!r}")
    return value


def get_bool_value(table: TomlTable, key: str, default: bool = False) -> bool:
    """Extract a boolean value from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.
        default (bool): Value returned when the key is missing.

    Returns:
        bool: The boolean value, or ``default``.

    Raises:
        ConfigError: If the key is present but is not a boolean.
    """
    value: Any | None = table.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be a boolean, got {value!r}")
    return value


def get_list_value(table: TomlTable, key: str, default: list[str] | None = None) -> list[str]:
    """Extract a list of strings from a TOML table.

    A single string is accepted as a one-element list.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.
        default (list[str] | None): Value returned when the key is missing.

    Returns:
        list[str]: A new list with the values.

    Raises:
        ConfigError: If the value is neither a string nor a list of strings.
    """
    value: Any | None = table.get(key)
    if value is None:
        return list(default or [])
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(x, str) for x in cast("list[Any]", value)):
        return list(cast("list[str]", value))
    raise ConfigError(f"'{key}' must be a list of strings, got {value!r}")


def extract_tool_table(doc: TomlTable) -> TomlTable | None:
    """Return the ``[tool.wheelwright]`` table of a parsed ``pyproject.toml``.

    Args:
        doc (TomlTable): Parsed ``pyproject.toml`` document.

    Returns:
        TomlTable | None: The table, or ``None`` if the document has none.
    """
    tool: TomlTable = get_table_value(doc, Toml.SECTION_TOOL)
    if Toml.SECTION_TOOL_WHEELWRIGHT not in tool:
        return None
    return get_table_value(tool, Toml.SECTION_TOOL_WHEELWRIGHT)


def read_project_name(pyproject: Path) -> str | None:
    """Read ``[project].name`` from a ``pyproject.toml``.

    Args:
        pyproject (Path): Path to the extension package's ``pyproject.toml``.

    Returns:
        str | None: The declared distribution name, or ``None`` if absent.
    """
    if not pyproject.is_file():
        logger.debug("No pyproject.toml at %s", pyproject)
        return None
    project: TomlTable = get_table_value(load_toml_dict(pyproject), Toml.SECTION_PROJECT)
    name: str = get_string_value(project, Toml.KEY_PROJECT_NAME)
    return name or None
