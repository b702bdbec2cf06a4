# topmark:header:start
#
#   project      : Wheelwright
#   file         : keys.py
#   file_relpath : src/wheelwright/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML key names for Wheelwright project settings.

These constants are the external settings API as it appears in ``wheelwright.toml``
and in ``[tool.wheelwright]`` inside ``pyproject.toml``. Renaming or removing a key
is a breaking change. CLI option names are defined separately by the click command.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML keys used by the ``[tool.wheelwright]`` table.

    The ordering mirrors `wheelwright.config.io.load_defaults_dict`.
    """

    # Layout
    KEY_PACKAGE_DIR: Final[str] = "package_dir"
    KEY_DIST_DIR: Final[str] = "dist_dir"
    KEY_DISTRIBUTION: Final[str] = "distribution"

    # Dependency patch
    KEY_MANIFEST: Final[str] = "manifest"
    KEY_PATCH_MARKER: Final[str] = "patch_marker"
    KEY_DEPENDENCY: Final[str] = "dependency"
    KEY_DEPENDENCY_PATH: Final[str] = "dependency_path"
    KEY_REGISTRY: Final[str] = "registry"

    # Environment
    KEY_VENV_DIR: Final[str] = "venv_dir"
    KEY_REQUIREMENTS: Final[str] = "requirements"
    KEY_COMPILER_FLAGS_ENV: Final[str] = "compiler_flags_env"
    KEY_COMPILER_FLAGS: Final[str] = "compiler_flags"

    # License
    KEY_LICENSE_SOURCE: Final[str] = "license_source"
    KEY_LICENSE_TARGET: Final[str] = "license_target"

    # Checks
    KEY_TEST_PATHS: Final[str] = "test_paths"
    KEY_LINT_PATHS: Final[str] = "lint_paths"

    # Documentation
    KEY_DOCS_DIR: Final[str] = "docs_dir"
    KEY_DOCS_BUILD_DIR: Final[str] = "docs_build_dir"
    KEY_DOCS_STRICT: Final[str] = "docs_strict"
    KEY_WHEEL_PLATFORM: Final[str] = "wheel_platform"

    # [project] table of the extension package's own pyproject.toml
    SECTION_PROJECT: Final[str] = "project"
    KEY_PROJECT_NAME: Final[str] = "name"

    # [tool] table of pyproject.toml
    SECTION_TOOL: Final[str] = "tool"
    SECTION_TOOL_WHEELWRIGHT: Final[str] = "wheelwright"
