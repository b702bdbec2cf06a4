# topmark:header:start
#
#   project      : Wheelwright
#   file         : constants.py
#   file_relpath : src/wheelwright/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Wheelwright Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

WHEELWRIGHT_VERSION: str = get_version("wheelwright")

PROG_NAME: str = "wheelwright"

# Settings sources, in increasing precedence:
PYPROJECT_TOML_NAME: str = "pyproject.toml"
WHEELWRIGHT_TOML_NAME: str = "wheelwright.toml"

# Environment variable consulted for the internal log level:
LOG_LEVEL_ENV: str = "WHEELWRIGHT_LOG_LEVEL"

DEFAULT_PATCH_MARKER: str = "# wheelwright:patch-marker"
