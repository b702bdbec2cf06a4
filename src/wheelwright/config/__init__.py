# topmark:header:start
#
#   project      : Wheelwright
#   file         : __init__.py
#   file_relpath : src/wheelwright/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Wheelwright configuration: run-time switches, project settings and logging.

Public entry points:
    - `BuildConfig`: switches resolved once from the command line.
    - `ProjectSettings` / `load_settings`: project layout from TOML.
"""

from __future__ import annotations

from wheelwright.config.model import BuildConfig, ProjectSettings, load_settings

__all__ = [
    "BuildConfig",
    "ProjectSettings",
    "load_settings",
]
