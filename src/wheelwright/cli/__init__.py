# topmark:header:start
#
#   project      : Wheelwright
#   file         : __init__.py
#   file_relpath : src/wheelwright/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Wheelwright CLI package.

This package holds the Click command, its options and the console/summary output.

Typical usage:
    The console script entry point is defined in ``pyproject.toml`` as::

        [project.scripts]
        wheelwright = "wheelwright.cli.main:cli"
"""

from __future__ import annotations

__all__: list[str] = []
# Do NOT import .main at module import time
