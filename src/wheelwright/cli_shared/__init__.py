# topmark:header:start
#
#   project      : Wheelwright
#   file         : __init__.py
#   file_relpath : src/wheelwright/cli_shared/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Framework-agnostic pieces shared by the CLI and the CLI-free engine."""

from __future__ import annotations
