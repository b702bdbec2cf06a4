# topmark:header:start
#
#   project      : Wheelwright
#   file         : __init__.py
#   file_relpath : src/wheelwright/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core, CLI-free building blocks shared by every Wheelwright layer.

This package holds the error taxonomy and the process exit codes. It must not import
Click or anything under ``wheelwright.cli``.
"""

from __future__ import annotations
