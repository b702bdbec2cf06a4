# topmark:header:start
#
#   project      : Wheelwright
#   file         : __init__.py
#   file_relpath : src/wheelwright/manifest/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Dependency manifest patch state: detection, guard checks and the patch/unpatch pair."""

from __future__ import annotations

from wheelwright.manifest.guard import ManifestGuard
from wheelwright.manifest.state import PatchState

__all__ = [
    "ManifestGuard",
    "PatchState",
]
