# topmark:header:start
#
#   project      : Wheelwright
#   file         : __init__.py
#   file_relpath : src/wheelwright/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Wheelwright package.

Wheelwright is a release-build orchestrator for native-extension Python packages. It
builds the source distribution, temporarily patches the binding crate's manifest to
use the in-tree core dependency, builds and tests the wheel, runs the optional lint and
documentation checks, and always reverts the manifest before exiting.
"""

from __future__ import annotations
