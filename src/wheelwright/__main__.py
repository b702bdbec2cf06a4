# topmark:header:start
#
#   project      : Wheelwright
#   file         : __main__.py
#   file_relpath : src/wheelwright/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running Wheelwright via ``python -m wheelwright``.

Delegates to :func:`wheelwright.cli.main.cli`, the single authoritative CLI entry
point regardless of how Wheelwright is launched.

Examples:
    Run a quick release check without documentation::

        python -m wheelwright --quick-check --no-docs
"""

from __future__ import annotations

from wheelwright.cli.main import cli

if __name__ == "__main__":
    cli()
