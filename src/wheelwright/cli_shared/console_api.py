# topmark:header:start
#
#   project      : Wheelwright
#   file         : console_api.py
#   file_relpath : src/wheelwright/cli_shared/console_api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Program-output surface shared by the release driver and the CLI.

The driver never imports Click. It announces steps and forwards tool output through a
`ConsoleLike`; the CLI supplies the Click-backed implementation and tests supply an
in-memory one. Diagnostics go through logging instead.
"""

from __future__ import annotations

from typing import Protocol

# Prefix of the line announcing a release step.
BANNER_PREFIX: str = "==>"


class ConsoleLike(Protocol):
    """What the release driver and the summary renderers print through."""

    enable_color: bool

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write a line (or a fragment when ``nl`` is false) to stdout."""
        ...

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a warning to stderr."""
        ...

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error to stderr."""
        ...

    def styled(self, text: str, **style_kwargs: object) -> str:
        """Return ``text`` styled for the terminal, or unchanged without color."""
        ...

    def banner(self, step: str) -> None:
        """Announce the start of release step ``step``."""
        ...

    def tool_output(self, chunk: str) -> None:
        """Forward a chunk of a tool's output verbatim (it carries its own newline)."""
        ...
