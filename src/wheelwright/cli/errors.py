# topmark:header:start
#
#   project      : Wheelwright
#   file         : errors.py
#   file_relpath : src/wheelwright/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the Wheelwright CLI.

Usage:
    Raise these exceptions in the command to signal errors with standardized
    messages. Every one of them exits with status 1, including usage errors
    (Click's own default for those is 2).

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from wheelwright.core.exit_codes import ExitCode


class WheelwrightCliError(click.ClickException):
    """Base class for Wheelwright CLI errors that are not usage errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text (colorized in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        console = ctx.obj.get("console") if ctx is not None and isinstance(ctx.obj, dict) else None
        if console is None:
            super().show(file)
            return
        console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))


class WheelwrightConfigError(WheelwrightCliError):
    """Error for settings errors (missing/invalid/malformed settings file or value)."""


class WheelwrightUsageError(click.UsageError):
    """Error for command-line invocation errors (unknown flags, stray arguments).

    Attributes:
        token (str | None): The offending token, when a single token is to blame.
    """

    exit_code = ExitCode.FAILURE

    def __init__(
        self,
        message: str,
        ctx: click.Context | None = None,
        *,
        token: str | None = None,
    ) -> None:
        super().__init__(message, ctx=ctx)
        self.token: str | None = token
