# topmark:header:start
#
#   project      : Wheelwright
#   file         : console.py
#   file_relpath : src/wheelwright/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-backed program output for release runs.

`ClickConsole` writes step banners, tool output and the run summary with
`click.echo`/`click.secho`. Color is decided once per run (``--no-color``, ``NO_COLOR``,
TTY detection) and applied to every write through ``color=``.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Any

import click

from wheelwright.cli_shared.console_api import BANNER_PREFIX, ConsoleLike

if TYPE_CHECKING:
    from typing import TextIO


class ClickConsole(ConsoleLike):
    """Console writing to stdout/stderr through Click.

    Args:
        enable_color (bool): Emit ANSI styling when True.
        out (TextIO | None): Stream for program output (defaults to `sys.stdout`).
        err (TextIO | None): Stream for warnings and errors (defaults to `sys.stderr`).
    """

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color: bool = enable_color
        self.out: TextIO = out or sys.stdout
        self.err: TextIO = err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write to stdout."""
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write a yellow warning to stderr."""
        click.secho(text, nl=nl, file=self.err, color=self.enable_color, fg="yellow")

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write a red error to stderr."""
        click.secho(text, nl=nl, file=self.err, color=self.enable_color, fg="bright_red")

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` wrapped by `click.style`, or unchanged without color."""
        return click.style(text, **style_kwargs) if self.enable_color else text

    def banner(self, step: str) -> None:
        """Print ``==> <step>`` in bold cyan."""
        self.print(self.styled(f"{BANNER_PREFIX} {step}", fg="cyan", bold=True))

    def tool_output(self, chunk: str) -> None:
        """Echo a streamed chunk as is; `click.echo` flushes after every write."""
        self.print(chunk, nl=False)
