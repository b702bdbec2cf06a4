# topmark:header:start
#
#   project      : Wheelwright
#   file         : runner.py
#   file_relpath : src/wheelwright/tools/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""External tool invocation.

Every call into an external program (git, pip, maturin, cargo, pytest, sphinx) goes
through a `ToolRunner`. The production implementation, `SubprocessRunner`, streams
the merged stdout/stderr line by line while capturing it, so a failing tool's
diagnostics are both visible live and available verbatim in the raised
`wheelwright.core.errors.ToolFailure`.

Tests substitute a recording runner implementing the same protocol.
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Protocol

from wheelwright.config.logging import get_logger
from wheelwright.core.errors import ToolFailure

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from wheelwright.config.logging import WheelwrightLogger

logger: WheelwrightLogger = get_logger(__name__)

# Exit status reported when the executable itself cannot be started (shell convention).
EXIT_COMMAND_NOT_FOUND: int = 127


@dataclass(frozen=True)
class ToolResult:
    """Outcome of a single tool invocation.

    Attributes:
        argv (tuple[str, ...]): The command line that was run.
        returncode (int): The exit status.
        output (str): Combined stdout/stderr, verbatim.
    """

    argv: tuple[str, ...]
    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        """Whether the tool exited with status 0."""
        return self.returncode == 0


class ToolRunner(Protocol):
    """Minimal interface for running external tools."""

    def run(
        self,
        argv: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
    ) -> ToolResult:
        """Run ``argv`` in ``cwd`` with ``env`` layered over the process environment."""
        ...


class SubprocessRunner:
    """Run tools with `subprocess`, streaming and capturing their output.

    Args:
        echo (Callable[[str], None] | None): Receives each output line (with its line
            ending) as it is produced. ``None`` captures silently.

    Attributes:
        echo (Callable[[str], None] | None): The line sink, if any.
    """

    def __init__(self, *, echo: Callable[[str], None] | None = None) -> None:
        self.echo = echo

    @property
    def streams_output(self) -> bool:
        """Whether tool output is shown while the tool runs."""
        return self.echo is not None

    def run(
        self,
        argv: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
    ) -> ToolResult:
        """Run ``argv`` to completion.

        Args:
            argv (Sequence[str]): Command line; ``argv[0]`` is resolved via ``PATH``.
            cwd (Path): Working directory.
            env (Mapping[str, str] | None): Variables layered over ``os.environ``.

        Returns:
            ToolResult: Exit status and captured output. An executable that cannot be
            started yields status 127 and the OS error as output.
        """
        command: tuple[str, ...] = tuple(str(a) for a in argv)
        full_env: dict[str, str] = {**os.environ, **(env or {})}
        logger.info("Running: %s (cwd=%s)", " ".join(command), cwd)

        try:
            process = subprocess.Popen(
                command,
                cwd=str(cwd),
                env=full_env,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except OSError as e:
            logger.error("Cannot start %s: %s", command[0], e)
            return ToolResult(argv=command, returncode=EXIT_COMMAND_NOT_FOUND, output=f"{e}\n")

        chunks: list[str] = []
        assert process.stdout is not None
        try:
            with process.stdout:
                for line in process.stdout:
                    chunks.append(line)
                    if self.echo is not None:
                        self.echo(line)
        except BaseException:
            # The child must not outlive a failed read or echo.
            process.kill()
            process.wait()
            raise
        returncode: int = process.wait()
        logger.debug("%s exited with status %d", command[0], returncode)
        return ToolResult(argv=command, returncode=returncode, output="".join(chunks))


def invoke(
    runner: ToolRunner,
    label: str,
    argv: Sequence[str],
    *,
    cwd: Path,
    env: Mapping[str, str] | None = None,
) -> ToolResult:
    """Run a tool and raise on a non-zero exit status.

    Args:
        runner (ToolRunner): The runner to delegate to.
        label (str): Human-readable name used in the failure message.
        argv (Sequence[str]): Command line.
        cwd (Path): Working directory.
        env (Mapping[str, str] | None): Extra environment variables.

    Returns:
        ToolResult: The successful result.

    Raises:
        ToolFailure: If the tool exits with a non-zero status.
    """
    result: ToolResult = runner.run(argv, cwd=cwd, env=env)
    if not result.ok:
        raise ToolFailure(
            label,
            argv=result.argv,
            returncode=result.returncode,
            output=result.output,
        )
    return result
