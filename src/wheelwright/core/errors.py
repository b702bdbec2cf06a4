# topmark:header:start
#
#   project      : Wheelwright
#   file         : errors.py
#   file_relpath : src/wheelwright/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Error taxonomy for release runs.

Every expected failure of a release run is a `WheelwrightError`. Stages raise these
internally; the stage lifecycle converts them into failed stage results so the driver
can short-circuit uniformly and still run its cleanup. The CLI layer wraps them in
Click exceptions only at the very edge.

Usage:
    ```python
    pattern = "pkg-*linux*.whl"
    raise ArtifactNotFoundError(f"no wheel matches {pattern}", pattern=pattern, matches=())
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class WheelwrightError(Exception):
    """Base class for all release-run errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message: str = message

    def __str__(self) -> str:
        return self.message


class ConfigError(WheelwrightError):
    """Invalid command line or settings (missing/invalid/malformed value)."""


class UnrecognizedFlagError(ConfigError):
    """A command-line token that is not a recognized option.

    Attributes:
        token (str): The offending token, verbatim.
    """

    def __init__(self, token: str) -> None:
        super().__init__(f"Unrecognized flag: {token}")
        self.token: str = token


class InvariantViolation(WheelwrightError):
    """A guard check failed (wrong manifest patch state, diverging license copy)."""


class PathNotFoundError(WheelwrightError):
    """An expected file or directory does not exist.

    Attributes:
        path (Path): The missing path.
    """

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message)
        self.path: Path = path


class ArtifactNotFoundError(WheelwrightError):
    """A required build artifact is missing (or ambiguous where exactly one is required).

    Attributes:
        pattern (str): The glob pattern that was searched.
        matches (tuple[Path, ...]): The paths that matched, if any.
    """

    def __init__(self, message: str, *, pattern: str, matches: Sequence[Path] = ()) -> None:
        super().__init__(message)
        self.pattern: str = pattern
        self.matches: tuple[Path, ...] = tuple(matches)


class ToolFailure(WheelwrightError):
    """A delegated tool exited with a non-zero status.

    Attributes:
        label (str): Human-readable name of the invocation (e.g. "cargo clippy").
        argv (tuple[str, ...]): The command line that was run.
        returncode (int): The tool's exit status.
        output (str): The tool's combined stdout/stderr, verbatim.
    """

    def __init__(
        self,
        label: str,
        *,
        argv: Sequence[str],
        returncode: int,
        output: str = "",
    ) -> None:
        super().__init__(f"{label} failed with exit status {returncode}")
        self.label: str = label
        self.argv: tuple[str, ...] = tuple(argv)
        self.returncode: int = returncode
        self.output: str = output
