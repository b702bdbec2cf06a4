# topmark:header:start
#
#   project      : Wheelwright
#   file         : fakes.py
#   file_relpath : tests/fakes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Recording test doubles for the release driver's collaborators.

- `FakeRunner` implements `ToolRunner`: it records every invocation, can be scripted
  to fail (by command-line fragment) and runs side-effect hooks that fake the files a
  real tool would produce (sdist archives, wheels).
- `FakeVcs` implements `Vcs` against an in-memory "last commit".
- `FakeConsole` implements `ConsoleLike` and keeps every printed line.
"""

from __future__ import annotations

import io
import tarfile
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from wheelwright.cli_shared.console_api import BANNER_PREFIX
from wheelwright.tools.runner import ToolResult

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from wheelwright.core.errors import WheelwrightError


@dataclass(frozen=True)
class Call:
    """One recorded tool invocation."""

    argv: tuple[str, ...]
    cwd: Path
    env: dict[str, str]

    @property
    def command(self) -> str:
        """The command line joined with single spaces."""
        return " ".join(self.argv)


Hook = Callable[[Call], None]


@dataclass
class FakeRunner:
    """Scriptable `ToolRunner`.

    Attributes:
        calls (list[Call]): Every invocation, in order.
        failures (dict[str, tuple[int, str]]): Command fragment → (exit status, output).
        hooks (list[tuple[str, Hook]]): Command fragment → side effect run before returning.
        streams_output (bool): Mirrors `SubprocessRunner.streams_output`.
    """

    calls: list[Call] = field(default_factory=lambda: [])
    failures: dict[str, tuple[int, str]] = field(default_factory=lambda: {})
    hooks: list[tuple[str, Hook]] = field(default_factory=lambda: [])
    streams_output: bool = False

    def fail_on(self, fragment: str, *, returncode: int = 1, output: str = "") -> None:
        """Make every command containing ``fragment`` exit with ``returncode``."""
        self.failures[fragment] = (returncode, output or f"{fragment}: simulated failure\n")

    def on(self, fragment: str, hook: Hook) -> None:
        """Run ``hook`` for every command containing ``fragment``."""
        self.hooks.append((fragment, hook))

    def run(
        self,
        argv: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
    ) -> ToolResult:
        """Record the call, apply hooks and failures, and return a result."""
        call = Call(tuple(str(a) for a in argv), cwd, dict(env or {}))
        self.calls.append(call)
        for fragment, (returncode, output) in self.failures.items():
            if fragment in call.command:
                return ToolResult(argv=call.argv, returncode=returncode, output=output)
        for fragment, hook in self.hooks:
            if fragment in call.command:
                hook(call)
        return ToolResult(argv=call.argv, returncode=0)

    def commands(self) -> list[str]:
        """Return the recorded command lines."""
        return [c.command for c in self.calls]

    def called(self, fragment: str) -> bool:
        """Whether any recorded command contains ``fragment``."""
        return any(fragment in c.command for c in self.calls)


class FakeVcs:
    """In-memory `Vcs`: `commit` snapshots a file, `restore` writes the snapshot back.

    Attributes:
        committed (dict[Path, bytes]): Last committed content per path.
        restored (list[Path]): Paths passed to `restore`, in order.
        restore_error (WheelwrightError | None): Raised by `restore` when set.
    """

    def __init__(self) -> None:
        self.committed: dict[Path, bytes] = {}
        self.restored: list[Path] = []
        self.restore_error: WheelwrightError | None = None

    def commit(self, *paths: Path) -> None:
        """Record the current content of ``paths`` as committed."""
        for path in paths:
            self.committed[path] = path.read_bytes()

    def restore(self, path: Path) -> None:
        """Write the committed content of ``path`` back to disk."""
        self.restored.append(path)
        if self.restore_error is not None:
            raise self.restore_error
        path.write_bytes(self.committed[path])

    def is_unmodified(self, path: Path) -> bool:
        """Whether ``path`` matches its committed content."""
        return path.is_file() and self.committed.get(path) == path.read_bytes()


class FakeConsole:
    """`ConsoleLike` that keeps output in memory (``out`` and ``err`` separately)."""

    def __init__(self, *, enable_color: bool = False) -> None:
        self.enable_color: bool = enable_color
        self.out: list[str] = []
        self.err: list[str] = []

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Record a stdout message."""
        self.out.append(text + ("\n" if nl else ""))

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Record a warning."""
        self.err.append(text + ("\n" if nl else ""))

    def error(self, text: str, *, nl: bool = True) -> None:
        """Record an error."""
        self.err.append(text + ("\n" if nl else ""))

    def styled(self, text: str, **style_kwargs: object) -> str:
        """Return ``text`` unchanged."""
        return text

    def banner(self, step: str) -> None:
        """Record a step banner as ``==> <step>``."""
        self.print(f"{BANNER_PREFIX} {step}")

    def tool_output(self, chunk: str) -> None:
        """Record streamed tool output verbatim."""
        self.print(chunk, nl=False)

    @property
    def stdout(self) -> str:
        """Everything printed to stdout."""
        return "".join(self.out)

    @property
    def stderr(self) -> str:
        """Everything printed to stderr."""
        return "".join(self.err)


def write_sdist(archive: Path, members: Mapping[str, str]) -> Path:
    """Write a gzipped tarball with the given ``{member name: text}`` files."""
    archive.parent.mkdir(parents=True, exist_ok=True)
    with tarfile.open(archive, "w:gz") as tar:
        for name, text in members.items():
            data: bytes = text.encode("utf-8")
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
    return archive


def write_wheel(dist_dir: Path, prefix: str, platform: str, *, tag: str = "cp312") -> Path:
    """Create an (empty) wheel file named like maturin would name it."""
    dist_dir.mkdir(parents=True, exist_ok=True)
    wheel: Path = dist_dir / f"{prefix}-1.0.0-{tag}-{tag}-{platform}_x86_64.whl"
    wheel.write_bytes(b"")
    return wheel
