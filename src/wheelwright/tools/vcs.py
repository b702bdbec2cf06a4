# topmark:header:start
#
#   project      : Wheelwright
#   file         : vcs.py
#   file_relpath : src/wheelwright/tools/vcs.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Version-control collaborator.

Two operations are needed from version control:
    - restore a tracked file to its last committed content (reverts the manifest
      patch), and
    - tell whether a tracked file differs from its committed content (verifies the
      license copy).

`GitVcs` implements both on top of a `wheelwright.tools.runner.ToolRunner`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from wheelwright.config.logging import get_logger
from wheelwright.core.errors import ToolFailure
from wheelwright.tools.runner import invoke

if TYPE_CHECKING:
    from pathlib import Path

    from wheelwright.config.logging import WheelwrightLogger
    from wheelwright.tools.runner import ToolResult, ToolRunner

logger: WheelwrightLogger = get_logger(__name__)


class Vcs(Protocol):
    """Version-control operations used by a release run."""

    def restore(self, path: Path) -> None:
        """Restore ``path`` to its last committed content."""
        ...

    def is_unmodified(self, path: Path) -> bool:
        """Return whether ``path`` matches its last committed content."""
        ...


class GitVcs:
    """`Vcs` backed by the ``git`` command line.

    Args:
        runner (ToolRunner): Runner used for the ``git`` invocations.
        root (Path): Working tree root (``git`` runs from here).
    """

    def __init__(self, runner: ToolRunner, root: Path) -> None:
        self.runner = runner
        self.root = root

    def restore(self, path: Path) -> None:
        """Run ``git checkout HEAD -- <path>``.

        The file is restored from the last commit, not from the index, so a patch
        staged during the run is discarded too. Restoring an unmodified file is a no-op.

        Raises:
            ToolFailure: If git fails (e.g. the file is untracked).
        """
        argv: list[str] = ["git", "checkout", "HEAD", "--", str(path)]
        invoke(self.runner, "git checkout", argv, cwd=self.root)

    def is_unmodified(self, path: Path) -> bool:
        """Run ``git diff --quiet --exit-code -- <path>``.

        Returns:
            bool: ``True`` for exit status 0, ``False`` for 1.

        Raises:
            ToolFailure: For any other exit status (git error).
        """
        argv: list[str] = ["git", "diff", "--quiet", "--exit-code", "--", str(path)]
        result: ToolResult = self.runner.run(argv, cwd=self.root)
        if result.returncode in (0, 1):
            logger.debug("git diff %s: %s", path, "clean" if result.ok else "modified")
            return result.ok
        raise ToolFailure(
            "git diff",
            argv=result.argv,
            returncode=result.returncode,
            output=result.output,
        )
