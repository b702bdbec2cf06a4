# topmark:header:start
#
#   project      : Wheelwright
#   file         : base.py
#   file_relpath : src/wheelwright/pipeline/stages/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Base class for class-based pipeline stages.

The driver invokes stages as *callables*. `BaseStage` implements the common
lifecycle:

    result = stage(ctx)  # internally: enabled → verify → preconditions → run → postconditions

Design goals
------------
- Single place for timing, banners and the conversion of typed failures into results.
- Stages contain no branching beyond their precondition checks.
- Every guard check happens immediately before the stage that depends on it.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from wheelwright.config.logging import get_logger
from wheelwright.core.errors import ArtifactNotFoundError, WheelwrightError
from wheelwright.pipeline.outcomes import StageResult
from wheelwright.pipeline.status import StageStatus
from wheelwright.tools.runner import invoke

if TYPE_CHECKING:
    from pathlib import Path

    from wheelwright.config.logging import WheelwrightLogger
    from wheelwright.config.model import BuildConfig
    from wheelwright.manifest.state import PatchState
    from wheelwright.pipeline.context import BuildContext
    from wheelwright.tools.commands import ToolCommand
    from wheelwright.tools.runner import ToolResult

logger: WheelwrightLogger = get_logger(__name__)


@dataclass
class BaseStage:
    """Reusable foundation for pipeline stages.

    Subclass this to implement a concrete stage by overriding ``run()`` and, where
    needed, ``enabled()``, ``check_preconditions()`` and ``check_postconditions()``.
    Do not override ``__call__``.

    Attributes:
        name (str): Stable stage name used in plans, banners and reports.
        requires (PatchState): Manifest state the stage must run under.
    """

    name: str
    requires: PatchState

    def __call__(self, ctx: BuildContext) -> StageResult:
        """Invoke the stage lifecycle and record the result in ``ctx``.

        Args:
            ctx (BuildContext): The mutable build context.

        Returns:
            StageResult: ``SKIPPED`` when disabled, otherwise ``SUCCEEDED`` or ``FAILED``.
        """
        if not self.enabled(ctx.config):
            logger.info("Stage %s disabled by the run configuration", self.name)
            result = StageResult(self.name, StageStatus.SKIPPED)
            ctx.record(result)
            return result

        ctx.console.banner(self.name)
        start: float = time.perf_counter()
        failure: WheelwrightError | None = None
        try:
            ctx.guard.verify(self.requires)
            self.check_preconditions(ctx)
            self.run(ctx)
            self.check_postconditions(ctx)
        except WheelwrightError as e:
            logger.error("Stage %s failed: %s", self.name, e)
            failure = e

        result = StageResult(
            self.name,
            StageStatus.FAILED if failure is not None else StageStatus.SUCCEEDED,
            failure=failure,
            duration=time.perf_counter() - start,
        )
        ctx.record(result)
        return result

    def enabled(self, config: BuildConfig) -> bool:
        """Return whether the run configuration selects this stage.

        Default: ``True`` (always run).
        """
        return True

    def check_preconditions(self, ctx: BuildContext) -> None:
        """Raise a `WheelwrightError` if the stage's inputs are missing (default: no-op)."""
        pass

    def run(self, ctx: BuildContext) -> None:
        """Perform the stage's work by invoking external tools.

        Subclasses must implement this method.

        Args:
            ctx (BuildContext): The mutable build context.
        """
        pass

    def check_postconditions(self, ctx: BuildContext) -> None:
        """Raise a `WheelwrightError` if the stage's outputs are wrong (default: no-op)."""
        pass

    def invoke(self, ctx: BuildContext, command: ToolCommand, *, cwd: Path) -> ToolResult:
        """Run ``command`` with the run's tool environment; raise on failure."""
        return invoke(ctx.runner, command.label, command.argv, cwd=cwd, env=ctx.tool_env)


def find_artifacts(directory: Path, pattern: str) -> list[Path]:
    """Return the sorted files in ``directory`` matching the glob ``pattern``."""
    return sorted(p for p in directory.glob(pattern) if p.is_file())


def require_artifacts(
    directory: Path,
    pattern: str,
    *,
    exactly_one: bool = False,
) -> list[Path]:
    """Return the artifacts matching ``pattern``, raising when none (or not exactly one) exist.

    Args:
        directory (Path): Directory searched.
        pattern (str): Glob pattern relative to ``directory``.
        exactly_one (bool): Require a single match instead of at least one.

    Returns:
        list[Path]: The matching artifacts.

    Raises:
        ArtifactNotFoundError: If the requirement is not met.
    """
    matches: list[Path] = find_artifacts(directory, pattern)
    if not matches:
        raise ArtifactNotFoundError(f"No artifact matches {directory / pattern}", pattern=pattern)
    if exactly_one and len(matches) > 1:
        names: str = ", ".join(p.name for p in matches)
        raise ArtifactNotFoundError(
            f"Expected exactly one artifact matching {directory / pattern}, found {len(matches)}: "
            f"{names}",
            pattern=pattern,
            matches=matches,
        )
    logger.debug("Artifacts matching %s: %s", pattern, matches)
    return matches
