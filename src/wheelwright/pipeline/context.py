# topmark:header:start
#
#   project      : Wheelwright
#   file         : context.py
#   file_relpath : src/wheelwright/pipeline/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Mutable state threaded through one release run.

`BuildContext` bundles the immutable inputs (`BuildConfig`, `ProjectSettings`), the
collaborators (tool runner, manifest guard, console) and the few things the run
learns as it goes: the tool environment produced by the bootstrap and the step
results recorded so far. The manifest state is never cached here; the guard reads it
from disk.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from wheelwright.config.logging import get_logger

if TYPE_CHECKING:
    from wheelwright.cli_shared.console_api import ConsoleLike
    from wheelwright.config.logging import WheelwrightLogger
    from wheelwright.config.model import BuildConfig, ProjectSettings
    from wheelwright.manifest.guard import ManifestGuard
    from wheelwright.tools.runner import ToolRunner

    from .outcomes import StageResult

logger: WheelwrightLogger = get_logger(__name__)


@dataclass
class BuildContext:
    """Per-run state shared by the driver and the stages.

    Attributes:
        config (BuildConfig): Run switches.
        settings (ProjectSettings): Project layout.
        runner (ToolRunner): Runner for every external tool.
        guard (ManifestGuard): Guard over the dependency manifest.
        console (ConsoleLike): Program output.
        tool_env (dict[str, str]): Extra environment for tool invocations.
        results (list[StageResult]): Recorded step results, in order.
    """

    config: BuildConfig
    settings: ProjectSettings
    runner: ToolRunner
    guard: ManifestGuard
    console: ConsoleLike
    tool_env: dict[str, str] = field(default_factory=dict)
    results: list[StageResult] = field(default_factory=list)

    def record(self, result: StageResult) -> None:
        """Append ``result`` to the run's results."""
        logger.debug("Step %s: %s (%.2fs)", result.name, result.status.value, result.duration)
        self.results.append(result)

    @property
    def halted(self) -> bool:
        """Whether a step has failed (remaining stages must not run)."""
        return any(r.failed for r in self.results)
