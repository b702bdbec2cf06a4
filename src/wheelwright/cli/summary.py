# topmark:header:start
#
#   project      : Wheelwright
#   file         : summary.py
#   file_relpath : src/wheelwright/cli/summary.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Human-readable rendering of stage plans and run reports.

These helpers only format and print through a `ConsoleLike`; they never decide the
exit status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wheelwright.core.errors import ToolFailure
from wheelwright.pipeline.contracts import UNPATCH_STEP
from wheelwright.pipeline.pipelines import plan_stages

if TYPE_CHECKING:
    from wheelwright.cli_shared.console_api import ConsoleLike
    from wheelwright.config.model import BuildConfig, ProjectSettings
    from wheelwright.pipeline.outcomes import RunReport, StageResult


def render_plan(console: ConsoleLike, config: BuildConfig, settings: ProjectSettings) -> None:
    """Print the steps a run with ``config`` would execute, without executing them."""
    console.print(console.styled("Release plan (dry run)", bold=True))
    for index, name in enumerate(plan_stages(config), start=1):
        console.print(f"  {index}. {name}")
    console.print()
    console.print(f"  project root : {settings.root}")
    console.print(f"  distribution : {settings.distribution}")
    console.print(f"  manifest     : {settings.manifest}")
    console.print(f"  dist dir     : {settings.dist_dir}")
    console.print(f"  interpreter  : {config.interpreter_path}")
    if config.verbosity_level > 0:
        sources: str = ", ".join(str(p) for p in settings.sources) or "(defaults only)"
        console.print(f"  settings     : {sources}")


def _result_line(result: StageResult, *, color: bool) -> str:
    label: str = f"{result.status.value:<10}"
    status: str = result.status.color(label) if color else label
    timing: str = f"{result.duration:6.2f}s" if result.ran else ""
    return f"  {result.name:<14} {status} {timing}".rstrip()


def render_report(console: ConsoleLike, report: RunReport, *, output_shown: bool) -> None:
    """Print the step table, the final manifest state and the cause of a failure.

    Args:
        console (ConsoleLike): Output sink.
        report (RunReport): The finished run.
        output_shown (bool): Whether tool output was streamed while tools ran. When not,
            the failing tool's captured output is printed verbatim.
    """
    color: bool = console.enable_color
    console.print()
    console.print(console.styled("Summary", bold=True))
    for result in report.results:
        console.print(_result_line(result, color=color))

    state: str = report.final_state.render(enabled=color) if report.final_state else "unknown"
    console.print(f"  manifest: {state}")

    failed: StageResult | None = report.failed_result
    if failed is None:
        console.print(console.styled("Release build succeeded.", fg="green", bold=True))
        return

    console.error(f"Release build failed in step '{failed.name}': {failed.failure}")
    failure = failed.failure
    if isinstance(failure, ToolFailure):
        console.error(f"  command: {' '.join(failure.argv)}")
        if failure.output and not output_shown:
            console.print(failure.output, nl=not failure.output.endswith("\n"))

    revert = report.result_for(UNPATCH_STEP)
    if revert is not None and revert.failed and revert is not failed:
        console.error(f"Reverting the manifest also failed: {revert.failure}")
