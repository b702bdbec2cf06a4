# topmark:header:start
#
#   project      : Wheelwright
#   file         : engine.py
#   file_relpath : src/wheelwright/pipeline/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Release driver (engine layer).

`run_release` executes one release run in the fixed order

    bootstrap → sdist → [patch → wheel → install-test → lint → docs → unpatch]

and returns a `RunReport`. The bracketed part is skipped for ``--sdist-only`` and runs
inside `ManifestGuard.patched`, so the manifest is reverted on every exit path once
patching was attempted.

Design goals:
  - No CLI dependencies: presentation (summaries, exit) belongs to ``wheelwright.cli``.
    Stage banners go through the injected console.
  - Structured results: expected failures become failed `StageResult`s, never
    exceptions. Unexpected exceptions (bugs) still propagate, after the revert.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from wheelwright.config.logging import get_logger
from wheelwright.core.errors import WheelwrightError
from wheelwright.env.bootstrap import bootstrap_environment
from wheelwright.manifest.guard import ManifestGuard
from wheelwright.pipeline.context import BuildContext
from wheelwright.pipeline.contracts import BOOTSTRAP_STEP, PATCH_STEP, UNPATCH_STEP
from wheelwright.pipeline.outcomes import RunReport, StageResult
from wheelwright.pipeline.pipelines import PATCHED_PIPELINE, PRE_PATCH_PIPELINE
from wheelwright.pipeline.runner import run as run_stages
from wheelwright.pipeline.status import StageStatus

if TYPE_CHECKING:
    from wheelwright.cli_shared.console_api import ConsoleLike
    from wheelwright.config.logging import WheelwrightLogger
    from wheelwright.config.model import BuildConfig, ProjectSettings
    from wheelwright.env.bootstrap import BootstrapResult
    from wheelwright.manifest.state import PatchState
    from wheelwright.tools.runner import ToolRunner
    from wheelwright.tools.vcs import Vcs

logger: WheelwrightLogger = get_logger(__name__)


def _result(name: str, failure: WheelwrightError | None, started: float) -> StageResult:
    return StageResult(
        name,
        StageStatus.FAILED if failure is not None else StageStatus.SUCCEEDED,
        failure=failure,
        duration=time.perf_counter() - started,
    )


def _bootstrap(ctx: BuildContext, vcs: Vcs) -> None:
    """Prepare the environment and check the start invariant (manifest unpatched)."""
    ctx.console.banner(BOOTSTRAP_STEP)
    started: float = time.perf_counter()
    failure: WheelwrightError | None = None
    try:
        env: BootstrapResult = bootstrap_environment(
            ctx.config, ctx.settings, runner=ctx.runner, vcs=vcs
        )
        ctx.tool_env = env.tool_env
        ctx.guard.verify_unpatched()
    except WheelwrightError as e:
        logger.error("Bootstrap failed: %s", e)
        failure = e
    ctx.record(_result(BOOTSTRAP_STEP, failure, started))


def _run_patched(ctx: BuildContext) -> None:
    """Run the patched pipeline inside the scoped patch and record patch/unpatch."""
    guard: ManifestGuard = ctx.guard
    ctx.console.banner(PATCH_STEP)
    started: float = time.perf_counter()
    body_done: float | None = None
    patch_failure: WheelwrightError | None = None

    try:
        with guard.patched():
            ctx.record(_result(PATCH_STEP, None, started))
            try:
                run_stages(ctx, PATCHED_PIPELINE)
            finally:
                body_done = time.perf_counter()
                ctx.console.banner(UNPATCH_STEP)
    except WheelwrightError as e:
        # Raised by patch() itself or, when nothing else failed, by the revert.
        if body_done is None:
            patch_failure = e
            logger.error("Patching failed: %s", e)
        elif e is not guard.revert_error:
            raise

    if body_done is None:
        # patch() failed; the scope still attempted the revert.
        ctx.record(_result(PATCH_STEP, patch_failure, started))
        ctx.console.banner(UNPATCH_STEP)
        body_done = time.perf_counter()

    ctx.record(_result(UNPATCH_STEP, guard.revert_error, body_done))


def _final_state(guard: ManifestGuard) -> PatchState | None:
    try:
        return guard.read_state()
    except WheelwrightError as e:
        logger.warning("Cannot determine the final manifest state: %s", e)
        return None


def run_release(
    config: BuildConfig,
    settings: ProjectSettings,
    *,
    runner: ToolRunner,
    vcs: Vcs,
    console: ConsoleLike,
) -> RunReport:
    """Execute one release run.

    Args:
        config (BuildConfig): Run switches (resolved once from the command line).
        settings (ProjectSettings): Project layout.
        runner (ToolRunner): Runner for every external tool.
        vcs (Vcs): Version control (license check, manifest revert).
        console (ConsoleLike): Program output for stage banners.

    Returns:
        RunReport: Ordered step results, final manifest state and exit code.

    Notes:
        - Failures before the patch (bootstrap, sdist) leave the manifest untouched.
        - ``--sdist-only`` ends after the sdist; the manifest is never written.
        - Once the patch is attempted, the revert runs whatever happens. A revert
          failure fails the run but never replaces an earlier stage failure as the
          reported cause.
    """
    guard = ManifestGuard(settings, vcs)
    ctx = BuildContext(
        config=config,
        settings=settings,
        runner=runner,
        guard=guard,
        console=console,
    )
    patch_attempted: bool = False

    _bootstrap(ctx, vcs)
    if not ctx.halted:
        run_stages(ctx, PRE_PATCH_PIPELINE)
    if ctx.halted:
        logger.info("Aborting before the manifest is patched")
    elif config.sdist_only:
        logger.info("--sdist-only: stopping after the source distribution")
    else:
        patch_attempted = True
        _run_patched(ctx)

    report = RunReport(
        results=tuple(ctx.results),
        final_state=_final_state(guard),
        patch_attempted=patch_attempted,
    )
    logger.info("Release run finished: exit code %d", report.exit_code)
    return report

