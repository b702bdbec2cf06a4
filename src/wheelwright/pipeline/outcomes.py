# topmark:header:start
#
#   project      : Wheelwright
#   file         : outcomes.py
#   file_relpath : src/wheelwright/pipeline/outcomes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Results of a release run.

`StageResult` is what every step (stage or driver step) produces; `RunReport`
collects them in execution order and derives the process `ExitCode`.

The first failed result is the *cause* of a failed run. A failing revert is
recorded after it as a failed ``unpatch`` result and therefore never replaces it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from wheelwright.core.exit_codes import ExitCode
from wheelwright.pipeline.contracts import BOOTSTRAP_STEP
from wheelwright.pipeline.status import StageStatus

if TYPE_CHECKING:
    from wheelwright.core.errors import WheelwrightError
    from wheelwright.manifest.state import PatchState


@dataclass(frozen=True)
class StageResult:
    """Outcome of one step.

    Attributes:
        name (str): Step name (e.g. ``"sdist"``, ``"patch"``).
        status (StageStatus): Succeeded, failed or skipped.
        failure (WheelwrightError | None): The typed failure when ``status`` is FAILED.
        duration (float): Wall-clock seconds spent in the step.
    """

    name: str
    status: StageStatus
    failure: WheelwrightError | None = None
    duration: float = 0.0

    @property
    def failed(self) -> bool:
        """Whether the step failed."""
        return self.status == StageStatus.FAILED

    @property
    def ran(self) -> bool:
        """Whether the step was executed (succeeded or failed)."""
        return self.status != StageStatus.SKIPPED


@dataclass(frozen=True)
class RunReport:
    """Ordered outcome of a release run.

    Attributes:
        results (tuple[StageResult, ...]): Every recorded step, in execution order.
        final_state (PatchState | None): Manifest state read back at the end of the run;
            ``None`` when the manifest could not be read.
        patch_attempted (bool): Whether the scoped patch was entered.
    """

    results: tuple[StageResult, ...]
    final_state: PatchState | None
    patch_attempted: bool = False

    @property
    def failed_result(self) -> StageResult | None:
        """The first failed step, i.e. the cause of a failed run."""
        return next((r for r in self.results if r.failed), None)

    @property
    def failure(self) -> WheelwrightError | None:
        """The failure that caused the run to abort, if any."""
        failed: StageResult | None = self.failed_result
        return failed.failure if failed is not None else None

    @property
    def executed(self) -> tuple[str, ...]:
        """Names of the pipeline steps that ran, in order (bootstrap excluded)."""
        return tuple(r.name for r in self.results if r.ran and r.name != BOOTSTRAP_STEP)

    @property
    def ok(self) -> bool:
        """Whether every executed step succeeded."""
        return self.failed_result is None

    @property
    def exit_code(self) -> ExitCode:
        """Process exit status for this run."""
        return ExitCode.SUCCESS if self.ok else ExitCode.FAILURE

    def result_for(self, name: str) -> StageResult | None:
        """Return the recorded result for step ``name``, if any."""
        return next((r for r in self.results if r.name == name), None)
