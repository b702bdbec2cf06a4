# topmark:header:start
#
#   project      : Wheelwright
#   file         : contracts.py
#   file_relpath : src/wheelwright/pipeline/contracts.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type contracts for pipeline stages (driver-facing).

Stages are instantiated objects that are *callable*; the driver invokes them as
``stage(ctx)`` where ``ctx`` is a `BuildContext`, and receives a `StageResult`.

Lifecycle
---------
1) ``enabled(config)`` gates the stage; a disabled stage yields ``SKIPPED``.
2) The manifest guard verifies the stage's required patch state.
3) ``check_preconditions(ctx)`` validates the inputs (e.g. wheel artifacts).
4) ``run(ctx)`` delegates to the external tools.
5) ``check_postconditions(ctx)`` validates the outputs.

Any `wheelwright.core.errors.WheelwrightError` raised along the way becomes a
``FAILED`` result; expected failures never escape a stage.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final, Protocol

if TYPE_CHECKING:
    from wheelwright.config.model import BuildConfig
    from wheelwright.manifest.state import PatchState

    from .context import BuildContext
    from .outcomes import StageResult

# Names of the driver's own steps (not stages) as they appear in plans and reports.
BOOTSTRAP_STEP: Final[str] = "bootstrap"
PATCH_STEP: Final[str] = "patch"
UNPATCH_STEP: Final[str] = "unpatch"


class Stage(Protocol):
    """Protocol for a single pipeline stage.

    Implementations typically subclass `wheelwright.pipeline.stages.base.BaseStage`.
    """

    name: str
    requires: PatchState

    def enabled(self, config: BuildConfig) -> bool:
        """Return whether the run configuration selects this stage."""
        ...

    def check_preconditions(self, ctx: BuildContext) -> None:
        """Raise a `WheelwrightError` if the stage's inputs are missing."""
        ...

    def run(self, ctx: BuildContext) -> None:
        """Invoke the stage's external tools."""
        ...

    def check_postconditions(self, ctx: BuildContext) -> None:
        """Raise a `WheelwrightError` if the stage's outputs are missing or wrong."""
        ...

    def __call__(self, ctx: BuildContext) -> StageResult:
        """Run the stage lifecycle and record the result in ``ctx``.

        Args:
            ctx (BuildContext): The mutable build context.

        Returns:
            StageResult: The recorded result.
        """
        ...
