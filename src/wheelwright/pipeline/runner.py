# topmark:header:start
#
#   project      : Wheelwright
#   file         : runner.py
#   file_relpath : src/wheelwright/pipeline/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run a stage sequence with short-circuit on the first failure."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wheelwright.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wheelwright.config.logging import WheelwrightLogger

    from .context import BuildContext
    from .contracts import Stage

logger: WheelwrightLogger = get_logger(__name__)


def run(ctx: BuildContext, stages: Sequence[Stage]) -> BuildContext:
    """Execute ``stages`` sequentially until one fails.

    Stages after a failure are not invoked and leave no result.

    Args:
        ctx (BuildContext): Mutable build context.
        stages (Sequence[Stage]): Ordered stage instances.

    Returns:
        BuildContext: The same context, with the results recorded.
    """
    for stage in stages:
        if ctx.halted:
            logger.info("Pipeline halted; not running %s", stage.name)
            break
        stage(ctx)
    return ctx
