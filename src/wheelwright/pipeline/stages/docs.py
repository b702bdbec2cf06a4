# topmark:header:start
#
#   project      : Wheelwright
#   file         : docs.py
#   file_relpath : src/wheelwright/pipeline/stages/docs.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Documentation stage (Sphinx HTML build and doctests).

The documentation imports the installed extension, so it requires the wheel built
for this platform. An ambiguous dist directory (several matching wheels) is treated
like a missing wheel: the stage cannot tell which build the docs would exercise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wheelwright.config.logging import get_logger
from wheelwright.manifest.state import PatchState
from wheelwright.pipeline.stages.base import BaseStage, require_artifacts
from wheelwright.tools import commands

if TYPE_CHECKING:
    from wheelwright.config.logging import WheelwrightLogger
    from wheelwright.config.model import BuildConfig
    from wheelwright.pipeline.context import BuildContext

logger: WheelwrightLogger = get_logger(__name__)

DOC_BUILDERS: tuple[str, ...] = ("html", "doctest")


class DocsStage(BaseStage):
    """Build the HTML documentation and run its doctests."""

    def __init__(self) -> None:
        super().__init__(name="docs", requires=PatchState.PATCHED)

    def enabled(self, config: BuildConfig) -> bool:
        """Selected by a full check unless ``--no-docs``."""
        return config.runs_docs

    def check_preconditions(self, ctx: BuildContext) -> None:
        """Require exactly one wheel for this platform."""
        wheels = require_artifacts(
            ctx.settings.dist_dir, ctx.settings.wheel_pattern, exactly_one=True
        )
        logger.info("Documenting against %s", wheels[0].name)

    def run(self, ctx: BuildContext) -> None:
        """Run ``sphinx-build`` once per builder."""
        settings = ctx.settings
        if not settings.docs_strict:
            logger.warning("Documentation warnings are not treated as errors (docs_strict = false)")
        for builder in DOC_BUILDERS:
            self.invoke(
                ctx,
                commands.sphinx_build(
                    settings.venv_python,
                    builder,
                    settings.docs_dir,
                    settings.docs_build_dir,
                    strict=settings.docs_strict,
                ),
                cwd=settings.package_dir,
            )
