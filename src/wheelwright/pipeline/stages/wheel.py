# topmark:header:start
#
#   project      : Wheelwright
#   file         : wheel.py
#   file_relpath : src/wheelwright/pipeline/stages/wheel.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Binary wheel stage (``maturin build --release``, manifest patched)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wheelwright.manifest.state import PatchState
from wheelwright.pipeline.stages.base import BaseStage, require_artifacts
from wheelwright.tools import commands

if TYPE_CHECKING:
    from wheelwright.config.model import BuildConfig
    from wheelwright.pipeline.context import BuildContext


class WheelStage(BaseStage):
    """Build the platform wheel against the local core dependency."""

    def __init__(self) -> None:
        super().__init__(name="wheel", requires=PatchState.PATCHED)

    def enabled(self, config: BuildConfig) -> bool:
        """Skipped for ``--sdist-only``."""
        return not config.sdist_only

    def run(self, ctx: BuildContext) -> None:
        """Run ``maturin build --release`` with the compiler-flags environment."""
        settings = ctx.settings
        self.invoke(
            ctx,
            commands.maturin_build(settings.venv_python, settings.dist_dir),
            cwd=settings.package_dir,
        )

    def check_postconditions(self, ctx: BuildContext) -> None:
        """Require at least one wheel of the distribution in the dist directory."""
        require_artifacts(ctx.settings.dist_dir, ctx.settings.any_wheel_pattern)
