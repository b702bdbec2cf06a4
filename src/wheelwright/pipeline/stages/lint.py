# topmark:header:start
#
#   project      : Wheelwright
#   file         : lint.py
#   file_relpath : src/wheelwright/pipeline/stages/lint.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Lint, format and type checks (Rust and Python), run only for a full check."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wheelwright.manifest.state import PatchState
from wheelwright.pipeline.stages.base import BaseStage
from wheelwright.tools import commands

if TYPE_CHECKING:
    from wheelwright.config.model import BuildConfig
    from wheelwright.pipeline.context import BuildContext
    from wheelwright.tools.commands import ToolCommand


class LintStage(BaseStage):
    """Run the checkers in a fixed order; the first failing checker fails the stage."""

    def __init__(self) -> None:
        super().__init__(name="lint", requires=PatchState.PATCHED)

    def enabled(self, config: BuildConfig) -> bool:
        """Selected by a full check (not ``--quick-check``, not ``--sdist-only``)."""
        return config.runs_lint

    def run(self, ctx: BuildContext) -> None:
        """Run cargo fmt, cargo clippy, ruff check, ruff format and mypy."""
        settings = ctx.settings
        checks: tuple[ToolCommand, ...] = (
            commands.cargo_fmt_check(),
            commands.cargo_clippy(),
            commands.ruff_check(settings.venv_python, settings.lint_paths),
            commands.ruff_format_check(settings.venv_python, settings.lint_paths),
            commands.mypy(settings.venv_python, settings.lint_paths),
        )
        for check in checks:
            self.invoke(ctx, check, cwd=settings.package_dir)
