# topmark:header:start
#
#   project      : Wheelwright
#   file         : main.py
#   file_relpath : src/wheelwright/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Wheelwright command-line interface.

Key ideas:
- One command, no subcommands: the flags select which stages of the fixed release
  pipeline run.
- Shared state (verbosity, color, console) is initialized once and placed into
  ``ctx.obj``.
- Every failure exits with status 1, including usage errors; nothing runs before the
  command line has been parsed completely.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from wheelwright.cli.config_resolver import build_config
from wheelwright.cli.console import ClickConsole
from wheelwright.cli.errors import WheelwrightConfigError, WheelwrightUsageError
from wheelwright.cli.options import (
    CONTEXT_SETTINGS,
    common_color_options,
    common_verbose_options,
    verbosity_to_log_level,
)
from wheelwright.cli.summary import render_plan, render_report
from wheelwright.config.logging import get_logger, resolve_env_log_level, setup_logging
from wheelwright.config.model import load_settings
from wheelwright.constants import PROG_NAME, WHEELWRIGHT_VERSION
from wheelwright.core.errors import ConfigError
from wheelwright.core.exit_codes import ExitCode
from wheelwright.pipeline.engine import run_release
from wheelwright.tools.runner import SubprocessRunner
from wheelwright.tools.vcs import GitVcs

if TYPE_CHECKING:
    from wheelwright.cli_shared.console_api import ConsoleLike
    from wheelwright.config.model import BuildConfig, ProjectSettings
    from wheelwright.pipeline.outcomes import RunReport

logger = get_logger(__name__)


class ReleaseCommand(click.Command):
    """Click command that reports unknown tokens verbatim and exits 1 on usage errors."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        """Parse ``args``; reject unknown options and stray positional tokens.

        Raises:
            WheelwrightUsageError: For the first unrecognized token.
            click.UsageError: For other invalid usage, with exit status 1.
        """
        try:
            rest: list[str] = super().parse_args(ctx, args)
        except click.NoSuchOption as e:
            raise WheelwrightUsageError(
                f"Unrecognized flag: {e.option_name}", ctx=ctx, token=e.option_name
            ) from e
        except click.UsageError as e:
            e.exit_code = ExitCode.FAILURE
            raise
        if rest:
            raise WheelwrightUsageError(f"Unrecognized flag: {rest[0]}", ctx=ctx, token=rest[0])
        return rest


def init_common_state(ctx: click.Context, config: BuildConfig) -> None:
    """Initialize shared state (logging, color, console) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        config (BuildConfig): The resolved run configuration.
    """
    ctx.obj = ctx.obj or {}
    ctx.obj["verbosity_level"] = config.verbosity_level

    # Internal logging: the environment wins over -v/-q
    level_env: int | None = resolve_env_log_level()
    log_level: int = (
        level_env if level_env is not None else verbosity_to_log_level(config.verbosity_level)
    )
    ctx.obj["log_level"] = log_level
    setup_logging(level=log_level)

    ctx.obj["color_enabled"] = config.color
    ctx.color = config.color
    ctx.obj["console"] = ClickConsole(enable_color=config.color)


@click.command(
    name=PROG_NAME,
    cls=ReleaseCommand,
    context_settings=CONTEXT_SETTINGS,
    help="Build, verify and check a release of a Rust-backed Python package.",
)
@click.option("--quick-check", is_flag=True, help="Skip the lint and documentation stages.")
@click.option("--sdist-only", is_flag=True, help="Stop after the source distribution.")
@click.option(
    "--python",
    "python",
    metavar="PATH",
    default=None,
    help="Interpreter used to create the release venv (default: the running interpreter).",
)
@click.option("--no-docs", is_flag=True, help="Skip the documentation stage.")
@click.option(
    "--no-set-rustflags",
    is_flag=True,
    help="Do not export the configured compiler flags to tool invocations.",
)
@click.option("--no-delete-venv", is_flag=True, help="Reuse an existing release venv.")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project root (default: the current directory).",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings file merged over pyproject.toml and wheelwright.toml.",
)
@click.option("--dry-run", is_flag=True, help="Print the stage plan and exit.")
@common_verbose_options
@common_color_options
@click.version_option(WHEELWRIGHT_VERSION, "--version", prog_name=PROG_NAME)
@click.pass_context
def cli(ctx: click.Context, **_params: Any) -> None:
    """Entry point for the Wheelwright CLI."""
    config: BuildConfig = build_config(ctx.params)
    init_common_state(ctx, config)
    console: ConsoleLike = ctx.obj["console"]

    try:
        settings: ProjectSettings = load_settings(
            config.project_root, config_file=config.config_file
        )
    except ConfigError as e:
        raise WheelwrightConfigError(str(e)) from e

    if config.dry_run:
        render_plan(console, config, settings)
        return

    show_output: bool = config.verbosity_level >= 0
    runner = SubprocessRunner(
        echo=console.tool_output if show_output else None
    )
    report: RunReport = run_release(
        config,
        settings,
        runner=runner,
        vcs=GitVcs(runner, settings.root),
        console=console,
    )
    render_report(console, report, output_shown=runner.streams_output)
    ctx.exit(int(report.exit_code))


if __name__ == "__main__":
    cli()
