# topmark:header:start
#
#   project      : Wheelwright
#   file         : bootstrap.py
#   file_relpath : src/wheelwright/env/bootstrap.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Environment bootstrap, run once before the first stage.

Steps, in order:
    1. Interpreter discovery (``--python`` or the running interpreter).
    2. Clean the distribution directory left behind by the previous run.
    3. (Re)create the release virtual environment and install the requirements.
    4. Copy the canonical license into the package tree and verify that the tracked
       copy did not diverge.
    5. Compute the tool environment (compiler flags).

Every failure raises a `wheelwright.core.errors.WheelwrightError`. Nothing here
touches the dependency manifest.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from wheelwright.config.logging import get_logger
from wheelwright.core.errors import InvariantViolation, PathNotFoundError
from wheelwright.tools import commands
from wheelwright.tools.runner import invoke

if TYPE_CHECKING:
    from wheelwright.config.logging import WheelwrightLogger
    from wheelwright.config.model import BuildConfig, ProjectSettings
    from wheelwright.tools.commands import ToolCommand
    from wheelwright.tools.runner import ToolRunner
    from wheelwright.tools.vcs import Vcs

logger: WheelwrightLogger = get_logger(__name__)


@dataclass(frozen=True)
class BootstrapResult:
    """What the stages need from the bootstrapped environment.

    Attributes:
        interpreter (str): Interpreter used to create the virtual environment.
        venv_python (Path): Interpreter inside the release virtual environment.
        tool_env (dict[str, str]): Extra environment for tool invocations.
    """

    interpreter: str
    venv_python: Path
    tool_env: dict[str, str] = field(default_factory=dict)


def discover_interpreter(interpreter_path: str) -> str:
    """Return an absolute path to the interpreter named by ``interpreter_path``.

    A value containing a path separator is taken as a path; a bare name
    (e.g. ``python3.12``) is looked up on ``PATH``.

    Raises:
        PathNotFoundError: If no such interpreter exists.
    """
    seps: tuple[str, ...] = tuple(s for s in (os.sep, os.altsep) if s)
    if any(s in interpreter_path for s in seps):
        candidate = Path(interpreter_path).expanduser()
        if candidate.is_file():
            return str(candidate.resolve())
        raise PathNotFoundError(f"Interpreter not found: {interpreter_path}", path=candidate)

    found: str | None = shutil.which(interpreter_path)
    if found is None:
        raise PathNotFoundError(
            f"Interpreter not found on PATH: {interpreter_path}",
            path=Path(interpreter_path),
        )
    return found


def clean_dist_dir(dist_dir: Path) -> None:
    """Empty ``dist_dir`` (creating it when missing)."""
    if dist_dir.exists():
        logger.info("Removing previous build output in %s", dist_dir)
        shutil.rmtree(dist_dir)
    dist_dir.mkdir(parents=True)


def prepare_venv(
    config: BuildConfig,
    settings: ProjectSettings,
    runner: ToolRunner,
    interpreter: str,
) -> Path:
    """(Re)create the release virtual environment and install the requirements.

    Args:
        config (BuildConfig): Run switches (``delete_old_env``).
        settings (ProjectSettings): Project layout.
        runner (ToolRunner): Runner for the environment manager.
        interpreter (str): Interpreter used to create the environment.

    Returns:
        Path: The interpreter inside the virtual environment.

    Raises:
        PathNotFoundError: If a requirements file is missing.
        ToolFailure: If creating the environment or installing fails.
    """
    if config.delete_old_env and settings.venv_dir.exists():
        logger.info("Deleting virtual environment %s", settings.venv_dir)
        shutil.rmtree(settings.venv_dir)

    steps: list[ToolCommand] = []
    if not settings.venv_python.exists():
        steps.append(commands.create_venv(interpreter, settings.venv_dir))
    else:
        logger.info("Reusing virtual environment %s", settings.venv_dir)

    for requirements in settings.requirements:
        if not requirements.is_file():
            raise PathNotFoundError(f"Requirements file not found: {requirements}", path=requirements)
        steps.append(commands.install_requirements(settings.venv_python, requirements))

    for step in steps:
        invoke(runner, step.label, step.argv, cwd=settings.root)
    return settings.venv_python


def sync_license(settings: ProjectSettings, vcs: Vcs) -> None:
    """Copy the canonical license into the package tree and verify the tracked copy.

    Raises:
        PathNotFoundError: If the canonical license is missing.
        InvariantViolation: If the copy differs from its committed content.
    """
    source: Path = settings.license_source
    target: Path = settings.license_target
    if not source.is_file():
        raise PathNotFoundError(f"License file not found: {source}", path=source)

    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, target)
    logger.debug("Copied %s -> %s", source, target)

    if not vcs.is_unmodified(target):
        raise InvariantViolation(
            f"license copy {target} differs from its committed content; "
            f"commit {source} and {target} together"
        )


def compiler_env(config: BuildConfig, settings: ProjectSettings) -> dict[str, str]:
    """Return the extra environment exported to every tool invocation."""
    if not config.set_compiler_flags or not settings.compiler_flags_env:
        return {}
    return {settings.compiler_flags_env: settings.compiler_flags}


def bootstrap_environment(
    config: BuildConfig,
    settings: ProjectSettings,
    *,
    runner: ToolRunner,
    vcs: Vcs,
) -> BootstrapResult:
    """Prepare everything the stages rely on.

    Args:
        config (BuildConfig): Run switches.
        settings (ProjectSettings): Project layout.
        runner (ToolRunner): Runner for the environment manager.
        vcs (Vcs): Version control, used for the license check.

    Returns:
        BootstrapResult: Interpreter paths and the tool environment.

    Raises:
        WheelwrightError: On the first failing step.
    """
    interpreter: str = discover_interpreter(config.interpreter_path)
    logger.info("Using interpreter %s", interpreter)

    clean_dist_dir(settings.dist_dir)
    venv_python: Path = prepare_venv(config, settings, runner, interpreter)
    sync_license(settings, vcs)

    tool_env: dict[str, str] = compiler_env(config, settings)
    for key, value in tool_env.items():
        logger.info("Exporting %s=%r to tool invocations", key, value)
    return BootstrapResult(interpreter=interpreter, venv_python=venv_python, tool_env=tool_env)
