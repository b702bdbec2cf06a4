# topmark:header:start
#
#   project      : Wheelwright
#   file         : config_resolver.py
#   file_relpath : src/wheelwright/cli/config_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve the run-time `BuildConfig` from the command line.

Two entry points share one mapping:
    - `build_config` turns already-parsed Click parameters into a `BuildConfig`
      (used by the command itself).
    - `resolve_config` parses a raw token sequence with the same Click command and
      returns the `BuildConfig`, raising `UnrecognizedFlagError` for an unknown token.
      It has no side effects for valid token sequences.

| flag                   | effect                         |
|------------------------|--------------------------------|
| ``--quick-check``      | ``full_check = False``         |
| ``--sdist-only``       | ``sdist_only = True``          |
| ``--python PATH``      | ``interpreter_path = PATH``    |
| ``--no-docs``          | ``generate_docs = False``      |
| ``--no-set-rustflags`` | ``set_compiler_flags = False`` |
| ``--no-delete-venv``   | ``delete_old_env = False``     |
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from wheelwright.cli.errors import WheelwrightUsageError
from wheelwright.cli.options import resolve_color, resolve_verbosity
from wheelwright.config.logging import get_logger
from wheelwright.config.model import BuildConfig, default_interpreter
from wheelwright.constants import PROG_NAME
from wheelwright.core.errors import ConfigError, UnrecognizedFlagError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from wheelwright.config.logging import WheelwrightLogger

logger: WheelwrightLogger = get_logger(__name__)


def build_config(
    params: Mapping[str, Any],
    *,
    cwd: Path | None = None,
    stdout_isatty: bool | None = None,
) -> BuildConfig:
    """Build a `BuildConfig` from parsed Click parameters.

    Args:
        params (Mapping[str, Any]): ``ctx.params`` of the Wheelwright command.
        cwd (Path | None): Directory used as project root when ``--root`` is absent
            (default: the current working directory).
        stdout_isatty (bool | None): Terminal detection override for color resolution.

    Returns:
        BuildConfig: The immutable run configuration.

    Raises:
        WheelwrightUsageError: If ``-v`` and ``-q`` are combined.
    """
    root: Path | None = params.get("root")
    config_file: Path | None = params.get("config_file")
    base: Path = (cwd or Path.cwd()).resolve()

    config = BuildConfig(
        full_check=not params.get("quick_check", False),
        generate_docs=not params.get("no_docs", False),
        sdist_only=bool(params.get("sdist_only", False)),
        set_compiler_flags=not params.get("no_set_rustflags", False),
        delete_old_env=not params.get("no_delete_venv", False),
        interpreter_path=params.get("python") or default_interpreter(),
        verbosity_level=resolve_verbosity(params.get("verbose", 0), params.get("quiet", 0)),
        color=resolve_color(
            no_color=bool(params.get("no_color", False)),
            stdout_isatty=stdout_isatty,
        ),
        project_root=(base / root).resolve() if root is not None else base,
        config_file=(base / config_file).resolve() if config_file is not None else None,
        dry_run=bool(params.get("dry_run", False)),
    )
    logger.trace("BuildConfig: %s", config)
    return config


def resolve_config(tokens: Sequence[str], *, cwd: Path | None = None) -> BuildConfig:
    """Parse command-line ``tokens`` into a `BuildConfig`.

    Same tokens always yield the same configuration (given the same ``cwd`` and
    interpreter). ``--help`` and ``--version`` are handled by Click and raise
    ``click.exceptions.Exit``.

    Args:
        tokens (Sequence[str]): Command-line tokens, without the program name.
        cwd (Path | None): Directory used as project root when ``--root`` is absent.

    Returns:
        BuildConfig: The resolved configuration.

    Raises:
        UnrecognizedFlagError: For an unknown option or a stray positional token.
        ConfigError: For any other invalid usage (e.g. ``--python`` without a value).
    """
    from wheelwright.cli.main import cli

    try:
        ctx: click.Context = cli.make_context(PROG_NAME, list(tokens))
        return build_config(ctx.params, cwd=cwd, stdout_isatty=False)
    except WheelwrightUsageError as e:
        if e.token is not None:
            raise UnrecognizedFlagError(e.token) from e
        raise ConfigError(e.format_message()) from e
    except click.UsageError as e:
        raise ConfigError(e.format_message()) from e
