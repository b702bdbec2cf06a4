# topmark:header:start
#
#   file         : options.py
#   file_relpath : src/wheelwright/cli/options.py
#   project      : Wheelwright
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities for the Wheelwright command.

This module centralizes the reusable options (verbosity, color) and their
resolution logic, so the command stays thin. The helpers here are Click-aware.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Callable, ParamSpec, TypeVar

import click

from wheelwright.cli.errors import WheelwrightUsageError
from wheelwright.config.logging import TRACE_LEVEL

P = ParamSpec("P")
R = TypeVar("R")

#: Click context settings: ``-h`` as a help alias; extra tokens are collected so they
#: can be reported verbatim as unrecognized flags.
CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "allow_extra_args": True,
}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from the ``-v``/``-q`` counts.

    Args:
        verbose_count: Number of times the verbose flag (-v) is passed.
        quiet_count: Number of times the quiet flag (-q) is passed.

    Returns:
        ``-1`` for quiet, ``0`` by default, and the ``-v`` count otherwise.

    Raises:
        WheelwrightUsageError: If both verbose and quiet flags are used simultaneously.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise WheelwrightUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return -1
    return verbose_count


def verbosity_to_log_level(verbosity_level: int) -> int:
    """Map program-output verbosity to an internal logging level.

    Behavior:
        Three or more -v flags set TRACE level.
        Two -v flags set DEBUG level.
        One -v flag sets INFO level.
        -q sets ERROR level.
        Default level is WARNING.
    """
    if verbosity_level >= 3:  # -vvv
        return TRACE_LEVEL
    if verbosity_level == 2:  # -vv
        return logging.DEBUG
    if verbosity_level == 1:  # -v
        return logging.INFO
    if verbosity_level < 0:  # -q
        return logging.ERROR
    return logging.WARNING


def resolve_color(*, no_color: bool, stdout_isatty: bool | None = None) -> bool:
    """Determine whether color output should be enabled.

    Args:
        no_color: Whether ``--no-color`` was passed; forces color off.
        stdout_isatty: Whether stdout is a TTY; if None, auto-detected.

    Returns:
        True if color output should be enabled, False otherwise.

    Behavior:
        Honors the --no-color CLI flag first.
        Honors FORCE_COLOR and NO_COLOR environment variables.
        Defaults to enabling color if stdout is a TTY.
    """
    if no_color:
        return False
    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        stdout_isatty = sys.stdout.isatty()
    return bool(stdout_isatty)


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --verbose and --quiet options to a command.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function with verbosity options added.
    """
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity (repeat for more detail: -vv debug, -vvv trace).",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Do not stream tool output; show it only when a tool fails.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds the --no-color option to a command."""
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output.",
    )(f)
    return f
