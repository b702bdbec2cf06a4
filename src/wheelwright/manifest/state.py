# topmark:header:start
#
#   project      : Wheelwright
#   file         : state.py
#   file_relpath : src/wheelwright/manifest/state.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Patch state of the dependency manifest (pure text functions, no I/O).

While *unpatched*, the binding crate's manifest carries a unique sentinel line::

    # wheelwright:patch-marker

Patching replaces that line with a patch table that points the core dependency at its
in-tree location by absolute path::

    [patch.crates-io]
    core = {path = "/abs/path/to/core"}

Any other shape (marker missing without a local path reference, or the marker
repeated) is neither state and is reported as an invariant violation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import tomlkit
from yachalk import chalk

from wheelwright.core.errors import InvariantViolation
from wheelwright.rendering.colored_enum import ColoredStrEnum

if TYPE_CHECKING:
    from pathlib import Path


class PatchState(ColoredStrEnum):
    """Binary patch condition of the dependency manifest."""

    UNPATCHED = ("unpatched", chalk.green)
    PATCHED = ("patched", chalk.yellow)


def _line_body(line: str) -> str:
    return line.rstrip("\r\n")


def count_marker_lines(text: str, marker: str) -> int:
    """Return how many lines of ``text`` consist of ``marker`` (surrounding blanks ignored)."""
    return sum(1 for line in text.splitlines() if line.strip() == marker)


def render_dependency_line(dependency: str, local_path: Path) -> str:
    """Return the TOML line pointing ``dependency`` at ``local_path``.

    The path is written with forward slashes, which Cargo accepts on every platform,
    and quoted by `tomlkit` so that unusual characters stay valid TOML.
    """
    table = tomlkit.inline_table()
    table["path"] = local_path.as_posix()
    return f"{dependency} = {table.as_string()}"


def has_local_reference(text: str, dependency: str, local_path: Path) -> bool:
    """Return whether ``text`` points ``dependency`` at ``local_path``."""
    expected: str = render_dependency_line(dependency, local_path)
    return any(_line_body(line).strip() == expected for line in text.splitlines())


def detect_state(text: str, *, marker: str, dependency: str, local_path: Path) -> PatchState:
    """Classify manifest text as patched or unpatched.

    Args:
        text (str): Manifest content.
        marker (str): Sentinel line present while unpatched.
        dependency (str): Core dependency name.
        local_path (Path): Absolute in-tree location of the dependency.

    Returns:
        PatchState: The detected state.

    Raises:
        InvariantViolation: If the text is in neither state.
    """
    count: int = count_marker_lines(text, marker)
    if count == 1:
        return PatchState.UNPATCHED
    if count > 1:
        raise InvariantViolation(f"patch marker {marker!r} appears {count} times")
    if has_local_reference(text, dependency, local_path):
        return PatchState.PATCHED
    raise InvariantViolation(
        f"manifest has neither the patch marker {marker!r} "
        f"nor a local path reference for {dependency!r}"
    )


def render_patched(
    text: str,
    *,
    marker: str,
    registry: str,
    dependency: str,
    local_path: Path,
) -> str:
    """Return ``text`` with the marker line replaced by the local-path patch table.

    The line ending of the marker line is reused for the inserted lines so the rest
    of the file keeps its newline style.

    Args:
        text (str): Unpatched manifest content.
        marker (str): Sentinel line to replace.
        registry (str): Registry name of the ``[patch.<registry>]`` table.
        dependency (str): Core dependency name.
        local_path (Path): Absolute in-tree location of the dependency.

    Returns:
        str: The patched manifest content.

    Raises:
        InvariantViolation: If the marker does not appear exactly once.
    """
    count: int = count_marker_lines(text, marker)
    if count != 1:
        raise InvariantViolation(
            f"expected the patch marker {marker!r} exactly once, found {count}"
        )

    out: list[str] = []
    for line in text.splitlines(keepends=True):
        if line.strip() != marker:
            out.append(line)
            continue
        eol: str = line[len(_line_body(line)) :] or "\n"
        out.append(f"[patch.{registry}]{eol}")
        out.append(f"{render_dependency_line(dependency, local_path)}{eol}")
    return "".join(out)
