# topmark:header:start
#
#   project      : Wheelwright
#   file         : status.py
#   file_relpath : src/wheelwright/pipeline/status.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Status of a pipeline step.

Values are human-readable strings used in the run summary; prefer equality (``==``)
over identity checks.
"""

from __future__ import annotations

from yachalk import chalk

from wheelwright.rendering.colored_enum import ColoredStrEnum


class StageStatus(ColoredStrEnum):
    """Outcome of a single step of a release run."""

    # Value format: (description: str, color_renderer: ChalkBuilder)
    SUCCEEDED = ("succeeded", chalk.green)
    FAILED = ("failed", chalk.red_bright)
    SKIPPED = ("skipped", chalk.gray)
