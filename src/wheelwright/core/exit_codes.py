# topmark:header:start
#
#   project      : Wheelwright
#   file         : exit_codes.py
#   file_relpath : src/wheelwright/core/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the Wheelwright CLI.

A release run either succeeds or it does not: usage errors, configuration errors,
guard violations, missing artifacts and tool failures all share ``FAILURE`` so that
CI scripts only need to test for zero.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the Wheelwright CLI.

    Attributes:
        SUCCESS: The full pipeline, an ``--sdist-only`` run, or a ``--dry-run`` completed.
        FAILURE: Any failure, including an unrecognized command-line token.
    """

    SUCCESS = 0
    FAILURE = 1
