# topmark:header:start
#
#   project      : Wheelwright
#   file         : pipelines.py
#   file_relpath : src/wheelwright/pipeline/pipelines.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Fixed stage sequences of a release run (immutable, typed).

Overview
--------
- ``PRE_PATCH``: sdist (manifest unpatched)
- ``PATCHED``: wheel → install-test → lint → docs (inside the scoped patch)

Mermaid (orientation)
---------------------
```mermaid
flowchart TD
  B[bootstrap] --> S[sdist]
  S -->|--sdist-only| E[end]
  S --> P[patch] --> W[wheel] --> I[install-test]
  I -->|full check| L[lint]
  L -->|docs| D[docs]
  I --> U[unpatch]
  L --> U
  D --> U
  U --> E
```

Notes:
* Pipelines are immutable (Final[tuple[Stage, ...]]) and stages are instantiated
  objects (not functions).
* Disabled stages stay in the sequence; they gate themselves and record ``SKIPPED``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from wheelwright.pipeline.contracts import PATCH_STEP, UNPATCH_STEP
from wheelwright.pipeline.stages import docs, install_test, lint, sdist, wheel

if TYPE_CHECKING:
    from wheelwright.config.model import BuildConfig
    from wheelwright.pipeline.contracts import Stage

# Build the publishable artifact before the manifest is touched:
PRE_PATCH_PIPELINE: Final[tuple[Stage, ...]] = (sdist.SdistStage(),)

# Everything that needs the local core dependency:
PATCHED_PIPELINE: Final[tuple[Stage, ...]] = (
    wheel.WheelStage(),  # Build the platform wheel
    install_test.InstallTestStage(),  # Install it from dist/ and run the tests
    lint.LintStage(),  # Rust and Python checkers (full check only)
    docs.DocsStage(),  # Sphinx html + doctest (full check, docs enabled)
)


def plan_stages(config: BuildConfig) -> tuple[str, ...]:
    """Return the ordered step names a successful run with ``config`` executes.

    The driver's ``patch`` and ``unpatch`` steps are included where they happen.

    Args:
        config (BuildConfig): Run switches.

    Returns:
        tuple[str, ...]: E.g. ``("sdist", "patch", "wheel", "install-test", "lint",
        "docs", "unpatch")`` for the default configuration.
    """
    names: list[str] = [s.name for s in PRE_PATCH_PIPELINE if s.enabled(config)]
    if config.sdist_only:
        return tuple(names)
    names.append(PATCH_STEP)
    names.extend(s.name for s in PATCHED_PIPELINE if s.enabled(config))
    names.append(UNPATCH_STEP)
    return tuple(names)
