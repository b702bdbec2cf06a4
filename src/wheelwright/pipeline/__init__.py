# topmark:header:start
#
#   project      : Wheelwright
#   file         : __init__.py
#   file_relpath : src/wheelwright/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Release pipeline: stages, fixed stage sequences and the release driver.

The public entry points are `wheelwright.pipeline.engine.run_release` and
`wheelwright.pipeline.pipelines.plan_stages`.
"""

from __future__ import annotations
