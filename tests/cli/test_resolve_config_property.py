# topmark:header:start
#
#   project      : Wheelwright
#   file         : test_resolve_config_property.py
#   file_relpath : tests/cli/test_resolve_config_property.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Property tests for flag resolution.

For every subset of the stage-selection flags, in any order:
1) each field reflects exactly whether its flag was given,
2) the stage plan is consistent with the fields, and
3) appending an unknown token always raises `UnrecognizedFlagError` with that token.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from wheelwright.cli.config_resolver import resolve_config
from wheelwright.config.model import BuildConfig
from wheelwright.core.errors import UnrecognizedFlagError
from wheelwright.pipeline.pipelines import plan_stages

# Mark the entire test module
pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow

CWD: Path = Path.cwd()

FLAGS: tuple[str, ...] = (
    "--quick-check",
    "--sdist-only",
    "--no-docs",
    "--no-set-rustflags",
    "--no-delete-venv",
)

s_flags: st.SearchStrategy[list[str]] = st.lists(st.sampled_from(FLAGS), unique=True)

s_unknown: st.SearchStrategy[str] = st.text(
    alphabet="abcdefghijklmnopqrstuvwxyz-", min_size=1, max_size=12
).map(lambda s: f"--zz-{s}")


@settings(deadline=None, max_examples=100)
@given(flags=s_flags)
def test_fields_follow_flags(flags: list[str]) -> None:
    """Every field is set iff its flag is present."""
    config: BuildConfig = resolve_config(flags, cwd=CWD)

    assert config.full_check is ("--quick-check" not in flags)
    assert config.sdist_only is ("--sdist-only" in flags)
    assert config.generate_docs is ("--no-docs" not in flags)
    assert config.set_compiler_flags is ("--no-set-rustflags" not in flags)
    assert config.delete_old_env is ("--no-delete-venv" not in flags)

    plan: tuple[str, ...] = plan_stages(config)
    assert plan[0] == "sdist"
    assert ("patch" in plan) is not config.sdist_only
    assert ("lint" in plan) is (not config.sdist_only and config.full_check)
    assert ("docs" in plan) is (
        not config.sdist_only and config.full_check and config.generate_docs
    )


@settings(deadline=None, max_examples=100)
@given(flags=s_flags, unknown=s_unknown, position=st.integers(min_value=0, max_value=5))
def test_unknown_token_is_always_reported(flags: list[str], unknown: str, position: int) -> None:
    """An unknown flag anywhere in the command line is reported verbatim."""
    tokens: list[str] = [*flags[:position], unknown, *flags[position:]]
    with pytest.raises(UnrecognizedFlagError) as excinfo:
        resolve_config(tokens, cwd=CWD)
    assert excinfo.value.token == unknown
