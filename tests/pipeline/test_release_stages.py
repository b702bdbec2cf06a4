# topmark:header:start
#
#   project      : Wheelwright
#   file         : test_release_stages.py
#   file_relpath : tests/pipeline/test_release_stages.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Stage-level tests: lifecycle, guard checks, artifact pre/postconditions.

Each stage is called directly on a `BuildContext` built around a `ReleaseProject`,
so the tests can put the dist directory and the manifest into exactly the state
under test.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.conftest import new_release_project, parametrize
from tests.fakes import write_sdist, write_wheel
from wheelwright.core.errors import (
    ArtifactNotFoundError,
    InvariantViolation,
    ToolFailure,
)
from wheelwright.pipeline.context import BuildContext
from wheelwright.pipeline.stages.base import find_artifacts, require_artifacts
from wheelwright.pipeline.stages.docs import DocsStage
from wheelwright.pipeline.stages.install_test import InstallTestStage
from wheelwright.pipeline.stages.lint import LintStage
from wheelwright.pipeline.stages.sdist import SdistStage, archived_manifests
from wheelwright.pipeline.stages.wheel import WheelStage
from wheelwright.pipeline.status import StageStatus

if TYPE_CHECKING:
    from pathlib import Path
    from typing import Any

    from tests.conftest import ReleaseProject
    from wheelwright.pipeline.outcomes import StageResult


def _context(project: ReleaseProject, **config: Any) -> BuildContext:
    project.settings.dist_dir.mkdir(parents=True, exist_ok=True)
    return BuildContext(
        config=project.config(**config),
        settings=project.settings,
        runner=project.runner,
        guard=project.guard,
        console=project.console,
        tool_env={"RUSTFLAGS": "-D warnings"},
    )


# --- Artifact helpers ---


def test_find_artifacts_is_sorted_and_ignores_directories(tmp_path: Path) -> None:
    """Matches are files only, in sorted order."""
    (tmp_path / "b.whl").write_bytes(b"")
    (tmp_path / "a.whl").write_bytes(b"")
    (tmp_path / "c.whl").mkdir()
    assert [p.name for p in find_artifacts(tmp_path, "*.whl")] == ["a.whl", "b.whl"]


def test_require_artifacts_none_and_ambiguous(tmp_path: Path) -> None:
    """No match, and several matches where one is required, both raise."""
    with pytest.raises(ArtifactNotFoundError) as none:
        require_artifacts(tmp_path, "*.whl")
    assert none.value.pattern == "*.whl"
    assert none.value.matches == ()

    (tmp_path / "a.whl").write_bytes(b"")
    (tmp_path / "b.whl").write_bytes(b"")
    assert len(require_artifacts(tmp_path, "*.whl")) == 2
    with pytest.raises(ArtifactNotFoundError) as ambiguous:
        require_artifacts(tmp_path, "*.whl", exactly_one=True)
    assert len(ambiguous.value.matches) == 2


# --- sdist ---


def test_sdist_runs_maturin_in_package_dir(release_project: ReleaseProject) -> None:
    """The sdist is built from the package directory with the tool environment."""
    ctx: BuildContext = _context(release_project)

    result: StageResult = SdistStage()(ctx)

    assert result.status is StageStatus.SUCCEEDED
    call = release_project.runner.calls[-1]
    assert "maturin sdist --out" in call.command
    assert call.cwd == release_project.settings.package_dir
    assert call.env == {"RUSTFLAGS": "-D warnings"}
    assert ctx.results == [result]


def test_sdist_with_local_path_is_rejected(release_project: ReleaseProject) -> None:
    """An archived manifest that mentions the local dependency path fails the stage."""
    settings = release_project.settings
    local: str = settings.dependency_path.as_posix()
    release_project.runner.hooks.clear()
    release_project.runner.on(
        "maturin sdist",
        lambda _call: write_sdist(
            settings.dist_dir / "my_ext-1.0.0.tar.gz",
            {"my_ext-1.0.0/Cargo.toml": f'core = {{ path = "{local}" }}\n'},
        ),
    )

    result: StageResult = SdistStage()(_context(release_project))

    assert result.failed
    assert isinstance(result.failure, InvariantViolation)
    assert "references the local path" in str(result.failure)


def test_sdist_without_archive_is_rejected(release_project: ReleaseProject) -> None:
    """A successful tool run that produced no sdist fails the postcondition."""
    release_project.runner.hooks.clear()
    result: StageResult = SdistStage()(_context(release_project))
    assert isinstance(result.failure, ArtifactNotFoundError)


def test_sdist_requires_unpatched_manifest(release_project: ReleaseProject) -> None:
    """The sdist stage refuses to run on a patched manifest and invokes nothing."""
    ctx: BuildContext = _context(release_project)
    ctx.guard.patch()

    result: StageResult = SdistStage()(ctx)

    assert isinstance(result.failure, InvariantViolation)
    assert not release_project.runner.called("maturin")


def test_archived_manifests_finds_nested_cargo_toml(tmp_path: Path) -> None:
    """Every ``Cargo.toml`` in the archive is returned, other files are not."""
    archive: Path = write_sdist(
        tmp_path / "x.tar.gz",
        {"x/Cargo.toml": "a", "x/core/Cargo.toml": "b", "x/README.md": "c"},
    )
    assert archived_manifests(archive) == {"x/Cargo.toml": "a", "x/core/Cargo.toml": "b"}


def test_unreadable_archive_is_an_invariant_violation(tmp_path: Path) -> None:
    """A corrupt sdist cannot be verified and is rejected."""
    archive: Path = tmp_path / "broken.tar.gz"
    archive.write_bytes(b"not a tarball")
    with pytest.raises(InvariantViolation, match="cannot read source distribution"):
        archived_manifests(archive)


# --- wheel / install-test ---


def test_wheel_requires_patched_manifest(release_project: ReleaseProject) -> None:
    """The wheel is never built against the published dependency."""
    result: StageResult = WheelStage()(_context(release_project))

    assert isinstance(result.failure, InvariantViolation)
    assert not release_project.runner.called("maturin build")


def test_wheel_builds_release_wheel(release_project: ReleaseProject) -> None:
    """On a patched manifest the wheel is built and found in the dist directory."""
    ctx: BuildContext = _context(release_project)
    ctx.guard.patch()

    result: StageResult = WheelStage()(ctx)

    assert result.status is StageStatus.SUCCEEDED
    assert release_project.runner.called("maturin build --release")
    assert release_project.built_against[0].count("[patch.crates-io]") == 1


def test_install_test_needs_a_wheel(release_project: ReleaseProject) -> None:
    """Without a wheel nothing is installed and the stage fails."""
    ctx: BuildContext = _context(release_project)
    ctx.guard.patch()

    result: StageResult = InstallTestStage()(ctx)

    assert isinstance(result.failure, ArtifactNotFoundError)
    assert not release_project.runner.called("pip install")


def test_install_test_installs_from_dist_only(release_project: ReleaseProject) -> None:
    """The wheel is installed from the dist directory (no index) before the tests run."""
    settings = release_project.settings
    ctx: BuildContext = _context(release_project)
    ctx.guard.patch()
    write_wheel(settings.dist_dir, settings.wheel_name_prefix, settings.platform_fragment)

    result: StageResult = InstallTestStage()(ctx)

    assert result.status is StageStatus.SUCCEEDED
    install, tests = release_project.runner.calls
    assert "--no-index" in install.argv
    assert str(settings.dist_dir) in install.argv
    assert install.argv[-1] == settings.distribution
    assert tests.argv[1:3] == ("-m", "pytest")
    assert tests.cwd == settings.package_dir


def test_failing_tests_fail_the_stage(release_project: ReleaseProject) -> None:
    """A non-zero pytest exit becomes a `ToolFailure` with the captured output."""
    settings = release_project.settings
    ctx: BuildContext = _context(release_project)
    ctx.guard.patch()
    write_wheel(settings.dist_dir, settings.wheel_name_prefix, settings.platform_fragment)
    release_project.runner.fail_on("-m pytest", output="1 failed\n")

    result: StageResult = InstallTestStage()(ctx)

    assert isinstance(result.failure, ToolFailure)
    assert result.failure.output == "1 failed\n"
    assert result.failure.label == "pytest"


# --- lint ---


@parametrize(
    ("overrides", "enabled"),
    [
        ({}, True),
        ({"full_check": False}, False),
        ({"sdist_only": True}, False),
        ({"generate_docs": False}, True),
    ],
)
def test_lint_selection(
    release_project: ReleaseProject, overrides: dict[str, bool], enabled: bool
) -> None:
    """Lint runs on a full check only."""
    assert LintStage().enabled(release_project.config(**overrides)) is enabled


def test_disabled_stage_is_skipped_without_running(release_project: ReleaseProject) -> None:
    """A disabled stage records SKIPPED, prints no banner and runs no tool."""
    ctx: BuildContext = _context(release_project, full_check=False)

    result: StageResult = LintStage()(ctx)

    assert result.status is StageStatus.SKIPPED
    assert not result.ran
    assert release_project.runner.calls == []
    assert "==> lint" not in release_project.console.stdout


def test_lint_runs_every_checker(release_project: ReleaseProject) -> None:
    """Rust and Python checkers run in order from the package directory."""
    ctx: BuildContext = _context(release_project)
    ctx.guard.patch()

    result: StageResult = LintStage()(ctx)

    assert result.status is StageStatus.SUCCEEDED
    commands: list[str] = release_project.runner.commands()
    assert commands[0] == "cargo fmt --all -- --check"
    assert commands[1] == "cargo clippy --all-targets -- -D warnings"
    assert "-m ruff check" in commands[2]
    assert "-m ruff format --check" in commands[3]
    assert "-m mypy" in commands[4]
    assert {c.cwd for c in release_project.runner.calls} == {release_project.settings.package_dir}


def test_lint_stops_at_first_failing_checker(release_project: ReleaseProject) -> None:
    """After a failing checker the remaining checkers do not run."""
    ctx: BuildContext = _context(release_project)
    ctx.guard.patch()
    release_project.runner.fail_on("cargo clippy")

    result: StageResult = LintStage()(ctx)

    assert isinstance(result.failure, ToolFailure)
    assert not release_project.runner.called("ruff")


# --- docs ---


@parametrize("wheel_count", [0, 2])
def test_docs_requires_exactly_one_platform_wheel(
    release_project: ReleaseProject, wheel_count: int
) -> None:
    """Zero or several matching wheels fail the stage before Sphinx is invoked."""
    settings = release_project.settings
    ctx: BuildContext = _context(release_project)
    ctx.guard.patch()
    for tag in ("cp311", "cp312")[:wheel_count]:
        write_wheel(
            settings.dist_dir, settings.wheel_name_prefix, settings.platform_fragment, tag=tag
        )

    result: StageResult = DocsStage()(ctx)

    assert isinstance(result.failure, ArtifactNotFoundError)
    assert not release_project.runner.called("sphinx")


def test_docs_builds_html_and_doctest_strictly(release_project: ReleaseProject) -> None:
    """Both builders run with warnings turned into errors by default."""
    settings = release_project.settings
    ctx: BuildContext = _context(release_project)
    ctx.guard.patch()
    write_wheel(settings.dist_dir, settings.wheel_name_prefix, settings.platform_fragment)

    result: StageResult = DocsStage()(ctx)

    assert result.status is StageStatus.SUCCEEDED
    html, doctest = release_project.runner.calls
    assert "-b html -W --keep-going" in html.command
    assert "-b doctest -W --keep-going" in doctest.command
    assert html.argv[-1] == str(settings.docs_build_dir / "html")


def test_docs_not_strict_drops_warning_flags(tmp_path: Path) -> None:
    """With ``docs_strict = false`` Sphinx warnings no longer fail the build."""
    project: ReleaseProject = new_release_project(tmp_path / "lenient", docs_strict=False)
    settings = project.settings
    ctx: BuildContext = _context(project)
    ctx.guard.patch()
    write_wheel(settings.dist_dir, settings.wheel_name_prefix, settings.platform_fragment)

    result: StageResult = DocsStage()(ctx)

    assert result.status is StageStatus.SUCCEEDED
    assert all("-W" not in call.argv for call in project.runner.calls)


def test_docs_disabled_by_no_docs(release_project: ReleaseProject) -> None:
    """``--no-docs`` and ``--quick-check`` both deselect the docs stage."""
    assert DocsStage().enabled(release_project.config())
    assert not DocsStage().enabled(release_project.config(generate_docs=False))
    assert not DocsStage().enabled(release_project.config(full_check=False))
