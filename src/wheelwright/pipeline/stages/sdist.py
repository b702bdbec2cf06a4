# topmark:header:start
#
#   project      : Wheelwright
#   file         : sdist.py
#   file_relpath : src/wheelwright/pipeline/stages/sdist.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Source distribution stage.

The sdist is the publishable artifact: downstream consumers build it against the
*published* core dependency. It is therefore built while the manifest is unpatched,
and the archive is checked afterwards for any trace of the local dependency path.
"""

from __future__ import annotations

import tarfile
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from wheelwright.config.logging import get_logger
from wheelwright.core.errors import InvariantViolation
from wheelwright.manifest.state import PatchState
from wheelwright.pipeline.stages.base import BaseStage, require_artifacts
from wheelwright.tools import commands

if TYPE_CHECKING:
    from pathlib import Path

    from wheelwright.config.logging import WheelwrightLogger
    from wheelwright.pipeline.context import BuildContext

logger: WheelwrightLogger = get_logger(__name__)

SDIST_PATTERN: str = "*.tar.gz"
MANIFEST_NAME: str = "Cargo.toml"


def archived_manifests(archive: Path) -> dict[str, str]:
    """Return ``{member name: text}`` for every dependency manifest inside ``archive``.

    Raises:
        InvariantViolation: If the archive cannot be read.
    """
    found: dict[str, str] = {}
    try:
        with tarfile.open(archive, "r:gz") as tar:
            for member in tar.getmembers():
                if not member.isfile() or PurePosixPath(member.name).name != MANIFEST_NAME:
                    continue
                fh = tar.extractfile(member)
                if fh is None:
                    continue
                with fh:
                    found[member.name] = fh.read().decode("utf-8", errors="replace")
    except (OSError, tarfile.TarError) as e:
        raise InvariantViolation(f"cannot read source distribution {archive}: {e}") from e
    return found


class SdistStage(BaseStage):
    """Build the source distribution with ``maturin sdist``.

    Requires:
        ``PatchState.UNPATCHED``.

    Postconditions:
        At least one ``*.tar.gz`` exists in the dist directory, and no manifest inside
        it references the local dependency path.
    """

    def __init__(self) -> None:
        super().__init__(name="sdist", requires=PatchState.UNPATCHED)

    def run(self, ctx: BuildContext) -> None:
        """Run ``maturin sdist`` from the package directory."""
        settings = ctx.settings
        self.invoke(
            ctx,
            commands.maturin_sdist(settings.venv_python, settings.dist_dir),
            cwd=settings.package_dir,
        )

    def check_postconditions(self, ctx: BuildContext) -> None:
        """Require an sdist that references the dependency by its public identity."""
        local: str = ctx.settings.dependency_path.as_posix()
        for archive in require_artifacts(ctx.settings.dist_dir, SDIST_PATTERN):
            for name, text in archived_manifests(archive).items():
                if local in text:
                    raise InvariantViolation(
                        f"source distribution {archive.name} references the local path "
                        f"{local} in {name}"
                    )
            logger.info("Source distribution %s is publishable", archive.name)
