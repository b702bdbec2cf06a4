# topmark:header:start
#
#   project      : Wheelwright
#   file         : guard.py
#   file_relpath : src/wheelwright/manifest/guard.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Patch state guard for the dependency manifest.

`ManifestGuard` is the only writer of the manifest during a run. It reads the current
`PatchState` from disk on every query, so checks always reflect the file and never a
cached belief.

Typical usage (the scoped form guarantees the revert):

    ```python
    guard = ManifestGuard(settings, vcs)
    guard.verify_unpatched()
    with guard.patched():
        ...  # stages requiring PatchState.PATCHED
    ```
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from wheelwright.config.logging import get_logger
from wheelwright.core.errors import InvariantViolation, PathNotFoundError, WheelwrightError
from wheelwright.manifest.state import PatchState, detect_state, render_patched

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from wheelwright.config.logging import WheelwrightLogger
    from wheelwright.config.model import ProjectSettings
    from wheelwright.tools.vcs import Vcs

logger: WheelwrightLogger = get_logger(__name__)


class ManifestGuard:
    """Detect, verify and mutate the patch state of the dependency manifest.

    Args:
        settings (ProjectSettings): Project layout (manifest, marker, dependency).
        vcs (Vcs): Version-control collaborator used to revert the patch.

    Attributes:
        settings (ProjectSettings): Project layout.
        vcs (Vcs): Version-control collaborator.
        revert_error (WheelwrightError | None): Failure of the last scoped revert, if any.
    """

    def __init__(self, settings: ProjectSettings, vcs: Vcs) -> None:
        self.settings = settings
        self.vcs = vcs
        self.revert_error: WheelwrightError | None = None

    @property
    def manifest(self) -> Path:
        """Path of the guarded manifest."""
        return self.settings.manifest

    @property
    def local_path(self) -> Path:
        """Absolute in-tree location of the core dependency."""
        return self.settings.dependency_path

    def read_text(self) -> str:
        """Return the manifest content with its original line endings.

        Raises:
            PathNotFoundError: If the manifest does not exist.
        """
        if not self.manifest.is_file():
            raise PathNotFoundError(f"Manifest not found: {self.manifest}", path=self.manifest)
        with self.manifest.open("r", encoding="utf-8", newline="") as fh:
            return fh.read()

    def _write_text(self, text: str) -> None:
        with self.manifest.open("w", encoding="utf-8", newline="") as fh:
            fh.write(text)

    def read_state(self) -> PatchState:
        """Return the patch state currently on disk.

        Raises:
            PathNotFoundError: If the manifest does not exist.
            InvariantViolation: If the manifest is neither patched nor unpatched.
        """
        try:
            state: PatchState = detect_state(
                self.read_text(),
                marker=self.settings.patch_marker,
                dependency=self.settings.dependency,
                local_path=self.local_path,
            )
        except InvariantViolation as e:
            raise InvariantViolation(
                f"manifest {self.manifest} is neither patched nor unpatched: {e}"
            ) from e
        logger.debug("Manifest %s is %s", self.manifest, state.value)
        return state

    def verify_unpatched(self) -> None:
        """Raise `InvariantViolation` unless the manifest is unpatched."""
        if self.read_state() is PatchState.PATCHED:
            raise InvariantViolation(f"manifest {self.manifest} is already patched")

    def verify_patched(self) -> None:
        """Raise `InvariantViolation` unless the manifest is patched."""
        if self.read_state() is PatchState.UNPATCHED:
            raise InvariantViolation(f"manifest {self.manifest} is not patched")

    def verify(self, required: PatchState) -> None:
        """Raise `InvariantViolation` unless the manifest is in state ``required``."""
        if required is PatchState.PATCHED:
            self.verify_patched()
        else:
            self.verify_unpatched()

    def render_patched(self, text: str) -> str:
        """Return ``text`` with the local-path patch applied (no I/O)."""
        return render_patched(
            text,
            marker=self.settings.patch_marker,
            registry=self.settings.registry,
            dependency=self.settings.dependency,
            local_path=self.local_path,
        )

    def patch(self) -> PatchState:
        """Point the core dependency at its local, in-tree location.

        Returns:
            PatchState: The state read back from disk (``PATCHED``).

        Raises:
            InvariantViolation: If the manifest is not unpatched.
            PathNotFoundError: If the local dependency directory does not exist. Nothing
                is written in that case.
        """
        self.verify_unpatched()
        if not self.local_path.is_dir():
            raise PathNotFoundError(
                f"Local dependency directory not found: {self.local_path}",
                path=self.local_path,
            )
        self._write_text(self.render_patched(self.read_text()))
        logger.info("Patched %s: %s -> %s", self.manifest, self.settings.dependency, self.local_path)
        state: PatchState = self.read_state()
        if state is not PatchState.PATCHED:
            raise InvariantViolation(f"manifest {self.manifest} did not become patched")
        return state

    def unpatch(self) -> PatchState:
        """Restore the manifest to its last committed content.

        Restoring an already unpatched manifest changes nothing.

        Returns:
            PatchState: The state read back from disk (``UNPATCHED``).

        Raises:
            ToolFailure: If the version-control restore fails.
            InvariantViolation: If the restored manifest is not unpatched.
        """
        self.vcs.restore(self.manifest)
        state: PatchState = self.read_state()
        if state is not PatchState.UNPATCHED:
            raise InvariantViolation(f"manifest {self.manifest} is still patched after revert")
        logger.info("Reverted %s", self.manifest)
        return state

    @contextmanager
    def patched(self) -> Iterator[PatchState]:
        """Hold the manifest patched for the duration of a ``with`` block.

        The revert runs on every exit path, including a failing `patch`. A revert
        failure is recorded in `revert_error`; it propagates only when nothing else
        is already propagating, so it never replaces the original error.

        Yields:
            PatchState: ``PATCHED``.
        """
        self.revert_error = None
        failed: bool = False
        try:
            yield self.patch()
        except BaseException:
            failed = True
            raise
        finally:
            try:
                self.unpatch()
            except WheelwrightError as e:
                self.revert_error = e
                logger.error("Reverting %s failed: %s", self.manifest, e)
                if not failed:
                    raise
