"""
Restorer
~~~~~~~~

Puts snapshot contents back over their original files after a failed
command.

Restoration runs in two phases. Every snapshot in the directory is
first checked against the current run tag; a single entry from another
generation aborts the whole restoration before any file is touched.
The copies are then staged inside the snapshot directory and moved over
the originals one by one.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass

from rof.exceptions import (
    GenerationMismatchError,
    RestoreCopyError,
    SnapshotDirectoryError,
)
from rof.rollback.entry import SEPARATOR, manifest_tag
from rof.rollback.snapshot_store import SnapshotStore

__all__ = ["Restorer"]

logger = logging.getLogger(__name__)

# Suffixes are limited to letters, digits, "_" and "-", so a staged copy
# never looks like a snapshot.
_STAGE_MARK = "~"


@dataclass
class _PlannedRestore:
    snapshot_path: str
    original_name: str
    staged_path: str | None = None


class Restorer:
    """Applies the snapshots of one run tag back onto the working directory."""

    def __init__(self, store: SnapshotStore) -> None:
        self._store = store

    def restore_snapshots(self, tag: str) -> list[str]:
        """
        Restore every snapshot taken under ``tag``.

        A snapshot directory that cannot be listed is reported and treated
        as nothing to restore. Individual files that cannot be restored are
        reported and skipped.

        Returns:
            Names of the files that were restored.

        Raises:
            GenerationMismatchError: If a snapshot belongs to another run.
                No file has been modified when this is raised.
        """
        try:
            names = self._store.snapshot_files()
        except SnapshotDirectoryError as exc:
            logger.warning("opendir snapshot failed: %s", exc)
            return []

        plan = self._plan(names, tag)

        for item in plan:
            try:
                item.staged_path = self._stage(item)
            except RestoreCopyError as exc:
                logger.warning("%s", exc)

        restored: list[str] = []
        for item in plan:
            if item.staged_path is None:
                continue
            try:
                self._commit(item)
            except RestoreCopyError as exc:
                logger.warning("%s", exc)
                continue
            logger.info("Restored file: %s", item.original_name)
            restored.append(item.original_name)
        return restored

    def _plan(self, names: list[str], tag: str) -> list[_PlannedRestore]:
        """Validate every snapshot name against ``tag`` and resolve originals."""
        suffix = SEPARATOR + self._store.suffix
        manifest = self._store.load_manifest(tag)
        plan: list[_PlannedRestore] = []

        for name in names:
            if manifest_tag(name) is not None or not name.endswith(suffix):
                continue
            base = name[: -len(suffix)]
            if not base.endswith(tag):
                raise GenerationMismatchError(
                    f"failed to find file for tag {tag}, kindly restore it "
                    f"manually from the snapshot's dir {self._store.name}",
                    tag=tag,
                    entry_name=name,
                    snapshot_dir=self._store.name,
                )

            head = base[: -len(tag)]
            if not head.endswith(SEPARATOR) or head == SEPARATOR:
                logger.debug("Skipping %s: not in expected format", name)
                continue
            original = head[: -len(SEPARATOR)]

            recorded = manifest.get(name)
            if recorded is not None and recorded != original:
                if self._is_plain_name(recorded):
                    original = recorded
                else:
                    logger.warning(
                        "Ignoring manifest name %r for %s", recorded, name
                    )

            plan.append(
                _PlannedRestore(
                    snapshot_path=os.path.join(self._store.path, name),
                    original_name=original,
                )
            )
        return plan

    @staticmethod
    def _is_plain_name(name: str) -> bool:
        return (
            bool(name)
            and name not in (".", "..")
            and os.sep not in name
            and (os.altsep is None or os.altsep not in name)
        )

    def _stage(self, item: _PlannedRestore) -> str:
        """Copy a snapshot to a temporary file ready to be moved into place."""
        staged = item.snapshot_path + _STAGE_MARK
        target = os.path.join(self._store.workdir, item.original_name)
        try:
            shutil.copyfile(item.snapshot_path, staged)
            if os.path.isfile(target):
                shutil.copymode(target, staged)
        except OSError as exc:
            self._discard(staged)
            raise RestoreCopyError(
                f"Failed to restore file {item.original_name}: {exc}",
                details={"file": item.original_name},
            ) from exc
        return staged

    def _commit(self, item: _PlannedRestore) -> None:
        assert item.staged_path is not None
        target = os.path.join(self._store.workdir, item.original_name)
        try:
            os.replace(item.staged_path, target)
        except OSError as exc:
            self._discard(item.staged_path)
            raise RestoreCopyError(
                f"Failed to restore file {item.original_name}: {exc}",
                details={"file": item.original_name},
            ) from exc

    @staticmethod
    def _discard(path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.debug("Could not remove staged file %s: %s", path, exc)
