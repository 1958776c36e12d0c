"""
Snapshot Store
~~~~~~~~~~~~~~

Copies every top-level regular file of the working directory into a
flat snapshot directory before the command runs.

Snapshotting is best-effort: a file that cannot be copied is reported
and skipped, and a snapshot directory that cannot be prepared leaves the
command unprotected instead of stopping it.
"""

from __future__ import annotations

import json
import logging
import os
import shutil

from rof.exceptions import SnapshotCopyError, SnapshotDirectoryError
from rof.rollback.entry import (
    SEPARATOR,
    SnapshotEntry,
    manifest_name,
    manifest_tag,
    snapshot_name,
    split_snapshot_name,
)

__all__ = ["SnapshotStore"]

logger = logging.getLogger(__name__)


class SnapshotStore:
    """
    Manages the snapshot directory of one working directory.

    Snapshot files are named ``<original>.<tag>.<suffix>``. Alongside them a
    ``.manifest-<tag>`` JSON file records the original name of every copy, so
    names that contain the separator are recovered exactly.
    """

    def __init__(
        self,
        workdir: str | None = None,
        snapshot_dir: str = ".rof_snapshots",
        suffix: str = "bak",
        write_manifest: bool = True,
    ) -> None:
        self._workdir = os.path.abspath(workdir or os.getcwd())
        self._dir_name = snapshot_dir
        self._path = os.path.join(self._workdir, snapshot_dir)
        self._suffix = suffix
        self._write_manifest = write_manifest

    @property
    def path(self) -> str:
        """Absolute path of the snapshot directory."""
        return self._path

    @property
    def name(self) -> str:
        return self._dir_name

    @property
    def workdir(self) -> str:
        return self._workdir

    @property
    def suffix(self) -> str:
        return self._suffix

    def exists(self) -> bool:
        return os.path.isdir(self._path)

    # ── Capture ──────────────────────────────────────────────────

    def create_snapshots(self, tag: str) -> list[SnapshotEntry]:
        """
        Snapshot every top-level regular file under ``tag``.

        Returns the entries that were written. Files that could not be
        copied are logged and left out; if the snapshot directory cannot
        be prepared or the working directory cannot be read, nothing is
        snapshotted.
        """
        try:
            self._ensure_dir()
            names = self._regular_files(self._workdir)
        except SnapshotDirectoryError as exc:
            logger.warning("%s; running without snapshots", exc)
            return []

        entries: list[SnapshotEntry] = []
        for name in names:
            try:
                entries.append(self._snapshot_file(name, tag))
            except SnapshotCopyError as exc:
                logger.warning("%s", exc)

        if self._write_manifest and entries:
            self._save_manifest(tag, entries)

        logger.debug(
            "Snapshotted %d of %d files under tag %s", len(entries), len(names), tag
        )
        return entries

    def _ensure_dir(self) -> None:
        try:
            os.mkdir(self._path, 0o755)
        except FileExistsError:
            if not os.path.isdir(self._path):
                raise SnapshotDirectoryError(
                    f"mkdir failed: {self._path} exists and is not a directory"
                ) from None
        except OSError as exc:
            raise SnapshotDirectoryError(f"mkdir failed: {exc}") from exc

    @staticmethod
    def _regular_files(directory: str) -> list[str]:
        """Names of the regular files directly inside ``directory``, sorted."""
        try:
            with os.scandir(directory) as it:
                return sorted(
                    entry.name
                    for entry in it
                    if entry.is_file(follow_symlinks=False)
                )
        except OSError as exc:
            raise SnapshotDirectoryError(f"opendir failed: {exc}") from exc

    def _snapshot_file(self, name: str, tag: str) -> SnapshotEntry:
        dest = os.path.join(self._path, snapshot_name(name, tag, self._suffix))
        try:
            shutil.copyfile(os.path.join(self._workdir, name), dest)
        except OSError as exc:
            raise SnapshotCopyError(
                f"Failed to snapshot file {name}: {exc}",
                details={"file": name, "tag": tag},
            ) from exc
        return SnapshotEntry(original_name=name, tag=tag, path=dest)

    # ── Inspection ───────────────────────────────────────────────

    def snapshot_files(self) -> list[str]:
        """
        Names of the regular files in the snapshot directory, sorted.

        Raises:
            SnapshotDirectoryError: If the directory cannot be listed.
        """
        return self._regular_files(self._path)

    def entries(self, tag: str | None = None) -> list[SnapshotEntry]:
        """
        Snapshot entries currently on disk, optionally for one tag only.

        Original names come from the manifest when one is available.
        Returns an empty list when the directory cannot be listed.
        """
        try:
            names = self.snapshot_files()
        except SnapshotDirectoryError:
            return []

        manifests: dict[str, dict[str, str]] = {}
        result: list[SnapshotEntry] = []
        for name in names:
            parsed = split_snapshot_name(name, self._suffix)
            if parsed is None:
                continue
            original, entry_tag = parsed
            if tag is not None:
                # The known tag can be stripped exactly, dots and all.
                ending = SEPARATOR.join(("", tag, self._suffix))
                if not name.endswith(ending):
                    continue
                original, entry_tag = name[: -len(ending)], tag
            if entry_tag not in manifests:
                manifests[entry_tag] = self.load_manifest(entry_tag)
            original = manifests[entry_tag].get(name, original)
            result.append(
                SnapshotEntry(
                    original_name=original,
                    tag=entry_tag,
                    path=os.path.join(self._path, name),
                )
            )
        return result

    def existing_tags(self) -> set[str]:
        """Tags of every snapshot or manifest found in the directory."""
        try:
            names = self.snapshot_files()
        except SnapshotDirectoryError:
            return set()

        tags: set[str] = set()
        for name in names:
            parsed = split_snapshot_name(name, self._suffix)
            if parsed is not None:
                tags.add(parsed[1])
                continue
            tag = manifest_tag(name)
            if tag:
                tags.add(tag)
        return tags

    # ── Manifest ─────────────────────────────────────────────────

    def manifest_path(self, tag: str) -> str:
        return os.path.join(self._path, manifest_name(tag))

    def _save_manifest(self, tag: str, entries: list[SnapshotEntry]) -> None:
        data = {
            "tag": tag,
            "entries": {
                os.path.basename(entry.path): entry.original_name
                for entry in entries
            },
        }
        try:
            with open(self.manifest_path(tag), "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
        except OSError as exc:
            logger.warning("Failed to write snapshot manifest for %s: %s", tag, exc)

    def load_manifest(self, tag: str) -> dict[str, str]:
        """
        Map of snapshot file name to original name for ``tag``.

        A missing or unreadable manifest yields an empty mapping.
        """
        path = self.manifest_path(tag)
        if not os.path.exists(path):
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable snapshot manifest %s: %s", path, exc)
            return {}

        if not isinstance(data, dict) or data.get("tag") != tag:
            logger.warning("Ignoring snapshot manifest %s: tag mismatch", path)
            return {}
        entries = data.get("entries", {})
        if not isinstance(entries, dict):
            return {}
        return {str(k): str(v) for k, v in entries.items()}
