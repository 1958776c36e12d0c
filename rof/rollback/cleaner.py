"""
Cleaner
~~~~~~~

Removes the snapshot directory once a run is over.
"""

from __future__ import annotations

import logging
import os

from rof.exceptions import SnapshotDirectoryError
from rof.rollback.snapshot_store import SnapshotStore

__all__ = ["Cleaner"]

logger = logging.getLogger(__name__)


class Cleaner:
    """
    Best-effort removal of every regular file in the snapshot directory,
    then of the directory itself. Failures are logged, never raised.
    """

    def __init__(self, store: SnapshotStore) -> None:
        self._store = store

    def cleanup(self) -> None:
        try:
            names = self._store.snapshot_files()
        except SnapshotDirectoryError:
            logger.warning("Snapshot directory not found: %s", self._store.name)
            return

        for name in names:
            path = os.path.join(self._store.path, name)
            try:
                os.remove(path)
            except OSError as exc:
                logger.warning("Failed to remove file: %s (%s)", path, exc)

        try:
            os.rmdir(self._store.path)
        except OSError as exc:
            logger.warning(
                "Failed to remove directory: %s (%s)", self._store.name, exc
            )
