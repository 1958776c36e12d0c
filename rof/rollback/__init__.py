"""rof rollback system — snapshot capture, restoration, and cleanup."""

from rof.rollback.cleaner import Cleaner
from rof.rollback.entry import SnapshotEntry, snapshot_name, split_snapshot_name
from rof.rollback.restorer import Restorer
from rof.rollback.snapshot_store import SnapshotStore

__all__ = [
    "SnapshotStore",
    "SnapshotEntry",
    "Restorer",
    "Cleaner",
    "snapshot_name",
    "split_snapshot_name",
]
