"""
Snapshot Entry
~~~~~~~~~~~~~~

Naming scheme for snapshot files: ``<original>.<tag>.<suffix>``.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "SnapshotEntry",
    "SEPARATOR",
    "snapshot_name",
    "split_snapshot_name",
    "manifest_name",
    "manifest_tag",
]

SEPARATOR = "."

# A manifest name holds a single separator, at the start, while a snapshot
# name always holds at least two.
MANIFEST_PREFIX = ".manifest-"


@dataclass(frozen=True)
class SnapshotEntry:
    """
    One stored copy of a top-level file.

    Attributes:
        original_name: Name of the file in the working directory.
        tag: Run tag of the generation this copy belongs to.
        path: Location of the copy inside the snapshot directory.
    """

    original_name: str
    tag: str
    path: str


def snapshot_name(original_name: str, tag: str, suffix: str = "bak") -> str:
    """Return the stored file name for ``original_name`` under ``tag``."""
    return SEPARATOR.join((original_name, tag, suffix))


def split_snapshot_name(
    name: str, suffix: str = "bak"
) -> tuple[str, str] | None:
    """
    Split a stored file name into ``(base, tag)`` without knowing the tag.

    The tag is taken to be everything after the last separator of the
    base, which is only a guess when the tag itself is unknown. Returns
    None for names that are not snapshot files.
    """
    ending = SEPARATOR + suffix
    if manifest_tag(name) is not None or not name.endswith(ending):
        return None
    base = name[: -len(ending)]
    original, sep, tag = base.rpartition(SEPARATOR)
    if not sep or not original or not tag:
        return None
    return original, tag


def manifest_name(tag: str) -> str:
    """Return the manifest file name for ``tag``."""
    return MANIFEST_PREFIX + tag


def manifest_tag(name: str) -> str | None:
    """Return the tag of a manifest file name, or None for any other name."""
    if not name.startswith(MANIFEST_PREFIX):
        return None
    tag = name[len(MANIFEST_PREFIX) :]
    if not tag or SEPARATOR in tag:
        return None
    return tag
