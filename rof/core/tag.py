"""
Run Tag Generator
~~~~~~~~~~~~~~~~~

Produces the identifier that ties one command execution to its
generation of snapshots.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime

__all__ = ["new_run_tag", "DEFAULT_TAG_FORMAT"]

logger = logging.getLogger(__name__)

DEFAULT_TAG_FORMAT = "%Y%m%d%H%M%S"


def new_run_tag(
    clock: Callable[[], datetime] | None = None,
    fmt: str = DEFAULT_TAG_FORMAT,
    taken: Iterable[str] = (),
) -> str:
    """
    Return a sortable, second-resolution run tag.

    Two calls within the same second render the same timestamp. When that
    timestamp is already in ``taken`` (tags found in the snapshot directory),
    a ``-N`` counter is appended so the new run never shares a tag with
    leftover snapshots.

    Args:
        clock: Returns the current local time. Defaults to ``datetime.now``.
        fmt: strftime format of the timestamp.
        taken: Tags that must not be reused.
    """
    now = (clock or datetime.now)()
    tag = now.strftime(fmt)

    used = set(taken)
    if tag not in used:
        return tag

    counter = 1
    while f"{tag}-{counter}" in used:
        counter += 1
    logger.debug("Run tag %s already in use, using %s-%d", tag, tag, counter)
    return f"{tag}-{counter}"
