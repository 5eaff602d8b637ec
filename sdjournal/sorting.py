# ==================================================
# sdjournal/sorting.py
# ==================================================
"""Order journal files chronologically from their headers alone.

Files are ordered by ``seqnum_id`` bytes first and ``head_entry_seqnum``
second. Within one seqnum_id this is write order. Files from different
seqnum_id lineages are only ordered by the id bytes, which says nothing
about wall-clock time between lineages.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from .errors import JournalError
from .journalfile import JournalFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JournalSortKey:
    path: str
    seqnum_id: bytes
    head_entry_seqnum: int

    def key(self) -> Tuple[bytes, int]:
        return self.seqnum_id, self.head_entry_seqnum


@dataclass
class SortResult:
    """Ordered paths plus the inputs that could not be opened as journals."""
    paths: List[str] = field(default_factory=list)
    skipped: List[Tuple[str, JournalError]] = field(default_factory=list)


def read_sort_key(path: "str | os.PathLike") -> JournalSortKey:
    """Open ``path`` just long enough to read its ordering fields."""
    with JournalFile(path) as journal:
        header = journal.header
        logger.debug("%s: seqnum_id=%s head_entry_seqnum=%d",
                     path, header.seqnum_id_hex(), header.head_entry_seqnum)
        return JournalSortKey(os.fspath(path), header.seqnum_id, header.head_entry_seqnum)


def sort_files(paths: Iterable["str | os.PathLike"]) -> SortResult:
    """Sort journal files; unreadable ones are skipped, not fatal."""
    keys = []
    result = SortResult()
    for path in paths:
        try:
            keys.append(read_sort_key(path))
        except JournalError as e:
            logger.warning("skipping %s: %s", path, e)
            result.skipped.append((os.fspath(path), e))

    # bytes compare lexicographically, matching a byte-wise id comparison
    keys.sort(key=JournalSortKey.key)
    result.paths = [k.path for k in keys]
    return result
