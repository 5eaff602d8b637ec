# ==================================================
# sdjournal/cursor.py
# ==================================================
import logging
from typing import List, Optional

from .const import *
from .errors import EntryArrayLoopError
from .journalfile import JournalFile
from .objects import EntryArrayObject, unpack_offsets

logger = logging.getLogger(__name__)


class EntryArrayCursor:
    """Forward-only walk over the linked list of entry-array objects.

    Yields entry offsets in on-disk (append) order. ``None`` from
    :meth:`next_offset` means the list is exhausted, and stays that way.
    """
    def __init__(self, journal: JournalFile, offset: int = 0):
        self.journal   = journal
        self.compact   = journal.compact
        self.item_size = COMPACT_ENTRY_ARRAY_ITEM_SIZE if self.compact else ENTRY_ARRAY_ITEM_SIZE
        self.current: Optional[EntryArrayObject] = None
        self.position = 0
        self._items: List[int] = []
        if offset:
            self.seek(offset)

    # ------------------------------------------------------------------
    def seek(self, offset: int):
        array = self.journal.decode_object(offset, OBJECT_ENTRY_ARRAY)
        n = array.n_items(self.item_size)
        buf = self.journal.byte_slice(array.payload_offset, n * self.item_size)
        self._items   = unpack_offsets(buf, self.item_size)
        self.current  = array
        self.position = 0
        logger.debug("entry array at %d: %d items, next=%d",
                     offset, n, array.next_entry_array_offset)

    def next_offset(self) -> Optional[int]:
        while self.current is not None:
            if self.position < len(self._items):
                entry_offset = self._items[self.position]
                self.position += 1
                return entry_offset

            nxt = self.current.next_entry_array_offset
            if nxt == 0:
                return None
            if nxt <= self.current.offset:
                raise EntryArrayLoopError(self.current.offset, nxt)
            self.seek(nxt)
        return None

    # ------------------------------------------------------------------
    def __iter__(self):
        return self

    def __next__(self) -> int:
        offset = self.next_offset()
        if offset is None:
            raise StopIteration
        return offset
