# ==================================================
# sdjournal/reader.py
# ==================================================
# Assembles journal entries into ordered ``name -> value`` records.
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterator, List, Optional, Tuple

from .compression import PayloadDecompressor
from .config import ReaderConfig
from .const import *
from .cursor import EntryArrayCursor
from .errors import InvalidStateError, MalformedFieldError
from .journalfile import HandleState, JournalFile
from .objects import EntryObject, Header, unpack_offsets

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class JournalEntry:
    """One log record together with the metadata stored in its entry object."""
    offset: int
    seqnum: int
    realtime: int               # usec since the epoch
    monotonic: int              # usec since boot
    boot_id: bytes
    fields: Dict[str, str] = field(default_factory=dict)

    @property
    def timestamp(self) -> datetime:
        return _EPOCH + timedelta(microseconds=self.realtime)

    def boot_id_hex(self) -> str:
        return self.boot_id.hex()


class JournalReader:
    """Live reader over an open :class:`JournalFile`.

    The entry-array cursor is seeded here, once, from the header, so a bad
    ``entry_array_offset`` raises from the constructor. The journal stays
    OPEN in that case and closing it is up to the caller; ``open_journal``
    does that itself. After any error while reading, the reader refuses
    further reads.
    """
    def __init__(self, journal: JournalFile, config: Optional[ReaderConfig] = None):
        if journal.state is not HandleState.OPEN:
            raise InvalidStateError(f"Journal {journal.path} is {journal.state.value}, not open")
        self.journal         = journal
        self.config          = config or ReaderConfig()
        self.compact         = journal.compact
        self.entry_item_size = COMPACT_ENTRY_ITEM_SIZE if self.compact else ENTRY_ITEM_SIZE
        self.decompressor    = PayloadDecompressor()
        self.cursor          = EntryArrayCursor(journal, journal.header.entry_array_offset)
        self._failed    = False
        self._exhausted = False

    @property
    def header(self) -> Header:
        return self.journal.header

    # ── entry objects ──────────────────────────────────────────────────
    def _data_offsets(self, entry: EntryObject) -> List[int]:
        n = entry.n_items(self.entry_item_size)
        buf = self.journal.byte_slice(entry.payload_offset, n * self.entry_item_size)
        if self.compact:
            return unpack_offsets(buf, 4)
        return unpack_offsets(buf, 8, self.entry_item_size)

    def data_offsets_for_entry(self, offset: int) -> List[int]:
        """Offsets of the data objects an entry references, in stored order."""
        return self._data_offsets(self.journal.decode_object(offset, OBJECT_ENTRY))

    # ── data objects ───────────────────────────────────────────────────
    def load_field(self, offset: int) -> bytes:
        """Raw ``NAME=VALUE`` bytes of the data object at ``offset``."""
        data = self.journal.decode_object(offset, OBJECT_DATA)
        payload = self.journal.byte_slice(data.payload_offset, data.payload_size)
        return self.decompressor.decompress(data.flags, payload, offset)

    def _split_field(self, offset: int, payload: bytes) -> Tuple[str, str]:
        name, sep, value = payload.partition(b"=")
        if not sep:
            raise MalformedFieldError(offset, payload)
        errors = self.config.decode_errors
        return name.decode("utf-8", errors), value.decode("utf-8", errors)

    def _read_fields(self, entry: EntryObject) -> Dict[str, str]:
        fields = {}
        for data_offset in self._data_offsets(entry):
            name, value = self._split_field(data_offset, self.load_field(data_offset))
            fields[name] = value            # repeated names: last one wins
        return fields

    def read_entry(self, offset: int) -> Dict[str, str]:
        return self._read_fields(self.journal.decode_object(offset, OBJECT_ENTRY))

    # ── iteration ──────────────────────────────────────────────────────
    def next_entry(self) -> Optional[JournalEntry]:
        """Next entry in write order, or ``None`` once the stream is exhausted."""
        if self._failed:
            raise InvalidStateError(f"Reading {self.journal.path} already failed; reopen to retry")
        if self._exhausted:
            return None
        try:
            offset = self.cursor.next_offset()
            # preallocated, never-written slots in the last array read as 0
            if not offset:
                self._exhausted = True
                return None
            entry = self.journal.decode_object(offset, OBJECT_ENTRY)
            return JournalEntry(offset, entry.seqnum, entry.realtime, entry.monotonic,
                                entry.boot_id, self._read_fields(entry))
        except Exception:
            self._failed = True
            raise

    def next_record(self) -> Optional[Dict[str, str]]:
        """Fields of the next entry, or ``None`` at end of stream."""
        entry = self.next_entry()
        return entry.fields if entry is not None else None

    def entries(self) -> Iterator[JournalEntry]:
        while True:
            entry = self.next_entry()
            if entry is None:
                return
            yield entry

    def __iter__(self) -> Iterator[Dict[str, str]]:
        for entry in self.entries():
            yield entry.fields

    # ── lifecycle ──────────────────────────────────────────────────────
    def close(self):
        self.journal.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        if self.journal.state is HandleState.OPEN:
            self.close()


def open_journal(path: "str | os.PathLike", config: Optional[ReaderConfig] = None) -> JournalReader:
    """Open ``path`` and return a reader positioned before the first entry."""
    journal = JournalFile(path).open()
    try:
        return JournalReader(journal, config)
    except BaseException:
        journal.close()
        raise
