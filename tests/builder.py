"""
Synthetic journal files for tests.

JournalBuilder lays out a header followed by 8-byte aligned objects, in
either the regular (64-bit offsets) or compact (32-bit offsets) layout.
Offsets returned by the add_* methods are absolute file offsets.
"""

from __future__ import annotations

import struct
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from sdjournal.const import *

Fields = Union[Dict[str, str], Sequence[Tuple[str, str]]]


class JournalBuilder:
    def __init__(
        self,
        compact: bool = False,
        seqnum_id: bytes = b"\x01" * 16,
        head_entry_seqnum: int = 1,
    ) -> None:
        self.compact = compact
        self.seqnum_id = seqnum_id
        self.head_entry_seqnum = head_entry_seqnum
        self.buf = bytearray(HEADER_SIZE)
        self.n_objects = 0
        self.n_entries = 0

    def _append(self, obj: bytes) -> int:
        offset = len(self.buf)
        self.buf += obj
        self.buf += b"\0" * (-len(self.buf) % OBJECT_ALIGNMENT)
        self.n_objects += 1
        return offset

    def add_data(self, payload: bytes, flags: int = 0) -> int:
        extra = b"\0" * COMPACT_DATA_EXTRA_SIZE if self.compact else b""
        size = DATA_OBJECT_SIZE + len(extra) + len(payload)
        head = struct.pack(DATA_OBJECT_FMT, OBJECT_DATA, flags, size, 0, 0, 0, 0, 0, 1)
        return self._append(head + extra + payload)

    def add_entry(
        self,
        data_offsets: Iterable[int],
        seqnum: int = 1,
        realtime: int = 0,
        monotonic: int = 0,
        boot_id: bytes = b"\xbb" * 16,
    ) -> int:
        if self.compact:
            items = b"".join(struct.pack("<I", o) for o in data_offsets)
        else:
            # second half of each item is the per-field hash
            items = b"".join(struct.pack("<QQ", o, 0xDEADBEEF) for o in data_offsets)
        size = ENTRY_OBJECT_SIZE + len(items)
        head = struct.pack(ENTRY_OBJECT_FMT, OBJECT_ENTRY, 0, size,
                           seqnum, realtime, monotonic, boot_id, 0)
        self.n_entries += 1
        return self._append(head + items)

    def add_record(self, fields: Fields, **kwargs) -> int:
        pairs = fields.items() if isinstance(fields, dict) else fields
        offsets = [self.add_data(f"{k}={v}".encode()) for k, v in pairs]
        return self.add_entry(offsets, **kwargs)

    def add_entry_array(
        self,
        entry_offsets: List[int],
        next_offset: int = 0,
        capacity: Optional[int] = None,
    ) -> int:
        capacity = capacity or len(entry_offsets)
        slots = list(entry_offsets) + [0] * (capacity - len(entry_offsets))
        fmt = "<I" if self.compact else "<Q"
        items = b"".join(struct.pack(fmt, o) for o in slots)
        size = ENTRY_ARRAY_OBJECT_SIZE + len(items)
        head = struct.pack(ENTRY_ARRAY_OBJECT_FMT, OBJECT_ENTRY_ARRAY, 0, size, next_offset)
        return self._append(head + items)

    def link(self, array_offset: int, next_offset: int) -> None:
        struct.pack_into("<Q", self.buf, array_offset + OBJECT_HEADER_SIZE, next_offset)

    def patch(self, offset: int, data: bytes) -> None:
        self.buf[offset:offset + len(data)] = data

    def build(
        self,
        entry_array_offset: int = 0,
        signature: bytes = SIGNATURE,
        header_size: int = HEADER_SIZE,
        incompatible_flags: Optional[int] = None,
    ) -> bytes:
        if incompatible_flags is None:
            incompatible_flags = HEADER_INCOMPATIBLE_COMPACT if self.compact else 0
        header = struct.pack(
            HEADER_FMT,
            signature, 0, incompatible_flags, STATE_OFFLINE,
            b"\x11" * 16, b"\x22" * 16, b"\x33" * 16, self.seqnum_id,
            header_size,
            len(self.buf) - HEADER_SIZE,    # arena_size
            0, 0, 0, 0,                     # hash tables
            0,                              # tail_object_offset
            self.n_objects,
            self.n_entries,
            self.head_entry_seqnum + max(self.n_entries - 1, 0),
            self.head_entry_seqnum,
            entry_array_offset,
            0, 0, 0,
        )
        out = bytearray(self.buf)
        out[:HEADER_SIZE] = header
        return bytes(out)


def simple_journal(compact: bool = False) -> Tuple[JournalBuilder, int]:
    """One entry array -> one entry -> data objects A=1 and B=2."""
    b = JournalBuilder(compact=compact)
    entry = b.add_record([("A", "1"), ("B", "2")], seqnum=1, realtime=1_700_000_000_000_000)
    arr = b.add_entry_array([entry])
    return b, arr
