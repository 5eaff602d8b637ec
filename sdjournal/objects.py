# ==================================================
# sdjournal/objects.py
# ==================================================
"""Typed views over journal objects and the single decoder that builds them.

Every view holds plain values unpacked from the mapping; nothing here keeps a
buffer exported from the mmap, so closing the file never trips over a live
view.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import TYPE_CHECKING, List

import numpy as np

from .const import *
from .errors import (OutOfBoundsError, TruncatedObjectError,
                     UnalignedOffsetError, UnexpectedObjectTypeError)

if TYPE_CHECKING:
    from .journalfile import JournalFile


# ── file header ──────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Header:
    signature: bytes
    compatible_flags: int
    incompatible_flags: int
    state: int
    file_id: bytes
    machine_id: bytes
    tail_entry_boot_id: bytes
    seqnum_id: bytes
    header_size: int
    arena_size: int
    data_hash_table_offset: int
    data_hash_table_size: int
    field_hash_table_offset: int
    field_hash_table_size: int
    tail_object_offset: int
    n_objects: int
    n_entries: int
    tail_entry_seqnum: int
    head_entry_seqnum: int
    entry_array_offset: int
    head_entry_realtime: int
    tail_entry_realtime: int
    tail_entry_monotonic: int

    @classmethod
    def from_bytes(cls, data: bytes) -> "Header":
        return cls(*struct.unpack_from(HEADER_FMT, data, 0))

    @property
    def compact(self) -> bool:
        return bool(self.incompatible_flags & HEADER_INCOMPATIBLE_COMPACT)

    @property
    def keyed_hash(self) -> bool:
        return bool(self.incompatible_flags & HEADER_INCOMPATIBLE_KEYED_HASH)

    @property
    def compression(self) -> List[str]:
        """Compression algorithms the writer declared it may have used."""
        algos = []
        if self.incompatible_flags & HEADER_INCOMPATIBLE_COMPRESSED_XZ:
            algos.append("XZ")
        if self.incompatible_flags & HEADER_INCOMPATIBLE_COMPRESSED_LZ4:
            algos.append("LZ4")
        if self.incompatible_flags & HEADER_INCOMPATIBLE_COMPRESSED_ZSTD:
            algos.append("ZSTD")
        return algos

    @property
    def unknown_incompatible_flags(self) -> int:
        return self.incompatible_flags & ~HEADER_INCOMPATIBLE_SUPPORTED

    def seqnum_id_hex(self) -> str:
        return self.seqnum_id.hex()

    def machine_id_hex(self) -> str:
        return self.machine_id.hex()

    def file_id_hex(self) -> str:
        return self.file_id.hex()


# ── object views ─────────────────────────────────────────────────────────
@dataclass(frozen=True)
class ObjectView:
    offset: int
    type: int
    flags: int
    size: int
    payload_offset: int

    @property
    def payload_size(self) -> int:
        return self.offset + self.size - self.payload_offset


@dataclass(frozen=True)
class EntryArrayObject(ObjectView):
    next_entry_array_offset: int

    def n_items(self, item_size: int) -> int:
        return self.payload_size // item_size


@dataclass(frozen=True)
class EntryObject(ObjectView):
    seqnum: int
    realtime: int
    monotonic: int
    boot_id: bytes
    xor_hash: int

    def n_items(self, item_size: int) -> int:
        return self.payload_size // item_size


@dataclass(frozen=True)
class DataObject(ObjectView):
    hash: int
    next_hash_offset: int
    next_field_offset: int
    entry_offset: int
    entry_array_offset: int
    n_entries: int

    @property
    def compression(self) -> int:
        return self.flags & OBJECT_COMPRESSED_MASK


# kind -> (fixed prefix format, fixed prefix size, view class)
_LAYOUTS = {
    OBJECT_ENTRY_ARRAY: (ENTRY_ARRAY_OBJECT_FMT, ENTRY_ARRAY_OBJECT_SIZE, EntryArrayObject),
    OBJECT_ENTRY:       (ENTRY_OBJECT_FMT,       ENTRY_OBJECT_SIZE,       EntryObject),
    OBJECT_DATA:        (DATA_OBJECT_FMT,        DATA_OBJECT_SIZE,        DataObject),
}


def decode_object(journal: "JournalFile", offset: int, kind: int) -> ObjectView:
    """Validate the object at ``offset`` and return a typed view of it.

    Checks, in order: 8-byte alignment, room for the fixed prefix, the type
    tag, and that the declared size fits both the prefix and the mapping.
    """
    if kind not in _LAYOUTS:
        raise ValueError(f"No view for object type {kind}")
    fmt, prefix, view_cls = _LAYOUTS[kind]

    if offset % OBJECT_ALIGNMENT != 0:
        raise UnalignedOffsetError(offset)

    # compact data objects carry 8 extra bytes ahead of the payload
    if kind == OBJECT_DATA and journal.compact:
        prefix += COMPACT_DATA_EXTRA_SIZE

    size = journal.size
    if offset > size or size - offset < prefix:
        raise TruncatedObjectError(
            f"Object at {offset} runs past end of file ({size} bytes)", offset)

    typ, flags, obj_size, *fields = struct.unpack(fmt, journal.byte_slice(offset, struct.calcsize(fmt)))
    if typ != kind:
        raise UnexpectedObjectTypeError(typ, kind, offset)
    if obj_size < prefix:
        raise TruncatedObjectError(
            f"Object at {offset} declares size {obj_size} below its {prefix}-byte prefix", offset)
    if offset + obj_size > size:
        raise OutOfBoundsError(offset, obj_size, size)

    return view_cls(offset, typ, flags, obj_size, offset + prefix, *fields)


# ── packed offset arrays ─────────────────────────────────────────────────
_DTYPES = {4: np.dtype("<u4"), 8: np.dtype("<u8")}


def unpack_offsets(buf: bytes, width: int, stride: int | None = None) -> List[int]:
    """Little-endian offsets of ``width`` bytes, one every ``stride`` bytes.

    Regular-layout entry items are 16 bytes (offset + per-field hash); only
    the leading offset is returned and the hash is ignored.
    """
    stride = stride or width
    arr = np.frombuffer(buf, dtype=_DTYPES[width])
    if stride != width:
        arr = arr[::stride // width]
    return arr.tolist()
