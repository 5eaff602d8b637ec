# ==================================================
# sdjournal/const.py
# ==================================================
# On-disk layout of a systemd journal file (little-endian throughout).

SIGNATURE = b"LPKSHHRH"

# signature, compatible_flags, incompatible_flags, state, reserved(7),
# file_id, machine_id, tail_entry_boot_id, seqnum_id, 15 x u64
HEADER_FMT  = "<8sIIB7x16s16s16s16s15Q"
HEADER_SIZE = 208

OBJECT_HEADER_FMT  = "<BB6xQ"           # type, flags, padding, size
OBJECT_HEADER_SIZE = 16

ENTRY_ARRAY_OBJECT_FMT  = OBJECT_HEADER_FMT + "Q"           # next_entry_array_offset
ENTRY_ARRAY_OBJECT_SIZE = OBJECT_HEADER_SIZE + 8            # 24

ENTRY_OBJECT_FMT  = OBJECT_HEADER_FMT + "3Q16sQ"  # seqnum, realtime, monotonic, boot_id, xor_hash
ENTRY_OBJECT_SIZE = OBJECT_HEADER_SIZE + 48       # 64

# hash, next_hash_offset, next_field_offset, entry_offset, entry_array_offset, n_entries
DATA_OBJECT_FMT  = OBJECT_HEADER_FMT + "6Q"
DATA_OBJECT_SIZE = OBJECT_HEADER_SIZE + 48        # 64
COMPACT_DATA_EXTRA_SIZE = 8                       # tail_entry_array_offset/n_entries, not read

# packed item widths / strides per layout
ENTRY_ARRAY_ITEM_SIZE         = 8
COMPACT_ENTRY_ARRAY_ITEM_SIZE = 4
ENTRY_ITEM_SIZE               = 16              # object_offset(8) + hash(8)
COMPACT_ENTRY_ITEM_SIZE       = 4

OBJECT_ALIGNMENT = 8

# -------- object type tags ------------------------------------------------
OBJECT_UNUSED           = 0
OBJECT_DATA             = 1
OBJECT_FIELD            = 2
OBJECT_ENTRY            = 3
OBJECT_DATA_HASH_TABLE  = 4
OBJECT_FIELD_HASH_TABLE = 5
OBJECT_ENTRY_ARRAY      = 6
OBJECT_TAG              = 7

OBJECT_TYPE_NAMES = {
    OBJECT_UNUSED:           "unused",
    OBJECT_DATA:             "data",
    OBJECT_FIELD:            "field",
    OBJECT_ENTRY:            "entry",
    OBJECT_DATA_HASH_TABLE:  "data-hash-table",
    OBJECT_FIELD_HASH_TABLE: "field-hash-table",
    OBJECT_ENTRY_ARRAY:      "entry-array",
    OBJECT_TAG:              "tag",
}

# -------- object flags (compression) --------------------------------------
OBJECT_COMPRESSED_XZ   = 1 << 0
OBJECT_COMPRESSED_LZ4  = 1 << 1
OBJECT_COMPRESSED_ZSTD = 1 << 2
OBJECT_COMPRESSED_MASK = OBJECT_COMPRESSED_XZ | OBJECT_COMPRESSED_LZ4 | OBJECT_COMPRESSED_ZSTD

# -------- header incompatible flags ---------------------------------------
HEADER_INCOMPATIBLE_COMPRESSED_XZ   = 1 << 0
HEADER_INCOMPATIBLE_COMPRESSED_LZ4  = 1 << 1
HEADER_INCOMPATIBLE_KEYED_HASH      = 1 << 2
HEADER_INCOMPATIBLE_COMPRESSED_ZSTD = 1 << 3
HEADER_INCOMPATIBLE_COMPACT         = 1 << 4
HEADER_INCOMPATIBLE_SUPPORTED = (HEADER_INCOMPATIBLE_COMPRESSED_XZ
                                 | HEADER_INCOMPATIBLE_COMPRESSED_LZ4
                                 | HEADER_INCOMPATIBLE_KEYED_HASH
                                 | HEADER_INCOMPATIBLE_COMPRESSED_ZSTD
                                 | HEADER_INCOMPATIBLE_COMPACT)

# -------- header state byte -----------------------------------------------
STATE_OFFLINE = 0
