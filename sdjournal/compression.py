# ==================================================
# sdjournal/compression.py
# ==================================================
import zstandard as zstd

from .const import *
from .errors import CorruptCompressedDataError, UnsupportedCompressionError

# -------- flag helpers ----------------------------------------------------

def algorithm_name(flags: int) -> str:
    if flags & OBJECT_COMPRESSED_XZ:
        return "XZ"
    if flags & OBJECT_COMPRESSED_LZ4:
        return "LZ4"
    if flags & OBJECT_COMPRESSED_ZSTD:
        return "ZSTD"
    return "none"

# -------- zstd wrapper ----------------------------------------------------

class PayloadDecompressor:
    """Decompresses data-object payloads according to their object flags.

    Holds its own zstd context; contexts are not safe to share between
    threads, so each reader gets one.
    """
    def __init__(self):
        self.dctx = zstd.ZstdDecompressor()

    def decompress_zstd(self, data: bytes, offset: int = None) -> bytes:
        # systemd may omit the content size from the frame header, so
        # stream through a decompressobj rather than dctx.decompress()
        dobj = self.dctx.decompressobj()
        try:
            out = dobj.decompress(data)
        except zstd.ZstdError as e:
            raise CorruptCompressedDataError(
                f"ZSTD payload at {offset} rejected: {e}", details={"offset": offset}) from e
        if not dobj.eof:
            raise CorruptCompressedDataError(
                f"ZSTD payload at {offset} ends mid-frame", details={"offset": offset})
        return out

    def decompress(self, flags: int, data: bytes, offset: int = None) -> bytes:
        """Return the plain payload; uncompressed data is passed through."""
        if flags & (OBJECT_COMPRESSED_XZ | OBJECT_COMPRESSED_LZ4):
            raise UnsupportedCompressionError(algorithm_name(flags), offset)
        if flags & OBJECT_COMPRESSED_ZSTD:
            return self.decompress_zstd(data, offset)
        return data
