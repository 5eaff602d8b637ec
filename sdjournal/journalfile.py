# ==================================================
# sdjournal/journalfile.py
# ==================================================
import logging
import mmap, os, struct
from enum import Enum
from pathlib import Path

from .const import *
from .errors import (BadSignatureError, InvalidStateError, JournalIOError,
                     OutOfBoundsError, TooSmallError, UnsupportedLayoutError)
from .objects import Header, ObjectView, decode_object

logger = logging.getLogger(__name__)


class HandleState(Enum):
    UNOPENED = "unopened"
    OPEN     = "open"
    CLOSED   = "closed"


class JournalFile:
    """Read-only mmap of one journal file plus its validated header.

    Lifecycle is one-way: UNOPENED -> OPEN -> CLOSED. A handle cannot be
    reopened; create a new one instead.
    """
    def __init__(self, path: "str | os.PathLike"):
        self.path   = Path(path)
        self.file   = None
        self.mm     = None
        self._state  = HandleState.UNOPENED
        self._header = None
        self._size   = 0

    # ------------------------------------------------------------------
    def open(self) -> "JournalFile":
        if self._state is not HandleState.UNOPENED:
            raise InvalidStateError(f"Journal {self.path} has been {self._state.value} already")
        try:
            self.file = open(self.path, "rb")
        except (OSError, ValueError) as e:          # ValueError: NUL byte in path
            self._state = HandleState.CLOSED
            raise JournalIOError(f"Cannot open {self.path!r}: {getattr(e, 'strerror', None) or e}",
                                 path=str(self.path)) from e

        try:
            self._map()
            self._header = self._validate()
        except BaseException:
            self._release()
            self._state = HandleState.CLOSED
            raise

        self._state = HandleState.OPEN
        logger.debug("opened %s (file_id=%s, %d bytes, compact=%s, keyed_hash=%s, compression=%s, n_entries=%d)",
                     self.path, self._header.file_id_hex(), self._size, self._header.compact,
                     self._header.keyed_hash, ",".join(self._header.compression) or "none",
                     self._header.n_entries)
        return self

    def _map(self):
        try:
            size = os.fstat(self.file.fileno()).st_size
        except OSError as e:
            raise JournalIOError(f"Cannot stat {self.path}: {e.strerror or e}", path=str(self.path)) from e
        # mmap refuses empty files, so check length before mapping
        if size < HEADER_SIZE:
            raise TooSmallError(size, HEADER_SIZE)
        try:
            self.mm = mmap.mmap(self.file.fileno(), 0, access=mmap.ACCESS_READ)
        except (OSError, ValueError) as e:
            raise JournalIOError(f"Cannot map {self.path}: {e}", path=str(self.path)) from e
        self._size = len(self.mm)
        if self._size < HEADER_SIZE:
            raise TooSmallError(self._size, HEADER_SIZE)

    def _validate(self) -> Header:
        if struct.calcsize(HEADER_FMT) != HEADER_SIZE:
            raise UnsupportedLayoutError(
                f"Header format packs to {struct.calcsize(HEADER_FMT)} bytes, expected {HEADER_SIZE}")
        if self.mm[:len(SIGNATURE)] != SIGNATURE:
            raise BadSignatureError(self.mm[:len(SIGNATURE)])

        header = Header.from_bytes(self.mm[:HEADER_SIZE])
        if header.header_size < HEADER_SIZE or header.header_size > self._size:
            raise UnsupportedLayoutError(
                f"header_size {header.header_size} inconsistent with {HEADER_SIZE}-byte header "
                f"in a {self._size}-byte file",
                details={"header_size": header.header_size})
        if header.unknown_incompatible_flags:
            logger.warning("%s: unknown incompatible flags 0x%x", self.path,
                           header.unknown_incompatible_flags)
        return header

    # ------------------------------------------------------------------
    def close(self):
        if self._state is not HandleState.OPEN:
            raise InvalidStateError(f"Journal {self.path} is {self._state.value}, cannot close")
        self._release()
        self._state = HandleState.CLOSED
        logger.debug("closed %s", self.path)

    def _release(self):
        if self.mm is not None:
            self.mm.close()
            self.mm = None
        if self.file is not None:
            self.file.close()
            self.file = None

    def __enter__(self):
        if self._state is HandleState.UNOPENED:
            self.open()
        return self

    def __exit__(self, *exc):
        if self._state is HandleState.OPEN:
            self.close()

    # ------------------------------------------------------------------
    @property
    def state(self) -> HandleState:
        return self._state

    @property
    def header(self) -> Header:
        if self._header is None:
            raise InvalidStateError(f"Journal {self.path} has not been opened")
        return self._header

    @property
    def compact(self) -> bool:
        return self.header.compact

    @property
    def size(self) -> int:
        self._require_open()
        return self._size

    def _require_open(self):
        if self._state is not HandleState.OPEN:
            raise InvalidStateError(f"Journal {self.path} is {self._state.value}")

    # ------------------------------------------------------------------
    def byte_slice(self, offset: int, length: int) -> bytes:
        """Copy of ``length`` bytes at ``offset``; never reads past the mapping."""
        self._require_open()
        if offset < 0 or length < 0 or offset + length > self._size:
            raise OutOfBoundsError(offset, length, self._size)
        return self.mm[offset: offset + length]

    def decode_object(self, offset: int, kind: int) -> ObjectView:
        return decode_object(self, offset, kind)

    def __repr__(self):
        return f"JournalFile({str(self.path)!r}, state={self._state.value})"
