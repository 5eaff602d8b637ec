# ==================================================
# sdjournal/errors.py
# ==================================================
# Everything raised while reading derives from JournalError; nothing is retried.
from __future__ import annotations

from typing import Any, Dict, Optional

from .const import OBJECT_TYPE_NAMES


class JournalError(Exception):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class JournalIOError(JournalError):
    """Opening, stat'ing or mapping the file failed."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message, details={"path": path})
        self.path = path


class InvalidStateError(JournalError):
    """The handle is not in a state that allows the requested operation."""


# -------- open-time validation ----------------------------------------------

class ValidationError(JournalError):
    """The file failed header validation."""


class TooSmallError(ValidationError):
    """File is shorter than the fixed header."""

    def __init__(self, size: int, required: int) -> None:
        super().__init__(
            f"File is too small to hold a journal header ({size} < {required} bytes)",
            details={"size": size, "required": required},
        )
        self.size = size
        self.required = required


class BadSignatureError(ValidationError):
    """First 8 bytes are not the journal signature."""

    def __init__(self, found: bytes) -> None:
        super().__init__(f"Not a journal file (signature {found!r})", details={"found": found})
        self.found = found


class UnsupportedLayoutError(ValidationError):
    """Header layout does not match the fixed wire layout."""


# -------- traversal corruption ----------------------------------------------

class CorruptionError(JournalError):
    """An object reached during traversal is malformed."""


class UnalignedOffsetError(CorruptionError):
    def __init__(self, offset: int) -> None:
        super().__init__(f"Unaligned object offset {offset}", details={"offset": offset})
        self.offset = offset


class TruncatedObjectError(CorruptionError):
    def __init__(self, message: str, offset: int) -> None:
        super().__init__(message, details={"offset": offset})
        self.offset = offset


class OutOfBoundsError(CorruptionError):
    def __init__(self, offset: int, length: int, size: int) -> None:
        super().__init__(
            f"Read of {length} bytes at {offset} exceeds mapped size {size}",
            details={"offset": offset, "length": length, "size": size},
        )
        self.offset = offset
        self.length = length
        self.size = size


class UnexpectedObjectTypeError(CorruptionError):
    def __init__(self, found: int, expected: int, offset: int) -> None:
        super().__init__(
            f"Unexpected {OBJECT_TYPE_NAMES.get(found, f'type-{found}')} object at {offset} "
            f"(expected {OBJECT_TYPE_NAMES.get(expected, f'type-{expected}')})",
            details={"found": found, "expected": expected, "offset": offset},
        )
        self.found = found
        self.expected = expected
        self.offset = offset


class EntryArrayLoopError(CorruptionError):
    """An entry-array chain link does not point forward."""

    def __init__(self, offset: int, next_offset: int) -> None:
        super().__init__(
            f"Entry array at {offset} links back to {next_offset}",
            details={"offset": offset, "next_offset": next_offset},
        )
        self.offset = offset
        self.next_offset = next_offset


class CorruptCompressedDataError(CorruptionError):
    """The decompressor rejected a field payload."""


class MalformedFieldError(CorruptionError):
    """Field payload has no '=' separator."""

    def __init__(self, offset: int, payload: bytes) -> None:
        super().__init__(
            f"Field at {offset} has no '=' separator",
            details={"offset": offset, "payload": payload[:64]},
        )
        self.offset = offset


# -------- known limitations -------------------------------------------------

class UnsupportedCompressionError(JournalError):
    """Payload uses a compression algorithm this reader does not decode."""

    def __init__(self, algorithm: str, offset: Optional[int] = None) -> None:
        super().__init__(
            f"{algorithm} decompression not implemented",
            details={"algorithm": algorithm, "offset": offset},
        )
        self.algorithm = algorithm
        self.offset = offset
