from .config import ReaderConfig
from .errors import (BadSignatureError, CorruptCompressedDataError, CorruptionError,
                     EntryArrayLoopError, InvalidStateError, JournalError, JournalIOError,
                     MalformedFieldError, OutOfBoundsError, TooSmallError,
                     TruncatedObjectError, UnalignedOffsetError, UnexpectedObjectTypeError,
                     UnsupportedCompressionError, UnsupportedLayoutError, ValidationError)
from .journalfile import HandleState, JournalFile
from .objects import Header
from .reader import JournalEntry, JournalReader, open_journal
from .sorting import SortResult, sort_files

__all__ = [
    "ReaderConfig", "HandleState", "JournalFile", "Header",
    "JournalEntry", "JournalReader", "open_journal",
    "SortResult", "sort_files",
    "JournalError", "JournalIOError", "InvalidStateError",
    "ValidationError", "TooSmallError", "BadSignatureError", "UnsupportedLayoutError",
    "CorruptionError", "UnalignedOffsetError", "TruncatedObjectError", "OutOfBoundsError",
    "UnexpectedObjectTypeError", "EntryArrayLoopError", "CorruptCompressedDataError",
    "MalformedFieldError", "UnsupportedCompressionError",
]
