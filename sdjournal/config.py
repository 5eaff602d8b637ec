# ==================================================
# sdjournal/config.py
# ==================================================
# SDJOURNAL_DECODE_ERRORS  codec error policy for field text (default "replace")
# SDJOURNAL_LOG_LEVEL      level used by the example entry point (default "WARNING")
from __future__ import annotations

import codecs
import logging
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ReaderConfig:
    """``decode_errors`` is passed to UTF-8 decoding of field names and values.

    Values may hold arbitrary bytes: "replace" keeps iteration going,
    "strict" surfaces UnicodeDecodeError, "surrogateescape" keeps the raw bytes.
    """

    decode_errors: str = "replace"
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        try:
            codecs.lookup_error(self.decode_errors)
        except LookupError:
            raise ValueError(f"Unknown decode error policy: {self.decode_errors!r}") from None
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValueError(f"Unknown log level: {self.log_level!r}")

    @classmethod
    def from_env(cls) -> ReaderConfig:
        return cls(
            decode_errors=os.getenv("SDJOURNAL_DECODE_ERRORS", "replace"),
            log_level=os.getenv("SDJOURNAL_LOG_LEVEL", "WARNING"),
        )
