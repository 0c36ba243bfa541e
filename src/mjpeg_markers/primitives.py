from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Largest count (or offset) a signed 64-bit index record can hold
MAX_FRAMES = (1 << 63) - 1


class ContractError(AssertionError):
    """Raised when calling code breaks a precondition (a bug, not bad data)."""


class ErrorKind(Enum):
    # value is the diagnostic printed for the kind
    MISSING_PREMARKER = "Missing pre-marker byte!"
    MISSING_MARKER = "Missing marker byte!"
    MISSING_LENGTH = "Missing marker length!"
    PARTIAL_LENGTH = "Partial marker length!"
    LENGTH_TOO_SHORT = "Marker length less than two!"
    SEEK_FAILED = "Seek failed!"
    IO_ERROR = "I/O error!"
    EOF_IN_SCAN = "EOF in compressed stream!"
    DNL_UNSUPPORTED = "DNL markers not supported!"
    MISSING_EOI = "Missing EOI marker!"
    NO_FRAMES = "No frames found!"
    TOO_MANY_FRAMES = "Too many frames!"


class StreamError(IOError):
    """A malformed, truncated or unreadable stream. Always ends the run."""

    def __init__(self, kind: ErrorKind, position: Optional[int] = None):
        self.kind = kind
        self.position = position
        message = kind.value
        if position is not None:
            message = f"{message} (at byte {position})"
        super().__init__(message)


@dataclass(frozen=True)
class MarkerEvent:
    # code: marker byte, 0x00-0xFE
    # offset: absolute position of the 0xFF right before the code
    # immediate: seen inside entropy-coded data
    code: int
    offset: int
    immediate: bool = False
