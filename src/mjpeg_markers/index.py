"""Frame index files: N followed by N frame-start offsets, all u64 big-endian."""
from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Tuple, Union

import numpy as np

from .primitives import MAX_FRAMES, ContractError

INDEX_SUFFIX = ".index"
RECORD_SIZE = 8

_INDEX_DTYPE = np.dtype(">u8")


class IndexFormatError(ValueError):
    """An index file that does not describe its M-JPEG stream."""

    def __init__(self, code: int, message: str):
        self.code = code
        super().__init__(f"Invalid index file (Code {code}): {message}")


def index_path_for(path: Union[str, Path]) -> Path:
    return Path(str(path) + INDEX_SUFFIX)


def write_u64(f: BinaryIO, value: int) -> None:
    """Write value as 8 big-endian bytes at the current position of f."""
    if f is None or value < 0 or value > MAX_FRAMES:
        raise ContractError(f"index value out of range: {value!r}")
    f.write(value.to_bytes(RECORD_SIZE, "big"))


def read_index(data: bytes) -> np.ndarray:
    """Decode raw index bytes into an array of unsigned 64-bit records."""
    return np.frombuffer(data, dtype=_INDEX_DTYPE).astype(np.uint64)


@dataclass
class FrameIndex:
    offsets: np.ndarray
    stream_size: int

    def __len__(self) -> int:
        return len(self.offsets)

    def clamp(self, position: float) -> int:
        """Map any requested frame position onto a valid frame number."""
        if not math.isfinite(position):
            return 0
        return int(min(max(math.floor(position), 0), len(self) - 1))

    def bounds(self, i: int) -> Tuple[int, int]:
        """Byte range [begin, end) of frame i."""
        if not 0 <= i < len(self):
            raise ContractError(f"frame number out of range: {i}")
        begin = int(self.offsets[i])
        if i < len(self) - 1:
            end = int(self.offsets[i + 1])
        else:
            end = self.stream_size
        return begin, end


def load_index(source: Union[str, Path, bytes], stream_size: int) -> FrameIndex:
    """
    Read an index and check it against the stream it claims to describe.

    Args:
        source: path to the index file, or its raw bytes
        stream_size: total size in bytes of the companion M-JPEG stream

    Returns:
        Validated FrameIndex

    Raises:
        IndexFormatError: with the code of the first failed check
    """
    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
    else:
        data = Path(source).read_bytes()

    if len(data) < 2 * RECORD_SIZE or len(data) % RECORD_SIZE != 0:
        raise IndexFormatError(1, f"bad file size {len(data)}")

    records = read_index(data)
    count = int(records[0])
    if count > MAX_FRAMES:
        raise IndexFormatError(2, f"frame count {count} not representable")
    if count != len(records) - 1:
        raise IndexFormatError(3, f"header says {count} frames, file has {len(records) - 1}")

    offsets = records[1:]
    if np.any(offsets > np.uint64(MAX_FRAMES)):
        raise IndexFormatError(4, "offset not representable")
    if np.any(np.diff(offsets.astype(np.int64)) <= 0):
        raise IndexFormatError(5, "offsets not strictly ascending")
    if int(offsets[-1]) >= stream_size:
        raise IndexFormatError(6, f"offset {int(offsets[-1])} beyond stream size {stream_size}")

    return FrameIndex(offsets=offsets, stream_size=stream_size)


def extract_frame(stream: BinaryIO, index: FrameIndex, i: int) -> bytes:
    begin, end = index.bounds(i)
    stream.seek(begin)
    data = stream.read(end - begin)
    if len(data) != end - begin:
        raise IOError("Unexpected length while reading frame")
    return data
