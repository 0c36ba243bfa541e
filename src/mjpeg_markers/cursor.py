from __future__ import annotations

import io
from typing import BinaryIO, Optional

from .primitives import ContractError, ErrorKind, StreamError


class ByteCursor:
    """Byte-at-a-time reader over a seekable binary file object.

    read_byte() returns None at end of stream, and raises StreamError(IO_ERROR)
    if the underlying file faults. The cursor tracks its own absolute position
    so the scanner never has to call tell() on the file.
    """

    def __init__(self, f: BinaryIO):
        if f is None:
            raise ContractError("ByteCursor needs a file object")
        self.f = f
        try:
            self._position = f.tell()
        except (OSError, ValueError) as e:
            raise StreamError(ErrorKind.IO_ERROR) from e

    @property
    def position(self) -> int:
        return self._position

    def read_byte(self) -> Optional[int]:
        try:
            b = self.f.read(1)
        except (OSError, ValueError) as e:
            raise StreamError(ErrorKind.IO_ERROR, self._position) from e
        if not b:
            return None
        self._position += 1
        return b[0]

    def seek_relative(self, offset: int) -> None:
        target = self._position + offset
        if target < 0:
            raise StreamError(ErrorKind.SEEK_FAILED, self._position)
        try:
            self.f.seek(offset, io.SEEK_CUR)
        except (OSError, ValueError) as e:
            raise StreamError(ErrorKind.SEEK_FAILED, self._position) from e
        self._position = target
