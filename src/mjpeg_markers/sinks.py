from __future__ import annotations

import logging
import sys
from typing import BinaryIO, List, Optional, TextIO

from .cursor import ByteCursor
from .index import write_u64
from .marker import SOI_MARKER, marker_name
from .primitives import MAX_FRAMES, ErrorKind, MarkerEvent, StreamError
from .scanner import scan_markers

logger = logging.getLogger(__name__)


class Sink:
    """Consumer of scanner events. run() calls start, then events, then finish."""

    def start(self) -> None:
        pass

    def on_marker(self, event: MarkerEvent) -> None:
        pass

    def on_immediate(self, event: MarkerEvent) -> None:
        pass

    def finish(self) -> None:
        pass


class Reporter(Sink):
    """Print every marker in the stream, then the number of frames."""

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out if out is not None else sys.stdout
        self.frame_count = 0

    @property
    def saturated(self) -> bool:
        return self.frame_count >= MAX_FRAMES

    def on_marker(self, event: MarkerEvent) -> None:
        if event.code == SOI_MARKER:
            # blank line between frames
            if self.frame_count > 0:
                print(file=self.out)
            if not self.saturated:
                self.frame_count += 1
        print(f"Marker 0x{event.code:02X} {marker_name(event.code)}", file=self.out)

    def on_immediate(self, event: MarkerEvent) -> None:
        print(f"  Immediate 0x{event.code:02X} {marker_name(event.code)}", file=self.out)

    def finish(self) -> None:
        if self.saturated:
            print(f"Frames: more than {MAX_FRAMES}", file=self.out)
        else:
            print(f"Frames: {self.frame_count}", file=self.out)


class Indexer(Sink):
    """
    Record the offset of every SOI into an index file.

    The header is written as 0 first and rewritten with the real count once
    the whole stream has been scanned. If the run fails before finish(), the
    placeholder stays and the file does not pass load_index().
    """

    def __init__(self, out: BinaryIO):
        self.out = out
        self.offsets: List[int] = []

    @property
    def frame_count(self) -> int:
        return len(self.offsets)

    def start(self) -> None:
        write_u64(self.out, 0)

    def on_marker(self, event: MarkerEvent) -> None:
        if event.code != SOI_MARKER:
            return
        if self.frame_count >= MAX_FRAMES:
            raise StreamError(ErrorKind.TOO_MANY_FRAMES, event.offset)
        self.offsets.append(event.offset)
        write_u64(self.out, event.offset)

    def finish(self) -> None:
        if self.frame_count < 1:
            raise StreamError(ErrorKind.NO_FRAMES)
        self.out.seek(0)
        write_u64(self.out, self.frame_count)
        self.out.flush()
        logger.info("indexed %d frames", self.frame_count)


def run(cursor: ByteCursor, sink: Sink) -> Sink:
    """Drive the scanner over cursor and push every event into sink."""
    sink.start()
    for event in scan_markers(cursor):
        if event.immediate:
            sink.on_immediate(event)
        else:
            sink.on_marker(event)
    sink.finish()
    return sink
