from __future__ import annotations

import logging
from typing import Iterator

from .cursor import ByteCursor
from .marker import (
    DNL_MARKER,
    EOI_MARKER,
    MARKER_PREFIX,
    SOS_MARKER,
    STUFFED_BYTE,
    is_immediate,
    is_stand_alone,
    marker_name,
)
from .primitives import ErrorKind, MarkerEvent, StreamError

logger = logging.getLogger(__name__)


def _read_marker_code(cursor: ByteCursor, eof_kind: ErrorKind) -> int:
    """Skip a run of 0xFF fill bytes and return the first byte after it."""
    while True:
        c = cursor.read_byte()
        if c is None:
            raise StreamError(eof_kind, cursor.position)
        if c != MARKER_PREFIX:
            return c


def _read_length(cursor: ByteCursor) -> int:
    # length is big-endian and counts its own two bytes
    hi = cursor.read_byte()
    if hi is None:
        raise StreamError(ErrorKind.MISSING_LENGTH, cursor.position)
    lo = cursor.read_byte()
    if lo is None:
        raise StreamError(ErrorKind.PARTIAL_LENGTH, cursor.position)
    length = (hi << 8) | lo
    if length < 2:
        raise StreamError(ErrorKind.LENGTH_TOO_SHORT, cursor.position - 2)
    return length


def _scan_entropy_data(cursor: ByteCursor) -> Iterator[MarkerEvent]:
    """
    Walk compressed scan data after an SOS header.

    FF 00 is a stuffed literal 0xFF and is dropped. RSTn markers are yielded
    as immediate events and scanning continues. Any other marker ends the
    scan: the cursor is moved back two bytes so the caller reads it again.
    """
    while True:
        c = cursor.read_byte()
        if c is None:
            raise StreamError(ErrorKind.EOF_IN_SCAN, cursor.position)
        if c != MARKER_PREFIX:
            continue

        c = _read_marker_code(cursor, ErrorKind.EOF_IN_SCAN)
        if c == STUFFED_BYTE:
            continue

        if is_immediate(c):
            if c == DNL_MARKER:
                # DNL carries a payload, which is not handled inside scan data
                raise StreamError(ErrorKind.DNL_UNSUPPORTED, cursor.position - 2)
            logger.debug("immediate %s at %d", marker_name(c), cursor.position - 2)
            yield MarkerEvent(c, cursor.position - 2, immediate=True)
            continue

        cursor.seek_relative(-2)
        return


def scan_markers(cursor: ByteCursor) -> Iterator[MarkerEvent]:
    """
    Yield every marker in a raw JPEG / M-JPEG stream, in stream order.

    The generator finishes normally only when the stream ends right after an
    EOI marker. Every other problem raises StreamError and stops the scan.

    Args:
        cursor: ByteCursor positioned at the first marker

    Yields:
        MarkerEvent for each marker, including immediates inside scan data
    """
    eoi_read = False

    while True:
        c = cursor.read_byte()
        if c is None:
            if eoi_read:
                logger.debug("clean end of stream at %d", cursor.position)
                return
            raise StreamError(ErrorKind.MISSING_EOI, cursor.position)

        if c != MARKER_PREFIX:
            raise StreamError(ErrorKind.MISSING_PREMARKER, cursor.position - 1)

        marker = _read_marker_code(cursor, ErrorKind.MISSING_MARKER)
        offset = cursor.position - 2
        logger.debug("marker %s at %d", marker_name(marker), offset)
        yield MarkerEvent(marker, offset)

        if not is_stand_alone(marker):
            payload = _read_length(cursor) - 2
            if payload > 0:
                cursor.seek_relative(payload)

        if marker == SOS_MARKER:
            yield from _scan_entropy_data(cursor)

        eoi_read = marker == EOI_MARKER
