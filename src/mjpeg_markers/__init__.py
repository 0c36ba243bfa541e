"""
Marker scanning and frame indexing for raw JPEG / Motion-JPEG streams.
"""

from .cursor import ByteCursor
from .index import FrameIndex, IndexFormatError, extract_frame, index_path_for, load_index, write_u64
from .marker import is_immediate, is_stand_alone, marker_name
from .primitives import MAX_FRAMES, ContractError, ErrorKind, MarkerEvent, StreamError
from .scanner import scan_markers
from .sinks import Indexer, Reporter, Sink, run

__all__ = [
    "ByteCursor",
    "FrameIndex",
    "IndexFormatError",
    "extract_frame",
    "index_path_for",
    "load_index",
    "write_u64",
    "is_immediate",
    "is_stand_alone",
    "marker_name",
    "MAX_FRAMES",
    "ContractError",
    "ErrorKind",
    "MarkerEvent",
    "StreamError",
    "scan_markers",
    "Indexer",
    "Reporter",
    "Sink",
    "run",
]
