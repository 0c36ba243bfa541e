from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .cursor import ByteCursor
from .index import IndexFormatError, extract_frame, index_path_for, load_index
from .sinks import Indexer, Reporter, run
from .primitives import StreamError

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def trace(path: Path) -> int:
    """Print every marker in the file at path."""
    with open(path, "rb") as f:
        run(ByteCursor(f), Reporter())
    return 0


def build_index(path: Path) -> Path:
    """Write the frame index for path next to it and return its location."""
    out_path = index_path_for(path)
    with open(path, "rb") as f, open(out_path, "wb") as out:
        run(ByteCursor(f), Indexer(out))
    return out_path


def write_frame(path: Path, position: float, output: Optional[Path] = None,
                index: Optional[Path] = None) -> Path:
    """Copy one frame of the M-JPEG at path into its own JPEG file."""
    index = index or index_path_for(path)
    with open(path, "rb") as f:
        f.seek(0, 2)
        frame_index = load_index(index, f.tell())
        i = frame_index.clamp(position)
        data = extract_frame(f, frame_index, i)
    output = output or Path(f"{path}.{i}.jpg")
    output.write_bytes(data)
    print(f"Frame {i} / {len(frame_index) - 1} -> {output}")
    return output


def _run_command(func, *args) -> int:
    try:
        func(*args)
    except (StreamError, IndexFormatError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"error: {e.strerror or e}: {e.filename or ''}", file=sys.stderr)
        return 1
    return 0


def _base_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("path", type=Path, help="Path to a raw JPEG / M-JPEG stream")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every marker to stderr")
    return parser


def trace_main(argv: Optional[List[str]] = None) -> int:
    args = _base_parser("Print all the markers in a JPEG / M-JPEG file").parse_args(argv)
    _setup_logging(args.verbose)
    return _run_command(trace, args.path)


def index_main(argv: Optional[List[str]] = None) -> int:
    args = _base_parser(
        f"Write the frame offsets of a raw M-JPEG stream to <path>{index_path_for('')}"
    ).parse_args(argv)
    _setup_logging(args.verbose)
    return _run_command(build_index, args.path)


def frame_main(argv: Optional[List[str]] = None) -> int:
    parser = _base_parser("Extract one frame of an indexed M-JPEG stream")
    parser.add_argument("frame", type=float, help="Frame number, clamped to the valid range")
    parser.add_argument("-o", "--output", type=Path, help="Output JPEG path")
    parser.add_argument("--index", type=Path, help="Index file (default <path>.index)")
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    return _run_command(write_frame, args.path, args.frame, args.output, args.index)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Raw M-JPEG marker tools")
    parser.add_argument("path", type=Path, help="Path to a raw JPEG / M-JPEG stream")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every marker to stderr")

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("trace", help="Print all markers in the file")
    subparsers.add_parser("index", help="Write <path>.index with every frame offset")
    parser_frame = subparsers.add_parser("frame", help="Extract one frame using the index")
    parser_frame.add_argument("frame", type=float, help="Frame number, clamped to the valid range")
    parser_frame.add_argument("-o", "--output", type=Path, help="Output JPEG path")

    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.command == "index":
        return _run_command(build_index, args.path)
    elif args.command == "frame":
        return _run_command(write_frame, args.path, args.frame, args.output)
    else:
        # Default action: trace
        return _run_command(trace, args.path)
