"""Unit tests for frame index reading and writing."""
import io
from pathlib import Path

import numpy as np
import pytest

from mjpeg_markers.index import (
    FrameIndex,
    IndexFormatError,
    extract_frame,
    index_path_for,
    load_index,
    read_index,
    write_u64,
)
from mjpeg_markers.primitives import MAX_FRAMES, ContractError


def u64(value: int) -> bytes:
    return value.to_bytes(8, "big")


def index_bytes(*values: int) -> bytes:
    return b"".join(u64(v) for v in values)


def load_error(data: bytes, stream_size: int = 1000) -> IndexFormatError:
    with pytest.raises(IndexFormatError) as excinfo:
        load_index(data, stream_size)
    return excinfo.value


class TestWriteU64:
    """Tests for write_u64 function."""

    def test_big_endian(self):
        f = io.BytesIO()
        write_u64(f, 0x0102030405060708)
        assert f.getvalue() == b"\x01\x02\x03\x04\x05\x06\x07\x08"

    def test_zero(self):
        f = io.BytesIO()
        write_u64(f, 0)
        assert f.getvalue() == b"\x00" * 8

    def test_max(self):
        f = io.BytesIO()
        write_u64(f, MAX_FRAMES)
        assert f.getvalue() == b"\x7F" + b"\xFF" * 7

    def test_negative(self):
        """Test a negative value is a contract violation."""
        with pytest.raises(ContractError):
            write_u64(io.BytesIO(), -1)

    def test_too_large(self):
        with pytest.raises(ContractError):
            write_u64(io.BytesIO(), MAX_FRAMES + 1)

    def test_no_file(self):
        with pytest.raises(ContractError):
            write_u64(None, 1)


class TestReadIndex:
    """Tests for read_index function."""

    def test_decode(self):
        records = read_index(index_bytes(2, 0, 0x1234))
        assert records.dtype == np.uint64
        assert records.tolist() == [2, 0, 0x1234]


class TestLoadIndex:
    """Tests for load_index validation."""

    def test_valid(self):
        index = load_index(index_bytes(3, 0, 100, 250), 300)
        assert len(index) == 3
        assert index.offsets.tolist() == [0, 100, 250]
        assert index.stream_size == 300

    def test_from_path(self, tmp_path):
        path = tmp_path / "clip.mjpg.index"
        path.write_bytes(index_bytes(1, 0))
        assert len(load_index(path, 10)) == 1
        assert len(load_index(str(path), 10)) == 1

    @pytest.mark.parametrize("data", [b"", u64(1), u64(1) + b"\x00" * 4, b"\x00" * 17])
    def test_bad_size(self, data):
        """Test files shorter than two records or not record-aligned."""
        assert load_error(data).code == 1

    def test_count_not_representable(self):
        assert load_error(b"\xFF" * 8 + u64(0)).code == 2

    def test_count_mismatch(self):
        """Test the header must match the number of records."""
        assert load_error(index_bytes(2, 0)).code == 3
        assert load_error(index_bytes(1, 0, 10)).code == 3

    def test_placeholder_header(self):
        """Test an index left by an aborted run is rejected."""
        assert load_error(index_bytes(0, 0)).code == 3

    def test_offset_not_representable(self):
        assert load_error(u64(1) + b"\xFF" * 8).code == 4

    def test_not_ascending(self):
        assert load_error(index_bytes(2, 10, 10)).code == 5
        assert load_error(index_bytes(3, 0, 20, 10)).code == 5

    def test_offset_out_of_range(self):
        """Test every offset must be inside the stream."""
        assert load_error(index_bytes(1, 100), stream_size=100).code == 6
        assert load_error(index_bytes(2, 0, 100), stream_size=100).code == 6

    def test_message(self):
        assert str(load_error(b"")).startswith("Invalid index file (Code 1)")


class TestFrameIndex:
    """Tests for FrameIndex random access."""

    def make_index(self):
        return FrameIndex(offsets=np.array([0, 40, 90], dtype=np.uint64), stream_size=120)

    def test_bounds(self):
        index = self.make_index()
        assert index.bounds(0) == (0, 40)
        assert index.bounds(1) == (40, 90)
        assert index.bounds(2) == (90, 120)

    def test_bounds_out_of_range(self):
        with pytest.raises(ContractError):
            self.make_index().bounds(3)

    @pytest.mark.parametrize("position, expected", [
        (0, 0),
        (1.9, 1),
        (2, 2),
        (7, 2),
        (-4, 0),
        (float("nan"), 0),
        (float("inf"), 0),
        (float("-inf"), 0),
    ])
    def test_clamp(self, position, expected):
        assert self.make_index().clamp(position) == expected

    def test_extract_frame(self):
        stream = io.BytesIO(bytes(range(120)))
        data = extract_frame(stream, self.make_index(), 1)
        assert data == bytes(range(40, 90))

    def test_extract_last_frame(self):
        stream = io.BytesIO(bytes(range(120)))
        assert extract_frame(stream, self.make_index(), 2) == bytes(range(90, 120))

    def test_extract_truncated_stream(self):
        """Test a stream shorter than the index claims."""
        with pytest.raises(IOError):
            extract_frame(io.BytesIO(bytes(100)), self.make_index(), 2)


class TestIndexPath:
    def test_suffix(self):
        assert index_path_for("video/clip.mjpg") == Path("video/clip.mjpg.index")
