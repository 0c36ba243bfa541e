"""Builders for small synthetic JPEG / M-JPEG streams."""
import pytest

SOI = b"\xFF\xD8"
EOI = b"\xFF\xD9"


def segment(code: int, payload: bytes = b"") -> bytes:
    """A length-prefixed marker segment."""
    return b"\xFF" + bytes([code]) + (len(payload) + 2).to_bytes(2, "big") + payload


def frame(scan: bytes = b"\x12\x34\x56") -> bytes:
    """SOI, APP0, DQT, SOS header, scan data and EOI."""
    return (
        SOI
        + segment(0xE0, b"JFIF\x00\x01\x02\x00\x00\x01\x00\x01\x00\x00")
        + segment(0xDB, b"\x00" + bytes([16] * 64))
        + segment(0xDA, b"\x01\x01\x00\x00\x3F\x00")
        + scan
        + EOI
    )


@pytest.fixture
def make_frame():
    return frame


@pytest.fixture
def make_segment():
    return segment
