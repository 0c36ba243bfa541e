# ----------------------------------------------------------------
# |segment name|marker value|has data|description                 |
# ----------------------------------------------------------------
# |TEM         |0xFF01      |No      | arithmetic coding temporary |
# |SOFn        |0xFFC0-CF   |Yes     | start of frame (not C4/C8/CC)|
# |DHT         |0xFFC4      |Yes     | huffman table               |
# |DAC         |0xFFCC      |Yes     | arithmetic coding conditions|
# |RSTn        |0xFFD0-D7   |No      | restart (immediate)         |
# |SOI         |0xFFD8      |No      | start of image              |
# |EOI         |0xFFD9      |No      | end of image                |
# |SOS         |0xFFDA      |Yes     | start of scan               |
# |DQT         |0xFFDB      |Yes     | quantization table          |
# |DNL         |0xFFDC      |Yes     | number of lines (immediate) |
# |DRI         |0xFFDD      |Yes     | restart interval            |
# |APPn        |0xFFE0-EF   |Yes     | application data            |
# |COM         |0xFFFE      |Yes     | comment                     |
# ----------------------------------------------------------------
# 無data的marker只有2bytes
# 有data的marker在marker後緊接著2bytes為長度(包含長度本身的2bytes)
from __future__ import annotations

from .primitives import ContractError

MARKER_PREFIX = 0xFF
STUFFED_BYTE = 0x00

TEM_MARKER = 0x01
DHT_MARKER = 0xC4
JPG_MARKER = 0xC8
DAC_MARKER = 0xCC
RST_MIN = 0xD0
RST_MAX = 0xD7
SOI_MARKER = 0xD8
EOI_MARKER = 0xD9
SOS_MARKER = 0xDA
DQT_MARKER = 0xDB
DNL_MARKER = 0xDC
DRI_MARKER = 0xDD
DHP_MARKER = 0xDE
EXP_MARKER = 0xDF
APP_MIN = 0xE0
APP_MAX = 0xEF
COM_MARKER = 0xFE

_MARKER_NAMES = {
    TEM_MARKER: "TEM",
    DHT_MARKER: "DHT",
    DAC_MARKER: "DAC",
    SOI_MARKER: "SOI",
    EOI_MARKER: "EOI",
    SOS_MARKER: "SOS",
    DQT_MARKER: "DQT",
    DNL_MARKER: "DNL",
    DRI_MARKER: "DRI",
    DHP_MARKER: "DHP",
    EXP_MARKER: "EXP",
    COM_MARKER: "COM",
}
for _n in range(16):
    if 0xC0 + _n not in (DHT_MARKER, JPG_MARKER, DAC_MARKER):
        _MARKER_NAMES[0xC0 + _n] = f"SOF{_n}"
    _MARKER_NAMES[APP_MIN + _n] = f"APP{_n}"
for _n in range(8):
    _MARKER_NAMES[RST_MIN + _n] = f"RST{_n}"
del _n


def _check_marker(marker: int) -> None:
    if not isinstance(marker, int) or not 0x00 <= marker <= 0xFE:
        raise ContractError(f"marker value out of range: {marker!r}")


def is_restart(marker: int) -> bool:
    return RST_MIN <= marker <= RST_MAX


def is_stand_alone(marker: int) -> bool:
    """
    True if the marker has no length field and no payload
    (TEM, SOI, EOI, RST0-RST7).

    Raises ContractError if marker is outside 0x00-0xFE.
    """
    _check_marker(marker)
    return marker in (TEM_MARKER, SOI_MARKER, EOI_MARKER) or is_restart(marker)


def is_immediate(marker: int) -> bool:
    """
    True if the marker may appear inside entropy-coded data without ending
    the scan (RST0-RST7 and DNL). The 0x00 stuffing escape is not a marker
    and is not immediate.

    Raises ContractError if marker is outside 0x00-0xFE.
    """
    _check_marker(marker)
    return marker == DNL_MARKER or is_restart(marker)


def marker_name(marker: int) -> str:
    return _MARKER_NAMES.get(marker, f"0x{marker:02X}")
