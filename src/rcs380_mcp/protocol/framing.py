"""Port-100 frame builder and parser.

Data frame layout::

    +----------------+---------+---------+-------------------+----------+------+
    | Preamble       | Length  | Len sum |      Payload      | Data sum | Post |
    | 00 00 FF FF FF | 2 bytes | 1 byte  | ``Length`` bytes  |  1 byte  |  00  |
    +----------------+---------+---------+-------------------+----------+------+

- Length: little-endian payload size
- Len sum: checksum over the two length bytes
- Data sum: checksum over the payload

Besides data frames the chipset exchanges two fixed frames: an Ack
(``00 00 FF 00 FF 00``) acknowledging a request, and an Err frame
(``00 00 FF FF FF``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..exceptions import ChecksumMismatchError, FrameError
from ..utils.checksum import checksum, from_le16, hex_string, to_le16

PREAMBLE = b"\x00\x00\xFF\xFF\xFF"
ACK_FRAME = b"\x00\x00\xFF\x00\xFF\x00"
ERR_FRAME = b"\x00\x00\xFF\xFF\xFF"
POSTAMBLE = b"\x00"
HEADER_SIZE = 8  # preamble(5) + length(2) + length checksum(1)
MAX_PAYLOAD = 0xFFFF


class FrameKind(Enum):
    """Classification of a received frame."""

    UNKNOWN = "unknown"
    ACK = "ack"
    ERR = "err"
    DATA = "data"


@dataclass(frozen=True)
class Frame:
    """A frame received from the chipset."""

    raw: bytes
    kind: FrameKind

    @property
    def is_ack(self) -> bool:
        return self.kind is FrameKind.ACK

    @property
    def is_data(self) -> bool:
        return self.kind is FrameKind.DATA

    @property
    def payload(self) -> bytes:
        """The command payload carried by a data frame."""
        if not self.is_data:
            raise ValueError(f"{self.kind.name} frame carries no payload")
        length = from_le16(self.raw, 5)
        return self.raw[HEADER_SIZE : HEADER_SIZE + length]

    def __repr__(self) -> str:
        return f"Frame(kind={self.kind.name}, raw={hex_string(self.raw) or '(empty)'})"


def build_frame(command: bytes) -> bytes:
    """Wrap a command payload into a data frame ready to send.

    Args:
        command: Request bytes, starting with the ``D6`` command code.

    Returns:
        The complete on-wire frame.
    """
    if len(command) > MAX_PAYLOAD:
        raise ValueError(
            f"Payload must be at most {MAX_PAYLOAD} bytes, got {len(command)}"
        )
    length = to_le16(len(command))
    return (
        PREAMBLE
        + length
        + bytes([checksum(length)])
        + command
        + bytes([checksum(command)])
        + POSTAMBLE
    )


def parse_frame(data: bytes) -> Frame:
    """Classify a frame received from the chipset.

    Ack and Err frames match only byte-for-byte. Anything carrying
    ``FF FF`` at offsets 3-4 is a data frame and must pass both checksums.

    Raises:
        ChecksumMismatchError: A data frame's length or payload checksum
            does not verify.
        FrameError: A data frame is shorter than its declared length.
    """
    data = bytes(data)
    if data == ACK_FRAME:
        return Frame(data, FrameKind.ACK)
    if data == ERR_FRAME:
        return Frame(data, FrameKind.ERR)
    if len(data) < HEADER_SIZE or data[3:5] != b"\xFF\xFF":
        return Frame(data, FrameKind.UNKNOWN)

    if sum(data[5:HEADER_SIZE]) & 0xFF:
        raise ChecksumMismatchError(
            f"length checksum error: {hex_string(data[5:HEADER_SIZE])}"
        )
    length = from_le16(data, 5)
    end = HEADER_SIZE + length + 1
    if len(data) < end:
        raise FrameError(
            f"truncated data frame: need {end} bytes, got {len(data)}"
        )
    if sum(data[HEADER_SIZE:end]) & 0xFF:
        raise ChecksumMismatchError("data checksum error")
    return Frame(data, FrameKind.DATA)
