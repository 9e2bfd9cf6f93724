"""InSetProtocol parameter set.

The chipset takes protocol settings as ``(key, value)`` byte pairs. Only
fields that are set are sent, always in ascending key order.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import ClassVar

from ..exceptions import ParameterError


@dataclass(frozen=True)
class ProtocolParameters:
    """Initiator protocol settings; ``None`` leaves a setting untouched."""

    KEYS: ClassVar[dict[str, int]] = {
        "initial_guard_time": 0x00,
        "add_crc": 0x01,
        "check_crc": 0x02,
        "multi_card": 0x03,
        "add_parity": 0x04,
        "check_parity": 0x05,
        "bitwise_anticoll": 0x06,
        "last_byte_bit_count": 0x07,
        "mifare_crypto": 0x08,
        "add_sof": 0x09,
        "check_sof": 0x0A,
        "add_eof": 0x0B,
        "check_eof": 0x0C,
        # 0x0D is reserved
        "deaf_time": 0x0E,
        "continuous_receive_mode": 0x0F,
        "min_len_for_crm": 0x10,
        "type_1_tag_rrdd": 0x11,
        "rfca": 0x12,
        "guard_time": 0x13,
    }

    initial_guard_time: int | None = None
    add_crc: int | None = None
    check_crc: int | None = None
    multi_card: int | None = None
    add_parity: int | None = None
    check_parity: int | None = None
    bitwise_anticoll: int | None = None
    last_byte_bit_count: int | None = None
    mifare_crypto: int | None = None
    add_sof: int | None = None
    check_sof: int | None = None
    add_eof: int | None = None
    check_eof: int | None = None
    deaf_time: int | None = None
    continuous_receive_mode: int | None = None
    min_len_for_crm: int | None = None
    type_1_tag_rrdd: int | None = None
    rfca: int | None = None
    guard_time: int | None = None

    @classmethod
    def default(cls) -> ProtocolParameters:
        """The chipset's documented default initiator settings."""
        return cls(
            initial_guard_time=24,
            add_crc=1,
            check_crc=1,
            multi_card=0,
            add_parity=0,
            check_parity=0,
            bitwise_anticoll=0,
            last_byte_bit_count=8,
            mifare_crypto=0,
            add_sof=0,
            check_sof=0,
            add_eof=0,
            check_eof=0,
            deaf_time=4,
            continuous_receive_mode=0,
            min_len_for_crm=0,
            type_1_tag_rrdd=0,
            rfca=0,
            guard_time=6,
        )

    def with_values(self, **values: int) -> ProtocolParameters:
        """Return a copy with some settings replaced."""
        return dataclasses.replace(self, **values)

    def to_bytes(self) -> bytes:
        """Serialize set fields as ascending ``(key, value)`` pairs."""
        buf = bytearray()
        for name, key in sorted(self.KEYS.items(), key=lambda item: item[1]):
            value = getattr(self, name)
            if value is None:
                continue
            if not 0 <= value <= 255:
                raise ParameterError(f"{name} must be 0-255, got {value}")
            buf += bytes([key, value])
        return bytes(buf)

    def to_dict(self) -> dict[str, int]:
        return {
            name: getattr(self, name)
            for name in self.KEYS
            if getattr(self, name) is not None
        }
