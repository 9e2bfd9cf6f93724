"""Status codes reported by the Port-100 chipset.

Two kinds of status come back from the device:

- a one-byte command status (``StatusCode``) returned by configuration
  commands such as SwitchRF or InSetProtocol;
- a 32-bit RF communication status (``CommunicationStatus``) returned by
  InCommRF, where each set bit names one failure.
"""

from __future__ import annotations

from enum import IntEnum, IntFlag


class StatusCode(IntEnum):
    """Command status byte."""

    SUCCESS = 0x00
    PARAMETER_ERROR = 0x01
    PB_ERROR = 0x02
    RFCA_ERROR = 0x03
    TEMPERATURE_ERROR = 0x04
    PWD_ERROR = 0x05
    RECEIVE_ERROR = 0x06
    COMMAND_TYPE_ERROR = 0x07


class CommunicationStatus(IntFlag):
    """InCommRF status word flags (zero means success)."""

    PROTOCOL_ERROR = 0x00000001
    PARITY_ERROR = 0x00000002
    CRC_ERROR = 0x00000004
    COLLISION_ERROR = 0x00000008
    OVERFLOW_ERROR = 0x00000010
    TEMPERATURE_ERROR = 0x00000040
    RECEIVE_TIMEOUT_ERROR = 0x00000080
    CRYPTO1_ERROR = 0x00000100
    RFCA_ERROR = 0x00000200
    RF_OFF_ERROR = 0x00000400
    TRANSMIT_TIMEOUT_ERROR = 0x00000800
    RECEIVE_LENGTH_ERROR = 0x80000000


_KNOWN_FLAGS = sum(int(flag) for flag in CommunicationStatus)


def status_name(code: int) -> str:
    """Return the symbolic name of a status byte."""
    try:
        return StatusCode(code).name
    except ValueError:
        return f"UNKNOWN STATUS ERROR 0x{code & 0xFF:02x}"


def decompose_status(status: int) -> list[str]:
    """Split a communication status word into flag names.

    Bits without a name are reported together as one hex value.
    """
    names = [flag.name for flag in CommunicationStatus if status & flag]
    unknown = status & ~_KNOWN_FLAGS & 0xFFFFFFFF
    if unknown:
        names.append(f"0x{unknown:08x}")
    return names
