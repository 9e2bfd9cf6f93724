"""Port-100 command codes and request/response payload helpers.

Every request payload starts with ``D6`` followed by the command code;
the matching response starts with ``D7`` and the command code plus one.
"""

from __future__ import annotations

from enum import IntEnum

REQUEST_CODE = 0xD6
RESPONSE_CODE = 0xD7


class Command(IntEnum):
    """Chipset command codes."""

    IN_SET_RF = 0x00
    IN_SET_PROTOCOL = 0x02
    IN_COMM_RF = 0x04
    SWITCH_RF = 0x06
    MAINTAIN_FLASH = 0x10
    RESET_DEVICE = 0x12
    GET_FIRMWARE_VERSION = 0x20
    GET_PD_DATA_VERSION = 0x22
    GET_PROPERTY = 0x24
    IN_GET_PROTOCOL = 0x26
    GET_COMMAND_TYPE = 0x28
    SET_COMMAND_TYPE = 0x2A
    IN_SET_RCT = 0x30
    IN_GET_RCT = 0x32
    GET_PD_DATA = 0x34
    READ_REGISTER = 0x36
    TG_SET_RF = 0x40
    TG_SET_PROTOCOL = 0x42
    TG_SET_AUTO = 0x44
    TG_SET_RF_OFF = 0x46
    TG_COMM_RF = 0x48
    TG_GET_PROTOCOL = 0x50
    TG_SET_RCT = 0x60
    TG_GET_RCT = 0x62
    DIAGNOSE = 0xF0

    @property
    def response_code(self) -> int:
        """Code the chipset answers this command with."""
        return self.value + 1

    def encode(self, args: bytes = b"") -> bytes:
        """Build the request payload ``D6 <code> <args>``."""
        return bytes([REQUEST_CODE, self.value]) + bytes(args)


def build_request(command: Command, args: bytes = b"") -> bytes:
    """Build a request payload for ``command``."""
    return command.encode(args)


def parse_response(command: Command, payload: bytes) -> bytes | None:
    """Strip the response header for ``command``.

    Returns:
        The result bytes following ``D7 <code+1>``, or ``None`` when the
        payload does not answer ``command``.
    """
    if payload[:2] != bytes([RESPONSE_CODE, command.response_code]):
        return None
    return payload[2:]
