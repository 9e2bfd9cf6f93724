"""Exception types raised by the RC-S380 driver."""

from __future__ import annotations

from .status import CommunicationStatus, decompose_status, status_name


class Port100Error(Exception):
    """Base class for every driver error."""


class TransportError(Port100Error, OSError):
    """The USB link failed: short write, broken read, or device not open."""


class TransportTimeoutError(TransportError):
    """A read returned no data before its timeout expired."""


class FrameError(Port100Error):
    """A received frame is malformed."""


class ChecksumMismatchError(FrameError):
    """A length or payload checksum did not verify."""


class ProtocolMismatchError(Port100Error):
    """The device answered with an unexpected frame or response code."""


class ParameterError(Port100Error, ValueError):
    """A command argument is outside the values the chipset accepts."""


class StatusError(Port100Error):
    """The chipset reported a non-zero status byte."""

    def __init__(self, code: int) -> None:
        self.code = code & 0xFF
        self.name = status_name(self.code)
        super().__init__(self.name)


class CommunicationError(Port100Error):
    """The chipset reported a non-zero RF communication status word."""

    def __init__(self, status: int) -> None:
        self.status = status & 0xFFFFFFFF
        self.flags = decompose_status(self.status)
        super().__init__("|".join(self.flags) or f"0x{self.status:08x}")

    def is_receive_timeout(self) -> bool:
        return bool(self.status & CommunicationStatus.RECEIVE_TIMEOUT_ERROR)


__all__ = [
    "Port100Error",
    "TransportError",
    "TransportTimeoutError",
    "FrameError",
    "ChecksumMismatchError",
    "ProtocolMismatchError",
    "ParameterError",
    "StatusError",
    "CommunicationError",
]
