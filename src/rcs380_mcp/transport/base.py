"""Transport interface consumed by the chipset driver."""

from __future__ import annotations

from typing import Protocol


class Transport(Protocol):
    """A bidirectional byte channel to the reader.

    ``read`` raises :class:`~rcs380_mcp.exceptions.TransportTimeoutError`
    when nothing arrives in time and
    :class:`~rcs380_mcp.exceptions.TransportError` for any other failure.
    ``write`` raises ``TransportError`` when the device accepts fewer bytes
    than supplied. ``close`` may be called more than once.
    """

    def write(self, data: bytes) -> None: ...

    def read(self, timeout_ms: int = ...) -> bytes: ...

    def close(self) -> None: ...
