"""Port-100 chipset driver.

Each command is one synchronous round trip::

    host  --[data frame: D6 <code> <args>]-->  chipset
    host  <--[ack frame]--------------------  chipset
    host  <--[data frame: D7 <code+1> ...]--  chipset

An unexpected ack, data frame or response code is logged and reported as
a ``None`` result. Transport failures and checksum errors propagate.
"""

from __future__ import annotations

import logging
import math

from ..exceptions import (
    CommunicationError,
    ParameterError,
    ProtocolMismatchError,
    Port100Error,
    StatusError,
    TransportTimeoutError,
)
from ..models.bitrate import rf_settings
from ..models.protocol_params import ProtocolParameters
from ..protocol.commands import Command, parse_response
from ..protocol.framing import ACK_FRAME, build_frame, parse_frame
from ..transport.base import Transport
from ..utils.checksum import from_le16, hex_string, to_le16

logger = logging.getLogger(__name__)

DRAIN_TIMEOUT_MS = 10
RESPONSE_TIMEOUT_MS = 100
FIRMWARE_VERSION_OPTIONS = (None, 60, 61, 0x80)
MAX_DEVICE_TIMEOUT = 0xFFFF


def device_timeout(timeout: float) -> int:
    """Convert an InCommRF timeout in milliseconds to 0.1 ms device units."""
    if timeout <= 0:
        return 0
    return min(math.ceil(timeout) * 10, MAX_DEVICE_TIMEOUT)


class CommandChannel:
    """Typed command interface to the chipset over a raw transport.

    Usage::

        channel = CommandChannel(transport).open()
        try:
            version = channel.get_firmware_version()
        finally:
            channel.close()
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._closed = False

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def closed(self) -> bool:
        return self._closed

    def open(self) -> CommandChannel:
        """Bring the chipset into a known idle state.

        An Ack aborts whatever a previous session left in flight, then any
        buffered frames are discarded until a read times out.

        Raises:
            TransportError: On any transport failure other than the timeout
                that ends the drain.
            StatusError: If the chipset rejects the command type or RF off.
        """
        self._transport.write(ACK_FRAME)
        while True:
            try:
                data = self._transport.read(DRAIN_TIMEOUT_MS)
            except TransportTimeoutError:
                break
            logger.debug("cleared garbage %s", hex_string(data))

        self.set_command_type(1)
        self.switch_rf(False)
        return self

    def close(self) -> None:
        """Switch RF off, send a final Ack and close the transport.

        Runs at most once. The transport is closed even when the chipset
        cannot be reached.
        """
        if self._closed:
            return
        self._closed = True
        try:
            try:
                self.switch_rf(False)
            except Port100Error as e:
                logger.warning("Error switching RF off: %s", e)
            try:
                self._transport.write(ACK_FRAME)
            except Port100Error as e:
                logger.warning("Error sending final ACK: %s", e)
        finally:
            self._transport.close()

    def __enter__(self) -> CommandChannel:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ─── ROUND TRIP ──────────────────────────────────────────────────

    def send_command(
        self,
        command: Command,
        args: bytes = b"",
        timeout_ms: int = RESPONSE_TIMEOUT_MS,
    ) -> bytes | None:
        """Send one command and return its result bytes.

        Args:
            command: Chipset command.
            args: Command arguments following the command code.
            timeout_ms: Read timeout for each of the ack and response frames.

        Returns:
            The response bytes after ``D7 <code+1>``, or ``None`` if the
            chipset answered out of protocol.

        Raises:
            TransportError: If the transport fails or a frame does not arrive.
            FrameError: If a received frame fails its checksums.
        """
        try:
            return self._round_trip(command, bytes(args), timeout_ms)
        except ProtocolMismatchError as e:
            logger.error("%s: %s", command.name, e)
            return None

    def _round_trip(self, command: Command, args: bytes, timeout_ms: int) -> bytes:
        self._transport.write(build_frame(command.encode(args)))

        ack = parse_frame(self._transport.read(timeout_ms))
        if not ack.is_ack:
            raise ProtocolMismatchError(f"expected ACK but got {ack.kind.name}")

        rsp = parse_frame(self._transport.read(timeout_ms))
        if not rsp.is_data:
            raise ProtocolMismatchError(f"expected DATA but got {rsp.kind.name}")

        payload = rsp.payload
        result = parse_response(command, payload)
        if result is None:
            raise ProtocolMismatchError(
                f"expected rsp code D7{command.response_code:02X} "
                f"but got {payload[:2].hex().upper() or '(empty)'}"
            )
        return result

    def _send_status_command(self, command: Command, args: bytes) -> None:
        res = self.send_command(command, args)
        if res is None:
            return
        if not res:
            logger.error("%s: response carries no status byte", command.name)
            return
        if res[0] != 0:
            raise StatusError(res[0])

    # ─── COMMANDS ────────────────────────────────────────────────────

    def set_command_type(self, command_type: int) -> None:
        self._send_status_command(Command.SET_COMMAND_TYPE, bytes([command_type]))

    def switch_rf(self, on: bool) -> None:
        self._send_status_command(Command.SWITCH_RF, bytes([1 if on else 0]))

    def get_firmware_version(self, option: int | None = None) -> int | None:
        """Read the firmware version as ``major << 8 | minor``.

        Args:
            option: Optional selector, one of 60, 61 or 0x80.
        """
        if option not in FIRMWARE_VERSION_OPTIONS:
            raise ParameterError(f"option={option}")
        args = b"" if option is None else bytes([option])
        res = self.send_command(Command.GET_FIRMWARE_VERSION, args)
        if res is None:
            return None
        version = from_le16(res)
        logger.debug("firmware version %x.%02x", version >> 8, version & 0xFF)
        return version

    def get_pd_data_version(self) -> int | None:
        """Read the package data format version as ``major << 8 | minor``."""
        res = self.send_command(Command.GET_PD_DATA_VERSION)
        if res is None:
            return None
        version = from_le16(res)
        logger.debug("package data format %x.%02x", version >> 8, version & 0xFF)
        return version

    def in_set_rf(self, send: str, recv: str | None = None) -> None:
        """Select transmit and receive bitrate presets (e.g. ``"212F"``)."""
        self._send_status_command(Command.IN_SET_RF, rf_settings(send, recv))

    def in_set_protocol(self, params: ProtocolParameters) -> None:
        self._send_status_command(Command.IN_SET_PROTOCOL, params.to_bytes())

    def in_comm_rf(self, data: bytes, timeout: float) -> bytes | None:
        """Exchange a frame with a card in the RF field.

        Args:
            data: Frame to transmit, including its length byte.
            timeout: Card response timeout in milliseconds.

        Returns:
            The card's response frame, or ``None`` on a protocol mismatch.

        Raises:
            CommunicationError: If the chipset reports a non-zero RF status.
        """
        units = device_timeout(timeout)
        res = self.send_command(
            Command.IN_COMM_RF,
            to_le16(units) + bytes(data),
            timeout_ms=max(0, math.ceil(timeout)) + RESPONSE_TIMEOUT_MS,
        )
        if res is None:
            return None
        status = int.from_bytes(res[:4], "little")
        if status != 0:
            raise CommunicationError(status)
        return res[5:]
