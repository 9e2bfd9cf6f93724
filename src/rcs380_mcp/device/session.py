"""Reader session: chipset setup and FeliCa (Type F) card sensing."""

from __future__ import annotations

import logging

from ..exceptions import CommunicationError
from ..models.protocol_params import ProtocolParameters
from ..models.sensf import SENSF_RES_CODE, SensfResponse
from ..transport.base import Transport
from ..utils.checksum import hex_string
from .chipset import CommandChannel

logger = logging.getLogger(__name__)

# FeliCa Polling: command code 00 leads the SENSF_REQ fields (system code
# FFFF for any card, request code 01 for the system code, time slot 00)
SENSF_REQ = bytes([0x00, 0xFF, 0xFF, 0x01, 0x00])
SENSE_TIMEOUT_MS = 10
SENSF_RES_MIN_LENGTH = 18
TYPE_F_INITIAL_GUARD_TIME = 28


class SensingSession:
    """An open reader ready to sense cards.

    Usage::

        with SensingSession.connect(transport) as session:
            sensf_res = session.sense_type_f("212F")
    """

    def __init__(self, channel: CommandChannel, firmware_version: int | None) -> None:
        self._channel = channel
        self.firmware_version = firmware_version
        if firmware_version is None:
            self.chipset_name = "NFC Port-100"
        else:
            self.chipset_name = (
                f"NFC Port-100 v{firmware_version >> 8:x}.{firmware_version & 0xFF:02x}"
            )

    @classmethod
    def connect(cls, transport: Transport) -> SensingSession:
        """Initialize the chipset behind ``transport`` and read its firmware.

        The transport is closed if initialization fails.
        """
        channel = CommandChannel(transport)
        try:
            channel.open()
            version = channel.get_firmware_version()
        except Exception:
            channel.close()
            raise
        session = cls(channel, version)
        logger.info("%s", session.chipset_name)
        return session

    @property
    def channel(self) -> CommandChannel:
        return self._channel

    @property
    def closed(self) -> bool:
        return self._channel.closed

    def close(self) -> None:
        self._channel.close()

    def __enter__(self) -> SensingSession:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def sense_type_f(self, target: str = "212F") -> bytes | None:
        """Poll for a Type F card at the ``target`` bitrate (212F or 424F).

        Returns:
            The SENSF_RES without its length byte (response code, IDm, PMm
            and an optional system code), or ``None`` if no card answered.
        """
        logger.debug("polling for NFC-F technology")

        self._channel.in_set_rf(target)
        self._channel.in_set_protocol(
            ProtocolParameters.default().with_values(
                initial_guard_time=TYPE_F_INITIAL_GUARD_TIME
            )
        )

        logger.debug("send SENSF_REQ %s", hex_string(SENSF_REQ))
        try:
            frame = self._channel.in_comm_rf(
                bytes([len(SENSF_REQ) + 1]) + SENSF_REQ, SENSE_TIMEOUT_MS
            )
        except CommunicationError as e:
            if not e.is_receive_timeout():
                logger.debug("%s", e)
            return None

        if frame is None or not _is_sensf_res(frame):
            return None
        logger.debug("rcvd SENSF_RES %s", hex_string(frame[1:]))
        return frame[1:]

    def sense_card(self, target: str = "212F") -> SensfResponse | None:
        """Poll for a Type F card and decode its identifiers."""
        sensf_res = self.sense_type_f(target)
        if sensf_res is None:
            return None
        return SensfResponse.from_bytes(sensf_res)


def _is_sensf_res(frame: bytes) -> bool:
    # The length byte counts itself; a count of the remaining bytes is accepted too.
    return (
        len(frame) >= SENSF_RES_MIN_LENGTH
        and frame[0] in (len(frame), len(frame) - 1)
        and frame[1] == SENSF_RES_CODE
    )
