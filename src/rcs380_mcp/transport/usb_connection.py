"""USB bulk connection to a Sony RC-S380 reader.

The reader exposes a single vendor-specific interface (0) with one bulk IN
and one bulk OUT endpoint. Frames are written and read whole; one read
returns at most one frame.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import usb.core
import usb.util

from ..exceptions import TransportError, TransportTimeoutError
from ..utils.checksum import hex_string

logger = logging.getLogger(__name__)

VENDOR_ID = 0x054C
PRODUCT_ID = 0x06C3
INTERFACE = 0
READ_SIZE = 256 + 11  # max payload + frame overhead
READ_TIMEOUT_MS = 100
WRITE_TIMEOUT_MS = 100


@dataclass
class DeviceInfo:
    """Basic device identification from USB descriptors."""

    vendor_id: int = VENDOR_ID
    product_id: int = PRODUCT_ID
    manufacturer: str = ""
    product: str = ""


class USBTransport:
    """Raw frame transport over the reader's bulk endpoints.

    Usage::

        transport = USBTransport()
        transport.open()
        transport.write(frame_bytes)
        response = transport.read(timeout_ms=100)
        transport.close()
    """

    def __init__(
        self,
        vendor_id: int = VENDOR_ID,
        product_id: int = PRODUCT_ID,
        write_timeout_ms: int = WRITE_TIMEOUT_MS,
    ) -> None:
        self._vendor_id = vendor_id
        self._product_id = product_id
        self._write_timeout_ms = write_timeout_ms
        self._device = None
        self._ep_in = None
        self._ep_out = None
        self._connected = False
        self._device_info = DeviceInfo(vendor_id=vendor_id, product_id=product_id)

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def device_info(self) -> DeviceInfo:
        return self._device_info

    def open(self) -> DeviceInfo:
        """Find the reader, claim its interface and locate the bulk endpoints.

        Returns:
            DeviceInfo with USB descriptor information.

        Raises:
            TransportError: If the device cannot be found or opened.
        """
        dev = usb.core.find(idVendor=self._vendor_id, idProduct=self._product_id)
        if dev is None:
            raise TransportError(
                f"No reader found ({self._vendor_id:#06x}:{self._product_id:#06x}). "
                f"Ensure the device is connected and you have permissions."
            )

        try:
            if dev.is_kernel_driver_active(INTERFACE):
                dev.detach_kernel_driver(INTERFACE)
            dev.set_configuration()
            intf = dev.get_active_configuration()[(INTERFACE, 0)]
            ep_in = _find_bulk_endpoint(intf, usb.util.ENDPOINT_IN)
            ep_out = _find_bulk_endpoint(intf, usb.util.ENDPOINT_OUT)
            usb.util.claim_interface(dev, INTERFACE)
            manufacturer = usb.util.get_string(dev, dev.iManufacturer) or ""
            product = usb.util.get_string(dev, dev.iProduct) or ""
        except usb.core.USBError as e:
            usb.util.dispose_resources(dev)
            raise TransportError(f"Could not open reader: {e}") from e

        if ep_in is None or ep_out is None:
            usb.util.dispose_resources(dev)
            raise TransportError("Reader has no bulk IN/OUT endpoint pair")

        self._device = dev
        self._ep_in = ep_in
        self._ep_out = ep_out
        self._connected = True
        self._device_info = DeviceInfo(
            vendor_id=self._vendor_id,
            product_id=self._product_id,
            manufacturer=manufacturer,
            product=product,
        )

        logger.info(
            "Connected via pyusb: %s %s",
            self._device_info.manufacturer,
            self._device_info.product,
        )
        return self._device_info

    def close(self) -> None:
        """Release the interface. Safe to call more than once."""
        if not self._connected:
            return

        try:
            usb.util.release_interface(self._device, INTERFACE)
            usb.util.dispose_resources(self._device)
        except usb.core.USBError as e:
            logger.warning("Error closing device: %s", e)
        finally:
            self._device = None
            self._ep_in = None
            self._ep_out = None
            self._connected = False
            logger.info("Disconnected")

    def write(self, data: bytes) -> None:
        """Write one frame to the bulk OUT endpoint.

        Raises:
            TransportError: If not connected, the transfer fails, or the
                device accepts fewer bytes than supplied.
        """
        if not self._connected:
            raise TransportError("Not connected to device")

        logger.debug(">>>> %s", hex_string(data))
        try:
            written = self._device.write(
                self._ep_out.bEndpointAddress, data, self._write_timeout_ms
            )
        except usb.core.USBError as e:
            raise TransportError(f"send error: {e}") from e
        if written != len(data):
            raise TransportError(f"send error: wrote {written} of {len(data)} bytes")

    def read(self, timeout_ms: int = READ_TIMEOUT_MS) -> bytes:
        """Read one frame from the bulk IN endpoint.

        Raises:
            TransportTimeoutError: If nothing arrived within ``timeout_ms``.
            TransportError: If not connected or the transfer fails.
        """
        if not self._connected:
            raise TransportError("Not connected to device")

        try:
            data = self._device.read(
                self._ep_in.bEndpointAddress, READ_SIZE, timeout_ms
            )
        except usb.core.USBTimeoutError as e:
            raise TransportTimeoutError(f"receive timeout after {timeout_ms} ms") from e
        except usb.core.USBError as e:
            raise TransportError(f"receive error: {e}") from e

        data = bytes(data)
        logger.debug("<<<< %s", hex_string(data))
        return data


def _find_bulk_endpoint(intf, direction: int):
    return usb.util.find_descriptor(
        intf,
        custom_match=lambda ep: (
            usb.util.endpoint_direction(ep.bEndpointAddress) == direction
            and usb.util.endpoint_type(ep.bmAttributes) == usb.util.ENDPOINT_TYPE_BULK
        ),
    )
