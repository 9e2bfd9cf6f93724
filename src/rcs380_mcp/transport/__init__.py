"""Raw byte transports to the reader."""

from .base import Transport
from .usb_connection import DeviceInfo, USBTransport
