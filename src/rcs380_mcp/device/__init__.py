"""Chipset driver and sensing session."""

from .chipset import CommandChannel, device_timeout
from .session import SensingSession
