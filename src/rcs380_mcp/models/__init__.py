"""Data models for RF settings, protocol parameters, and card responses."""

from .bitrate import BITRATE_PROFILES, rf_settings
from .protocol_params import ProtocolParameters
from .sensf import SensfResponse
