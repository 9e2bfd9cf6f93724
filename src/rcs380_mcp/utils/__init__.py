"""Byte-level helpers shared by the protocol layers."""

from .checksum import checksum, from_le16, hex_string, to_le16
