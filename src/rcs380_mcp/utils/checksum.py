"""Checksum and little-endian helpers for Port-100 frames."""

from __future__ import annotations


def checksum(data: bytes) -> int:
    """Return the byte that makes ``sum(data) + checksum`` a multiple of 256.

    Port-100 frames protect both the length field and the payload with this
    two's-complement sum.
    """
    return -sum(data) & 0xFF


def to_le16(value: int) -> bytes:
    """Encode the low 16 bits of ``value`` as two little-endian bytes."""
    return (value & 0xFFFF).to_bytes(2, "little")


def from_le16(data: bytes, offset: int = 0) -> int:
    """Decode an unsigned little-endian 16-bit value at ``offset``."""
    return int.from_bytes(data[offset : offset + 2], "little")


def hex_string(data: bytes) -> str:
    """Format bytes as space-separated lower-case hex octets."""
    return bytes(data).hex(" ")
