"""MCP server entry point for the Sony RC-S380 reader.

Exposes card sensing tools and reader resources via the Model Context
Protocol using the official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .device.session import SensingSession
from .exceptions import Port100Error
from .models.bitrate import BITRATE_PROFILES
from .transport.usb_connection import PRODUCT_ID, VENDOR_ID, USBTransport

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "rcs380",
    instructions="MCP server for Sony RC-S380 (NFC Port-100) FeliCa readers",
)

# Global connection state
_transport: USBTransport | None = None
_session: SensingSession | None = None


def _get_session() -> SensingSession:
    """Get the active reader session, raising if not connected."""
    if _session is None or _session.closed:
        raise RuntimeError(
            "Not connected to reader. Use the 'connect' tool first."
        )
    return _session


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def connect(vendor_id: int = VENDOR_ID, product_id: int = PRODUCT_ID) -> dict[str, Any]:
    """Open the reader and initialize its chipset.

    Finds the device by USB vendor/product ID (default 0x054C:0x06C3),
    resets any pending transaction and reads the firmware version.
    """
    global _transport, _session
    if _session is not None and not _session.closed:
        return {
            "connected": True,
            "message": "Already connected",
            "chipset": _session.chipset_name,
        }

    transport = USBTransport(vendor_id=vendor_id, product_id=product_id)
    try:
        info = transport.open()
        session = SensingSession.connect(transport)
    except Port100Error as e:
        logger.error("connect failed: %s", e)
        return {"connected": False, "error": str(e)}

    _transport = transport
    _session = session
    return {
        "connected": True,
        "chipset": session.chipset_name,
        "manufacturer": info.manufacturer,
        "product": info.product,
    }


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Switch the RF field off and release the reader."""
    global _transport, _session
    if _session is not None:
        _session.close()
    _transport = None
    _session = None
    return {"disconnected": True}


@mcp.tool()
def get_device_info() -> dict[str, Any]:
    """Retrieve chipset firmware and package data versions."""
    session = _get_session()
    try:
        pd_version = session.channel.get_pd_data_version()
    except Port100Error as e:
        return {"error": str(e)}

    result: dict[str, Any] = {"chipset": session.chipset_name}
    if session.firmware_version is not None:
        result["firmware_version"] = f"0x{session.firmware_version:04X}"
    if pd_version is not None:
        result["pd_data_version"] = f"0x{pd_version:04X}"
    if _transport is not None:
        result["manufacturer"] = _transport.device_info.manufacturer
        result["product"] = _transport.device_info.product
    return result


# ─── SENSING TOOLS ───────────────────────────────────────────────────

@mcp.tool()
def sense_felica(bitrate: str = "212F") -> dict[str, Any]:
    """Poll once for a FeliCa (Type F) card and return its IDm and PMm.

    Args:
        bitrate: Polling bitrate, "212F" or "424F".
    """
    if bitrate not in ("212F", "424F"):
        return {"error": f"Type F polling supports 212F and 424F, got '{bitrate}'"}

    session = _get_session()
    try:
        card = session.sense_card(bitrate)
    except Port100Error as e:
        return {"error": str(e)}

    if card is None:
        return {"found": False}
    return {"found": True, **card.to_dict()}


# ─── MCP RESOURCES ───────────────────────────────────────────────────

@mcp.resource("rcs380://device/info")
def resource_device_info() -> str:
    """Reader identification and connection state."""
    if _session is None or _session.closed or _transport is None:
        return json.dumps({"connected": False})

    info = _transport.device_info
    return json.dumps({
        "connected": True,
        "chipset": _session.chipset_name,
        "manufacturer": info.manufacturer,
        "product": info.product,
        "vendor_id": f"0x{info.vendor_id:04X}",
        "product_id": f"0x{info.product_id:04X}",
    })


@mcp.resource("rcs380://bitrates")
def resource_bitrates() -> str:
    """InSetRF bitrate presets and their register values."""
    profiles = [
        {"name": name, "registers": settings.hex(" ")}
        for name, settings in BITRATE_PROFILES.items()
    ]
    return json.dumps({"bitrates": profiles, "count": len(profiles)})


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
