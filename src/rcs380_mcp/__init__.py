"""Sony RC-S380 (NFC Port-100) reader driver with FeliCa sensing and an MCP surface."""

__version__ = "0.1.0"
