"""Bitrate and modulation presets for the InSetRF command.

Each preset maps to four register bytes: the first two select the
transmit bitrate and modulation, the last two the receive side.
"""

from __future__ import annotations

from ..exceptions import ParameterError

BITRATE_PROFILES: dict[str, bytes] = {
    "212F": bytes([1, 1, 15, 1]),
    "424F": bytes([1, 2, 15, 2]),
    "106A": bytes([2, 3, 15, 3]),
    "212A": bytes([4, 4, 15, 4]),
    "424A": bytes([5, 5, 15, 5]),
    "106B": bytes([3, 7, 15, 7]),
    "212B": bytes([3, 8, 15, 8]),
    "424B": bytes([3, 9, 15, 9]),
}


def rf_settings(send: str, recv: str | None = None) -> bytes:
    """Combine transmit and receive presets into InSetRF arguments.

    Args:
        send: Preset used for transmission, e.g. ``"212F"``.
        recv: Preset used for reception. Defaults to ``send``.
    """
    if send not in BITRATE_PROFILES:
        raise ParameterError(
            f"Unknown send bitrate '{send}'. Valid: {list(BITRATE_PROFILES)}"
        )
    if recv is None:
        recv = send
    if recv not in BITRATE_PROFILES:
        raise ParameterError(
            f"Unknown receive bitrate '{recv}'. Valid: {list(BITRATE_PROFILES)}"
        )
    return BITRATE_PROFILES[send][:2] + BITRATE_PROFILES[recv][2:]
