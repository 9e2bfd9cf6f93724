"""FeliCa SENSF_RES (polling response) model."""

from __future__ import annotations

from dataclasses import dataclass

from ..utils.checksum import hex_string

SENSF_RES_CODE = 0x01


@dataclass
class SensfResponse:
    """Identifiers returned by a Type F card.

    Layout of the response (length byte already stripped)::

        +------+-----------+-----------+----------------------+
        | 0x01 |   IDm     |   PMm     | System code          |
        |      |  8 bytes  |  8 bytes  | 2 bytes (optional)   |
        +------+-----------+-----------+----------------------+
    """

    idm: bytes
    pmm: bytes
    response_code: int = SENSF_RES_CODE
    system_code: bytes | None = None
    raw: bytes = b""

    @classmethod
    def from_bytes(cls, data: bytes) -> SensfResponse:
        if len(data) < 17 or data[0] != SENSF_RES_CODE:
            raise ValueError(f"Not a SENSF_RES: {hex_string(data)}")
        return cls(
            response_code=data[0],
            idm=bytes(data[1:9]),
            pmm=bytes(data[9:17]),
            system_code=bytes(data[17:19]) if len(data) >= 19 else None,
            raw=bytes(data),
        )

    def to_dict(self) -> dict:
        return {
            "idm": self.idm.hex().upper(),
            "pmm": self.pmm.hex().upper(),
            "system_code": self.system_code.hex().upper() if self.system_code else None,
        }
