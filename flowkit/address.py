"""Flow account addresses and identifiers parsed from hexadecimal text."""

from __future__ import annotations

import re
from dataclasses import dataclass

ADDRESS_LENGTH = 8
ID_LENGTH = 32

EMPTY_ID = bytes(ID_LENGTH)

_HEX_PAIRS = re.compile(r"(?:[0-9a-fA-F]{2})*")


def _decode_hex_prefix(text: str) -> bytes:
    """Decode the longest run of valid hex pairs at the start of the text."""
    return bytes.fromhex(_HEX_PAIRS.match(text).group())


@dataclass(frozen=True)
class Address:
    """An eight-byte Flow account address."""

    data: bytes = bytes(ADDRESS_LENGTH)

    def __post_init__(self) -> None:
        if len(self.data) != ADDRESS_LENGTH:
            raise ValueError(
                f"address must be {ADDRESS_LENGTH} bytes long, got {len(self.data)}"
            )

    @classmethod
    def from_hex(cls, value: str) -> Address:
        """Parse an address, left-padding short values and keeping the last eight bytes of long ones."""
        trimmed = value.removeprefix("0x")
        if len(trimmed) % 2 == 1:
            trimmed = "0" + trimmed
        raw = _decode_hex_prefix(trimmed)[-ADDRESS_LENGTH:]
        return cls(raw.rjust(ADDRESS_LENGTH, b"\x00"))

    def __str__(self) -> str:
        return self.data.hex()

    def __bytes__(self) -> bytes:
        return self.data


def hex_to_address(value: str) -> Address:
    return Address.from_hex(value)


def hex_to_id(value: str) -> bytes:
    """Parse a 32-byte identifier; invalid text yields the leading valid bytes, zero padded."""
    return _decode_hex_prefix(value)[:ID_LENGTH].ljust(ID_LENGTH, b"\x00")