"""Utility helpers shared across the package."""

from __future__ import annotations

from typing import Any

from hexbytes import HexBytes
from web3 import Web3

from .exceptions import ConfigurationError


def parse_chain_id(value: int | str) -> int:
    """Parse a chain id given as int, decimal string or hex string."""
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip(), 0)
    except (TypeError, ValueError):
        raise ConfigurationError("Invalid chain id", field="chain_id", value=value)


def to_address(value: Any) -> str:
    """Return the checksum address of a string, a contract or an account-like object."""
    address = getattr(value, "address", value)
    if isinstance(address, bytes | bytearray):
        address = HexBytes(address).to_0x_hex()
    try:
        return Web3.to_checksum_address(address)
    except (TypeError, ValueError):
        raise ConfigurationError("Invalid address", field="address", value=value)


def to_bytes(value: bytes | str | None) -> bytes:
    """Coerce hex strings and ``None`` into raw bytes."""
    if value is None:
        return b""
    if isinstance(value, bytes | bytearray):
        return bytes(value)
    return bytes.fromhex(strip_0x(value))


def strip_0x(value: str) -> str:
    return value[2:] if value.startswith("0x") else value
