"""Unit and encoding helpers for JSON-RPC transaction fields."""
from __future__ import annotations

from decimal import Decimal
from typing import Union

from eth_utils import is_hex_address, to_hex, to_wei

Number = Union[int, float, str, Decimal]


def to_win(amount: Number) -> int:
    """Convert whole coins to the chain's base unit (1 coin = 10**18)."""
    if isinstance(amount, bool):
        raise TypeError("Amount must be numeric, got bool")
    if isinstance(amount, (float, str)):
        amount = Decimal(str(amount))
    return to_wei(amount, "ether")


def to_quantity(value: int) -> str:
    if value < 0:
        raise ValueError(f"Quantity must be non-negative: {value}")
    return to_hex(value)


def normalize_address(address: str) -> str:
    # Checksum casing differs between chains, so only the hex form is checked.
    if not isinstance(address, str) or not is_hex_address(address):
        raise ValueError(f"Invalid address: {address!r}")
    return address.lower()
