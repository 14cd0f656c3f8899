from decimal import Decimal
from typing import Optional

SATOSHI_PER_BITCOIN = 10**8


def hex_to_bytes(hex_string: Optional[str]) -> bytes:
    if hex_string is None:
        raise ValueError("hex string is None")
    hex_string = "".join(hex_string.split())
    if hex_string[:2] in ("0x", "0X"):
        hex_string = hex_string[2:]
    if len(hex_string) % 2 != 0:
        raise ValueError(f"odd-length hex string ({len(hex_string)} digits)")
    try:
        return bytes.fromhex(hex_string)
    except ValueError:
        raise ValueError(f"not a hex string '{hex_string[:32]}...'")


def bytes_to_hex(data: Optional[bytes]) -> Optional[str]:
    if data is None:
        return None
    return data.hex()


def satoshi_to_bitcoin(satoshi_value: Optional[int]) -> Optional[Decimal]:
    if satoshi_value is None:
        return None
    return Decimal(satoshi_value) / SATOSHI_PER_BITCOIN

