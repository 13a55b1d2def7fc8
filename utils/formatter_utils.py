from decimal import Decimal
from typing import Optional

from eth_utils import from_wei, is_address
from eth_utils import to_checksum_address as eth_to_checksum_address

from utils.logger_utils import get_logger

logger = get_logger("Formatter Utils")

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def to_normalized_address(address: Optional[str]) -> Optional[str]:
    """
    Converts an address to its EIP-55 checksum form.
    Returns None for None or malformed input so callers can reject it explicitly.
    """
    if address is None or not isinstance(address, str):
        return None
    if not is_address(address):
        logger.debug(f"Not a valid address: {address}")
        return None
    return eth_to_checksum_address(address)


def is_zero_address(address: Optional[str]) -> bool:
    return address is None or int(address, 16) == 0


def wei_to_eth(amount_wei: int) -> Decimal:
    return Decimal(from_wei(amount_wei, "ether"))


def format_token_amount(amount_wei: int, precision: int = 2) -> str:
    """Formats a wei amount as a fixed-precision decimal string, e.g. 16.00."""
    return f"{wei_to_eth(amount_wei):.{precision}f}"
