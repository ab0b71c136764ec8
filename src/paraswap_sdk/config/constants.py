"""Constants for the ParaSwap SDK."""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

# API
DEFAULT_API_URL = "https://apiv5.paraswap.io"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0

# Special addresses
ETHER_ADDRESS = "0xeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeeee"  # Native ETH marker used by the API
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Allowances
UNLIMITED_ALLOWANCE = str(2**256 - 1)

# Slippage is expressed in basis points (10000 = 100%)
MAX_SLIPPAGE_BPS = 10_000

# Route percentages are encoded on-chain in basis points of 100%
PERCENT_PRECISION = 100

# Limit orders (AugustusRFQ EIP-712 domain)
RFQ_DOMAIN_NAME = "AUGUSTUS RFQ"
RFQ_DOMAIN_VERSION = "1"
NONCE_SHIFT_BITS = 160  # nonceAndMeta = nonce << 160 | taker-in-nonce
MAX_NONCE = 2**96  # nonce fills the 96 bits above the address
MAX_EXPIRY = 2**128  # expiry is a uint128

# Transaction Confirmation
TRANSACTION_TIMEOUT_SECONDS = 120

ABI_DIR = Path(__file__).parent / "abis"


@lru_cache(maxsize=None)
def load_abi(name: str) -> list[dict[str, Any]]:
    """Load a contract ABI shipped with the package.

    Args:
        name: ABI file stem (e.g. "ERC20", "AugustusSwapper", "AugustusRFQ")

    Returns:
        list[dict[str, Any]]: Parsed ABI
    """
    with open(ABI_DIR / f"{name}.json") as f:
        return json.load(f)


def is_ether(address: str) -> bool:
    """Check whether an address is the native ETH marker."""
    return address.lower() == ETHER_ADDRESS
