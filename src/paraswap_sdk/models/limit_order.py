"""Limit order models.

Lifecycle: ``LimitOrderInput`` -> ``UnsignedLimitOrder`` (built) ->
``SignedLimitOrder`` (EIP-712 signature attached) -> ``LimitOrderFromApi``
(posted, echoed back by the order API). Fill and cancel are terminal and
happen on-chain.
"""

from typing import Any

from eth_account.messages import encode_typed_data
from pydantic import Field
from web3 import Web3

from ..config.constants import MAX_EXPIRY, MAX_NONCE, NONCE_SHIFT_BITS, ZERO_ADDRESS
from ..core.enums import LimitOrderState
from ..core.exceptions import InvalidOrderError
from .common import Address, APIModel, NumberAsString

# Fixed external schema of the AugustusRFQ order struct
ORDER_EIP712_TYPES: dict[str, list[dict[str, str]]] = {
    "EIP712Domain": [
        {"name": "name", "type": "string"},
        {"name": "version", "type": "string"},
        {"name": "chainId", "type": "uint256"},
        {"name": "verifyingContract", "type": "address"},
    ],
    "Order": [
        {"name": "nonceAndMeta", "type": "uint256"},
        {"name": "expiry", "type": "uint128"},
        {"name": "makerAsset", "type": "address"},
        {"name": "takerAsset", "type": "address"},
        {"name": "maker", "type": "address"},
        {"name": "taker", "type": "address"},
        {"name": "makerAmount", "type": "uint256"},
        {"name": "takerAmount", "type": "uint256"},
    ],
}


def pack_nonce_and_meta(nonce: int, taker_in_nonce: str = ZERO_ADDRESS) -> int:
    """Pack a maker nonce and the taker-in-nonce address into one uint256.

    Raises:
        InvalidOrderError: If the nonce does not fit in the 96 bits above the address
    """
    if not 0 <= nonce < MAX_NONCE:
        raise InvalidOrderError(f"nonce must be in [0, 2**96), got {nonce}")
    return (nonce << NONCE_SHIFT_BITS) | int(taker_in_nonce, 16)


def typed_data_hash(typed_data: dict[str, Any]) -> str:
    """EIP-712 digest of a full typed-data message."""
    signable = encode_typed_data(full_message=typed_data)
    digest = Web3.keccak(b"\x19" + signable.version + signable.header + signable.body)
    return "0x" + bytes(digest).hex()


class LimitOrderInput(APIModel):
    """Maker intent as supplied by the caller.

    Attributes:
        nonce: Replay protection, unique per maker
        expiry: Unix seconds after which the order is invalid (0 = never)
        maker: Defaults to the account bound to the contract caller
        taker: Zero address for a public order
    """

    nonce: int = Field(..., ge=0, lt=MAX_NONCE)
    expiry: int = Field(..., ge=0, lt=MAX_EXPIRY)
    maker_asset: Address
    taker_asset: Address
    maker_amount: NumberAsString
    taker_amount: NumberAsString
    maker: Address | None = None
    taker: Address = ZERO_ADDRESS
    taker_in_nonce: Address = ZERO_ADDRESS


class OrderData(APIModel):
    """The ``Order`` struct as signed and as passed to ``fillOrder``."""

    nonce_and_meta: NumberAsString
    expiry: int = Field(..., ge=0, lt=MAX_EXPIRY)
    maker_asset: Address
    taker_asset: Address
    maker: Address
    taker: Address
    maker_amount: NumberAsString
    taker_amount: NumberAsString

    def is_expired(self, now: int) -> bool:
        return self.expiry != 0 and self.expiry <= now

    def to_message(self) -> dict[str, Any]:
        """EIP-712 message values."""
        return {
            "nonceAndMeta": int(self.nonce_and_meta),
            "expiry": self.expiry,
            "makerAsset": self.maker_asset,
            "takerAsset": self.taker_asset,
            "maker": self.maker,
            "taker": self.taker,
            "makerAmount": int(self.maker_amount),
            "takerAmount": int(self.taker_amount),
        }

    def to_abi(self) -> tuple:
        """Order tuple in ABI field order."""
        return tuple(self.to_message().values())


class LimitOrderDomain(APIModel):
    name: str
    version: str
    chain_id: int
    verifying_contract: Address

    def to_typed_data(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "chainId": self.chain_id,
            "verifyingContract": self.verifying_contract,
        }


class UnsignedLimitOrder(APIModel):
    """A built order: the domain and struct to be signed."""

    domain: LimitOrderDomain
    data: OrderData

    def to_typed_data(self) -> dict[str, Any]:
        """Full EIP-712 message (types, primaryType, domain, message)."""
        return {
            "types": ORDER_EIP712_TYPES,
            "primaryType": "Order",
            "domain": self.domain.to_typed_data(),
            "message": self.data.to_message(),
        }

    def compute_hash(self) -> str:
        return typed_data_hash(self.to_typed_data())


class SignedLimitOrder(UnsignedLimitOrder):
    """A built order with the maker's signature. Immutable payload."""

    signature: str
    order_hash: str

    def to_api(self) -> dict[str, Any]:
        """Body posted to the order API."""
        return {
            **self.data.to_api(),
            "chainId": self.domain.chain_id,
            "signature": self.signature,
            "orderHash": self.order_hash,
        }


class LimitOrderFromApi(OrderData):
    """Order as stored and returned by the order API."""

    order_hash: str
    signature: str
    chain_id: int
    state: LimitOrderState = LimitOrderState.PENDING
    created_at: int | None = None
    updated_at: int | None = None
    transaction_hash: str | None = None
    fillable_balance: NumberAsString | None = None
    swappable_balance: NumberAsString | None = None
    maker_balance: NumberAsString | None = None
