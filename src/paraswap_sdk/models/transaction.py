"""Transaction models: the on-chain execution plan derived from a quote."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .common import Address, APIModel, NumberAsString


class TransactionRoute(APIModel):
    """One exchange leg of a sell path. ``percent`` is in basis points of 100%."""

    exchange: Address
    target_exchange: Address
    percent: NumberAsString
    payload: str
    network_fee: NumberAsString

    def to_abi(self) -> tuple:
        return (
            self.exchange,
            self.target_exchange,
            int(self.percent),
            bytes.fromhex(self.payload.removeprefix("0x")),
            int(self.network_fee),
        )


class TransactionSellPath(APIModel):
    """One hop of a sell: the token reached (``to``) and the routes used."""

    to: Address
    total_network_fee: NumberAsString
    routes: list[TransactionRoute]

    def to_abi(self) -> tuple:
        return (self.to, int(self.total_network_fee), [route.to_abi() for route in self.routes])


class TransactionBuyRoute(APIModel):
    """One exchange leg of a buy."""

    exchange: Address
    target_exchange: Address
    from_amount: NumberAsString
    to_amount: NumberAsString
    payload: str
    network_fee: NumberAsString

    def to_abi(self) -> tuple:
        return (
            self.exchange,
            self.target_exchange,
            int(self.from_amount),
            int(self.to_amount),
            bytes.fromhex(self.payload.removeprefix("0x")),
            int(self.network_fee),
        )


class _SwapParams(APIModel):
    value: NumberAsString
    from_token: Address
    to_token: Address
    from_amount: NumberAsString
    to_amount: NumberAsString
    expected_amount: NumberAsString
    mint_price: NumberAsString = "0"
    beneficiary: Address
    donation_percentage: NumberAsString = "0"
    referrer: str = ""


class TransactionSellParams(_SwapParams):
    """Arguments of ``multiSwap`` before ABI encoding."""

    path: list[TransactionSellPath]

    def to_abi_args(self) -> list[Any]:
        return [
            self.from_token,
            self.to_token,
            int(self.from_amount),
            int(self.to_amount),
            int(self.expected_amount),
            [hop.to_abi() for hop in self.path],
            int(self.mint_price),
            self.beneficiary,
            int(self.donation_percentage),
            self.referrer,
        ]


class TransactionBuyParams(_SwapParams):
    """Arguments of ``buy`` before ABI encoding."""

    route: list[TransactionBuyRoute]

    def to_abi_args(self) -> list[Any]:
        return [
            self.from_token,
            self.to_token,
            int(self.from_amount),
            int(self.to_amount),
            int(self.expected_amount),
            [leg.to_abi() for leg in self.route],
            int(self.mint_price),
            self.beneficiary,
            int(self.donation_percentage),
            self.referrer,
        ]


class TransactionData(APIModel):
    """Final transaction fields, ready to sign."""

    from_address: Address = Field(..., alias="from")
    to: Address
    data: str
    chain_id: int
    value: NumberAsString
    gas_price: NumberAsString | None = None
    gas: NumberAsString | None = None

    def to_tx_dict(self) -> dict[str, Any]:
        """Convert to a web3 transaction dict."""
        tx: dict[str, Any] = {
            "from": self.from_address,
            "to": self.to,
            "data": self.data,
            "value": int(self.value),
            "chainId": self.chain_id,
        }
        if self.gas_price is not None:
            tx["gasPrice"] = int(self.gas_price)
        if self.gas is not None:
            tx["gas"] = int(self.gas)
        return tx


class BuildOptions(BaseModel):
    """Options for ``build_tx``."""

    model_config = ConfigDict(frozen=True)

    only_params: bool = False
    gas_price: NumberAsString | None = None
    gas: NumberAsString | None = None


@dataclass(frozen=True)
class TransactionHandle:
    """A broadcast (or, in dry-run mode, simulated) transaction."""

    hash: str
    sender: str
    to: str
    data: str = "0x"
    value: int = 0
    nonce: int | None = None
