"""Capability markers.

Each handler declares the protocol it implements; a composed SDK satisfies
the protocols of the handlers it was built from. Consumers type against the
narrowest protocol they need (``isinstance`` works too, the protocols are
runtime checkable).
"""

from typing import Protocol, runtime_checkable

from ..core.enums import SwapSide
from ..models.adapters import Adapters, ContractAddresses
from ..models.limit_order import (
    LimitOrderFromApi,
    LimitOrderInput,
    OrderData,
    SignedLimitOrder,
    UnsignedLimitOrder,
)
from ..models.rates import OptimalRates, RateOptions
from ..models.token import Allowance, Token
from ..models.transaction import (
    BuildOptions,
    TransactionBuyParams,
    TransactionData,
    TransactionHandle,
    TransactionSellParams,
)

_PROTOCOL_INTERNALS = frozenset(vars(Protocol)) | {"__init__"}


def capability_methods(protocol: type) -> frozenset[str]:
    """Public method names declared by a capability protocol (and its bases)."""
    names = set()
    for klass in protocol.__mro__:
        if klass in (Protocol, object) or not getattr(klass, "_is_protocol", False):
            continue
        for name, value in vars(klass).items():
            if name.startswith("_") or name in _PROTOCOL_INTERNALS:
                continue
            if callable(value):
                names.add(name)
    return frozenset(names)


@runtime_checkable
class RatesCapability(Protocol):
    async def get_rate(
        self,
        src_token: str,
        dest_token: str,
        amount: int | str,
        side: SwapSide = SwapSide.SELL,
        options: RateOptions | None = None,
        *,
        src_decimals: int | None = None,
        dest_decimals: int | None = None,
    ) -> OptimalRates: ...


@runtime_checkable
class SwapTxCapability(Protocol):
    async def build_tx(
        self,
        optimal_rates: OptimalRates,
        slippage: int,
        user_address: str | None = None,
        options: BuildOptions | None = None,
        *,
        referrer: str = "",
        receiver: str | None = None,
        donation_percentage: int = 0,
    ) -> TransactionData | TransactionSellParams | TransactionBuyParams: ...


@runtime_checkable
class ApproveTokenCapability(Protocol):
    async def get_spender(self) -> str: ...

    async def get_allowance(self, account: str, token: str) -> Allowance: ...

    async def get_allowances(self, account: str, tokens: list[str]) -> list[Allowance]: ...

    async def approve_token(self, amount: int | str, token: str) -> TransactionHandle: ...


@runtime_checkable
class LimitOrdersCapability(Protocol):
    async def get_limit_order_contract(self) -> str: ...

    async def build_limit_order(self, order_input: LimitOrderInput) -> UnsignedLimitOrder: ...

    async def sign_limit_order(self, order: UnsignedLimitOrder) -> SignedLimitOrder: ...

    async def post_limit_order(self, order: SignedLimitOrder) -> LimitOrderFromApi: ...

    async def submit_limit_order(
        self, order: LimitOrderInput | UnsignedLimitOrder | SignedLimitOrder
    ) -> LimitOrderFromApi: ...

    async def get_limit_orders(self, maker: str) -> list[LimitOrderFromApi]: ...

    async def cancel_limit_order(
        self, order: str | LimitOrderFromApi | SignedLimitOrder
    ) -> TransactionHandle: ...

    async def cancel_limit_order_bulk(
        self, orders: list[str | LimitOrderFromApi | SignedLimitOrder]
    ) -> TransactionHandle: ...

    async def fill_direct_limit_order(
        self, order: OrderData, signature: str
    ) -> TransactionHandle: ...

    async def approve_maker_token_for_limit_order(
        self, amount: int | str, token: str
    ) -> TransactionHandle: ...

    async def approve_taker_token_for_limit_order(
        self, amount: int | str, token: str
    ) -> TransactionHandle: ...


@runtime_checkable
class TokensCapability(Protocol):
    async def get_tokens(self) -> list[Token]: ...

    async def get_balances(self, user_address: str) -> list[Token]: ...

    async def get_balance(self, user_address: str, token: str) -> Token: ...


@runtime_checkable
class AdaptersCapability(Protocol):
    async def get_adapters(self) -> Adapters: ...

    async def get_market_names(self) -> list[str]: ...

    async def get_contracts(self) -> ContractAddresses: ...


@runtime_checkable
class SwapSDK(RatesCapability, SwapTxCapability, ApproveTokenCapability, Protocol):
    """Quote, build and approve: everything a swap needs."""


@runtime_checkable
class LimitOrderSDK(LimitOrdersCapability, Protocol):
    """Limit order lifecycle."""


@runtime_checkable
class FullSDK(
    RatesCapability,
    SwapTxCapability,
    ApproveTokenCapability,
    LimitOrdersCapability,
    TokensCapability,
    AdaptersCapability,
    Protocol,
):
    """Every capability the SDK ships."""
