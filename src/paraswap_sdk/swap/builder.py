"""Deterministic construction of router calls from a priced quote.

Nothing here touches the network: a quote, the adapter map and a payload
registry fully determine the resulting parameters and calldata.
"""

from decimal import Decimal
from fractions import Fraction
from functools import lru_cache

from web3 import Web3

from ..config.constants import (
    MAX_SLIPPAGE_BPS,
    PERCENT_PRECISION,
    ZERO_ADDRESS,
    is_ether,
    load_abi,
)
from ..core.enums import SwapSide
from ..core.exceptions import BuildError
from ..models.adapters import Adapters, DexConf
from ..models.rates import OptimalRate, OptimalRates
from ..models.transaction import (
    TransactionBuyParams,
    TransactionBuyRoute,
    TransactionRoute,
    TransactionSellParams,
    TransactionSellPath,
)
from .payloads import ExchangePayloadRegistry, RouteContext

SwapParams = TransactionSellParams | TransactionBuyParams


def apply_slippage(side: SwapSide, src_amount: int, dest_amount: int, slippage: int) -> tuple[int, int]:
    """Return ``(from_amount, to_amount)`` bounded by ``slippage`` basis points.

    A sell fixes the input and lowers the minimum output; a buy fixes the
    output and raises the maximum input.

    Raises:
        BuildError: If slippage is outside [0, 10000] or the bound is not positive
    """
    if isinstance(slippage, bool) or not isinstance(slippage, int):
        raise BuildError(f"Slippage must be an integer number of basis points, got {slippage!r}")
    if not 0 <= slippage <= MAX_SLIPPAGE_BPS:
        raise BuildError(f"Slippage must be between 0 and {MAX_SLIPPAGE_BPS} bps, got {slippage}")

    if side == SwapSide.SELL:
        to_amount = dest_amount * (MAX_SLIPPAGE_BPS - slippage) // MAX_SLIPPAGE_BPS
        if to_amount <= 0:
            raise BuildError(
                f"Minimum output is {to_amount} after {slippage} bps slippage; nothing to receive"
            )
        return src_amount, to_amount

    from_amount = src_amount * (MAX_SLIPPAGE_BPS + slippage) // MAX_SLIPPAGE_BPS
    if from_amount <= 0:
        raise BuildError(f"Maximum input is {from_amount}; quote has no source amount")
    return from_amount, dest_amount


def _check_route(route: list[OptimalRate], label: str) -> None:
    if not route:
        raise BuildError(f"{label} has no routes")
    total = sum((Decimal(leg.percent) for leg in route), Decimal("0"))
    if total != 100:
        raise BuildError(f"{label} percentages sum to {total}, expected 100")


def _adapter_for(adapters: Adapters, exchange: str) -> DexConf:
    adapter = adapters.get(exchange)
    if adapter is None:
        raise BuildError(f"No adapter for exchange {exchange}")
    return adapter


def _target_exchange(adapter: DexConf, leg: OptimalRate) -> str:
    return adapter.target_exchange or leg.address or ZERO_ADDRESS


def _hops(rates: OptimalRates, src_token: str, dest_token: str) -> list[tuple[str, str, list[OptimalRate]]]:
    """Split a sell quote into ``(hop_src, hop_dest, routes)`` hops."""
    if not rates.multi_route:
        return [(src_token, dest_token, rates.best_route)]

    if len(rates.multi_route) != 2:
        raise BuildError(f"Multi-route quotes must have 2 hops, got {len(rates.multi_route)}")
    connector = rates.details.connector if rates.details else None
    if connector is None:
        raise BuildError("Multi-route quote has no connector token")
    return [
        (src_token, connector, rates.multi_route[0]),
        (connector, dest_token, rates.multi_route[1]),
    ]


def build_sell_paths(
    rates: OptimalRates,
    adapters: Adapters,
    registry: ExchangePayloadRegistry,
    src_token: str,
    dest_token: str,
) -> list[TransactionSellPath]:
    paths = []
    for index, (hop_src, hop_dest, route) in enumerate(_hops(rates, src_token, dest_token)):
        _check_route(route, f"Hop {index}")
        routes = []
        for leg in route:
            adapter = _adapter_for(adapters, leg.exchange)
            encoded = registry.encode(
                RouteContext(
                    exchange=leg.exchange,
                    src_token=hop_src,
                    dest_token=hop_dest,
                    adapter=adapter,
                    data=leg.data,
                )
            )
            routes.append(
                TransactionRoute(
                    exchange=adapter.exchange,
                    target_exchange=_target_exchange(adapter, leg),
                    percent=int(Decimal(leg.percent) * PERCENT_PRECISION),
                    payload=encoded.payload,
                    network_fee=encoded.network_fee,
                )
            )
        paths.append(
            TransactionSellPath(
                to=hop_dest,
                total_network_fee=sum(int(route.network_fee) for route in routes),
                routes=routes,
            )
        )
    return paths


def build_buy_routes(
    rates: OptimalRates,
    adapters: Adapters,
    registry: ExchangePayloadRegistry,
    src_token: str,
    dest_token: str,
) -> list[TransactionBuyRoute]:
    """Split the quote totals across routes by percent.

    Every route but the last gets its truncated share; the last takes the
    remainder so the per-route amounts sum exactly to the quote totals.
    """
    if rates.multi_route:
        raise BuildError("Multi-route quotes are only supported for SELL")
    _check_route(rates.best_route, "Best route")

    src_total = int(rates.src_amount)
    dest_total = int(rates.dest_amount)
    allocated_src = allocated_dest = 0
    last = len(rates.best_route) - 1

    routes = []
    for index, leg in enumerate(rates.best_route):
        if index == last:
            from_amount = src_total - allocated_src
            to_amount = dest_total - allocated_dest
        else:
            share = Fraction(leg.percent) / 100
            from_amount = int(src_total * share)
            to_amount = int(dest_total * share)
        allocated_src += from_amount
        allocated_dest += to_amount

        adapter = _adapter_for(adapters, leg.exchange)
        encoded = registry.encode(
            RouteContext(
                exchange=leg.exchange,
                src_token=src_token,
                dest_token=dest_token,
                adapter=adapter,
                data=leg.data,
            )
        )
        routes.append(
            TransactionBuyRoute(
                exchange=adapter.exchange,
                target_exchange=_target_exchange(adapter, leg),
                from_amount=from_amount,
                to_amount=to_amount,
                payload=encoded.payload,
                network_fee=encoded.network_fee,
            )
        )
    return routes


def build_swap_params(
    rates: OptimalRates,
    slippage: int,
    adapters: Adapters,
    registry: ExchangePayloadRegistry,
    referrer: str = "",
    receiver: str | None = None,
    donation_percentage: int = 0,
) -> SwapParams:
    """Build ``multiSwap`` (sell) or ``buy`` parameters for a quote.

    Raises:
        BuildError: If the quote cannot be turned into a valid router call
    """
    if rates.details is None:
        raise BuildError("Quote has no token details; fetch it with get_rate")
    src_token = rates.details.token_from
    dest_token = rates.details.token_to

    src_amount = int(rates.src_amount)
    dest_amount = int(rates.dest_amount)
    from_amount, to_amount = apply_slippage(rates.side, src_amount, dest_amount, slippage)

    common = dict(
        from_token=src_token,
        to_token=dest_token,
        from_amount=from_amount,
        to_amount=to_amount,
        beneficiary=receiver or ZERO_ADDRESS,
        donation_percentage=donation_percentage,
        referrer=referrer,
    )

    if rates.side == SwapSide.SELL:
        path = build_sell_paths(rates, adapters, registry, src_token, dest_token)
        network_fee = sum(int(hop.total_network_fee) for hop in path)
        return TransactionSellParams(
            **common,
            expected_amount=dest_amount,
            value=_value(src_token, from_amount, network_fee),
            path=path,
        )

    route = build_buy_routes(rates, adapters, registry, src_token, dest_token)
    network_fee = sum(int(leg.network_fee) for leg in route)
    return TransactionBuyParams(
        **common,
        expected_amount=src_amount,
        value=_value(src_token, from_amount, network_fee),
        route=route,
    )


def _value(src_token: str, from_amount: int, network_fee: int) -> int:
    """ETH attached to the call: network fees, plus the input when it is ETH."""
    if is_ether(src_token):
        return from_amount + network_fee
    return network_fee


@lru_cache(maxsize=1)
def _augustus_contract():
    return Web3().eth.contract(abi=load_abi("AugustusSwapper"))


def encode_swap_calldata(params: SwapParams) -> str:
    """ABI-encode ``multiSwap``/``buy`` calldata for the router."""
    method = "multiSwap" if isinstance(params, TransactionSellParams) else "buy"
    return _augustus_contract().encode_abi(method, args=params.to_abi_args())
