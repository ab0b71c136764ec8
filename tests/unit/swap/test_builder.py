"""Tests for swap parameter construction."""

import pytest
from eth_abi import encode

from paraswap_sdk.config.constants import ZERO_ADDRESS
from paraswap_sdk.core.enums import SwapSide
from paraswap_sdk.core.exceptions import BuildError
from paraswap_sdk.models.adapters import Adapters
from paraswap_sdk.models.rates import OptimalRates
from paraswap_sdk.models.transaction import TransactionBuyParams, TransactionSellParams
from paraswap_sdk.swap.builder import (
    apply_slippage,
    build_swap_params,
    encode_swap_calldata,
)
from paraswap_sdk.swap.payloads import default_payload_registry
from tests.fixtures.rates import (
    CURVE_ADAPTER,
    CURVE_POOL,
    DAI,
    HEX,
    KYBER_ADAPTER,
    SAMPLE_ADAPTERS,
    SAMPLE_BUY_RATES,
    SAMPLE_MULTI_ROUTE_RATES,
    SAMPLE_SELL_RATES,
    SAMPLE_SPLIT_SELL_RATES,
    UNISWAP_V2_ADAPTER,
    UNISWAP_V2_ROUTER,
    USDC,
    USER,
)

ADAPTERS = Adapters.from_api(SAMPLE_ADAPTERS)


def build(payload, slippage=100, **kwargs):
    return build_swap_params(
        OptimalRates.model_validate(payload),
        slippage,
        ADAPTERS,
        default_payload_registry(),
        **kwargs,
    )


class TestApplySlippage:
    """Test slippage bounds."""

    def test_sell_lowers_minimum_output(self):
        """SELL keeps the input and lowers the output by slippage."""
        assert apply_slippage(SwapSide.SELL, 1000, 8000, 100) == (1000, 7920)

    def test_buy_raises_maximum_input(self):
        """BUY keeps the output and raises the input by slippage."""
        assert apply_slippage(SwapSide.BUY, 1000, 8000, 100) == (1010, 8000)

    def test_zero_slippage_is_exact(self):
        """No slippage means the quoted amounts."""
        assert apply_slippage(SwapSide.SELL, 1000, 8000, 0) == (1000, 8000)

    @pytest.mark.parametrize("slippage", [-1, 10001, 1.5, "100"])
    def test_out_of_range_slippage(self, slippage):
        """Slippage must be integer basis points in [0, 10000]."""
        with pytest.raises(BuildError):
            apply_slippage(SwapSide.SELL, 1000, 8000, slippage)

    def test_full_slippage_leaves_nothing_to_receive(self):
        """A sell bound that rounds to zero is unsatisfiable."""
        with pytest.raises(BuildError):
            apply_slippage(SwapSide.SELL, 1000, 8000, 10000)


class TestSellParams:
    """Test SELL construction."""

    def test_single_uniswap_v2_route(self):
        """One UniswapV2 route yields one path with a deterministic payload."""
        params = build(SAMPLE_SELL_RATES)

        assert isinstance(params, TransactionSellParams)
        assert params.from_token == DAI
        assert params.to_token == HEX
        assert params.from_amount == "1000000000000000000"
        assert params.to_amount == "7920000000000000000"
        assert params.expected_amount == "8000000000000000000"
        assert params.beneficiary == ZERO_ADDRESS

        assert len(params.path) == 1
        hop = params.path[0]
        assert hop.to == HEX
        assert hop.total_network_fee == "0"
        assert len(hop.routes) == 1

        route = hop.routes[0]
        assert route.exchange == UNISWAP_V2_ADAPTER
        assert route.target_exchange == UNISWAP_V2_ROUTER
        assert route.percent == "10000"
        assert route.network_fee == "0"
        assert route.payload == "0x" + encode(["address[]"], [[DAI, HEX]]).hex()

    def test_same_quote_builds_same_params(self):
        """Construction is deterministic."""
        assert build(SAMPLE_SELL_RATES) == build(SAMPLE_SELL_RATES)

    def test_erc20_input_value_is_network_fee(self):
        """Token input attaches only network fees."""
        assert build(SAMPLE_SELL_RATES).value == "0"

    def test_split_route_percentages(self):
        """Fractional percents become basis points of the route."""
        params = build(SAMPLE_SPLIT_SELL_RATES)
        uniswap, curve = params.path[0].routes

        assert uniswap.percent == "6250"
        assert curve.percent == "3750"
        assert curve.exchange == CURVE_ADAPTER
        assert curve.target_exchange == CURVE_POOL
        assert curve.payload == "0x" + encode(
            ["int128", "int128", "uint256", "bool"], [0, 1, 1700000000, False]
        ).hex()

    def test_multi_route_uses_connector(self):
        """A two-hop quote goes through the connector token."""
        params = build(SAMPLE_MULTI_ROUTE_RATES)

        assert [hop.to for hop in params.path] == [USDC, HEX]
        assert params.path[0].routes[0].payload == "0x" + encode(["address[]"], [[DAI, USDC]]).hex()
        assert params.path[1].routes[0].payload == "0x" + encode(["address[]"], [[USDC, HEX]]).hex()

    def test_referrer_and_receiver(self):
        """Referrer and receiver are carried into the params."""
        params = build(SAMPLE_SELL_RATES, referrer="my-app", receiver=USER)

        assert params.referrer == "my-app"
        assert params.beneficiary == USER


class TestBuyParams:
    """Test BUY construction."""

    def test_route_amounts_sum_to_quote_totals(self):
        """Per-route amounts sum exactly to srcAmount and destAmount."""
        params = build(SAMPLE_BUY_RATES)

        assert isinstance(params, TransactionBuyParams)
        assert sum(int(route.from_amount) for route in params.route) == int(
            SAMPLE_BUY_RATES["srcAmount"]
        )
        assert sum(int(route.to_amount) for route in params.route) == int(
            SAMPLE_BUY_RATES["destAmount"]
        )

    def test_remainder_goes_to_last_route(self):
        """Truncated shares leave the remainder on the last route."""
        params = build(SAMPLE_BUY_RATES)

        assert [route.from_amount for route in params.route] == [
            "333300000000000000",
            "333300000000000000",
            "333400000000000001",
        ]
        assert params.route[2].exchange == KYBER_ADAPTER
        assert params.route[2].payload == "0x"

    def test_eth_input_value_includes_amount_and_fees(self):
        """ETH input attaches the maximum input plus network fees."""
        params = build(SAMPLE_BUY_RATES, slippage=50)

        max_input = int(SAMPLE_BUY_RATES["srcAmount"]) * 10050 // 10000
        assert params.from_amount == str(max_input)
        assert params.expected_amount == SAMPLE_BUY_RATES["srcAmount"]
        assert params.value == str(max_input + 1000)

    def test_buy_multi_route_is_rejected(self):
        """Multi-route quotes are sell-only."""
        with pytest.raises(BuildError):
            build({**SAMPLE_MULTI_ROUTE_RATES, "side": "BUY"})


class TestBuildErrors:
    """Test invalid quotes."""

    def test_empty_route(self):
        """A quote without routes cannot be built."""
        with pytest.raises(BuildError, match="no routes"):
            build({**SAMPLE_SELL_RATES, "bestRoute": []})

    def test_percentages_must_sum_to_100(self):
        """Partial allocations are rejected."""
        route = [{**SAMPLE_SELL_RATES["bestRoute"][0], "percent": "90"}]
        with pytest.raises(BuildError, match="sum to"):
            build({**SAMPLE_SELL_RATES, "bestRoute": route})

    def test_unknown_adapter(self):
        """Exchanges without an adapter are rejected."""
        route = [{**SAMPLE_SELL_RATES["bestRoute"][0], "exchange": "Oasis"}]
        with pytest.raises(BuildError, match="No adapter"):
            build({**SAMPLE_SELL_RATES, "bestRoute": route})

    def test_missing_details(self):
        """Quotes without token details are rejected."""
        payload = {k: v for k, v in SAMPLE_SELL_RATES.items() if k != "details"}
        with pytest.raises(BuildError, match="details"):
            build(payload)

    def test_multi_route_without_connector(self):
        """A multi-route quote needs a connector token."""
        payload = {**SAMPLE_MULTI_ROUTE_RATES, "details": {"tokenFrom": DAI, "tokenTo": HEX}}
        with pytest.raises(BuildError, match="connector"):
            build(payload)


class TestCalldata:
    """Test ABI encoding of router calls."""

    def test_sell_calldata_selector(self):
        """Sell params encode a multiSwap call."""
        from web3 import Web3

        data = encode_swap_calldata(build(SAMPLE_SELL_RATES))
        selector = Web3.keccak(
            text="multiSwap(address,address,uint256,uint256,uint256,"
            "(address,uint256,(address,address,uint256,bytes,uint256)[])[],"
            "uint256,address,uint256,string)"
        )[:4]

        assert data.startswith("0x" + selector.hex().removeprefix("0x"))

    def test_buy_calldata_differs(self):
        """Buy params encode a different function."""
        sell = encode_swap_calldata(build(SAMPLE_SELL_RATES))
        buy = encode_swap_calldata(build(SAMPLE_BUY_RATES))

        assert sell[:10] != buy[:10]
