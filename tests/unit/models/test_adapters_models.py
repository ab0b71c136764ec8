"""Tests for adapter and contract models."""

import pytest

from paraswap_sdk.models.adapters import Adapters, ContractAddresses
from tests.fixtures.rates import (
    AUGUSTUS,
    AUGUSTUS_RFQ,
    KYBER_ADAPTER,
    SAMPLE_ADAPTERS,
    SAMPLE_CONTRACTS,
    TOKEN_TRANSFER_PROXY,
    UNISWAP_V2_ADAPTER,
)


class TestAdapters:
    """Test the adapter map."""

    def test_from_api_splits_router_and_dexes(self):
        """The augustus entry is the router; the rest are exchange adapters."""
        adapters = Adapters.from_api(SAMPLE_ADAPTERS)

        assert adapters.router == AUGUSTUS
        assert set(adapters.dexes) == {"uniswapv2", "curve", "kyber"}

    def test_lookup_is_case_insensitive(self):
        """Exchange names from quotes may differ in case."""
        adapters = Adapters.from_api(SAMPLE_ADAPTERS)

        assert adapters.get("UNISWAPV2").exchange == UNISWAP_V2_ADAPTER
        assert adapters.get("Unknown") is None

    def test_defaults(self):
        """Missing target exchange and network fee take defaults."""
        kyber = Adapters.from_api(SAMPLE_ADAPTERS).get("Kyber")

        assert kyber.exchange == KYBER_ADAPTER
        assert kyber.target_exchange is None
        assert kyber.network_fee == "1000"

    def test_missing_router_is_rejected(self):
        """An adapter map without the router is unusable."""
        with pytest.raises(ValueError):
            Adapters.from_api({"UniswapV2": SAMPLE_ADAPTERS["UniswapV2"]})


class TestContractAddresses:
    """Test core contract addresses."""

    def test_parses_api_names(self):
        """Contract names from the API should map to fields."""
        contracts = ContractAddresses.model_validate(SAMPLE_CONTRACTS)

        assert contracts.augustus_swapper == AUGUSTUS
        assert contracts.token_transfer_proxy == TOKEN_TRANSFER_PROXY
        assert contracts.augustus_rfq == AUGUSTUS_RFQ

    def test_rfq_is_optional(self):
        """Networks without limit orders have no AugustusRFQ."""
        payload = {k: v for k, v in SAMPLE_CONTRACTS.items() if k != "AugustusRFQ"}
        assert ContractAddresses.model_validate(payload).augustus_rfq is None
