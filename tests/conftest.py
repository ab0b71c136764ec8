"""Pytest configuration and shared fixtures."""

from typing import Any

import pytest

from paraswap_sdk.core.enums import NetworkID
from paraswap_sdk.models.adapters import Adapters, ContractAddresses
from paraswap_sdk.sdk.config import SDKConfig
from tests.fixtures.limit_orders import MAKER_ACCOUNT, SAMPLE_ORDER_INPUT, TAKER_ACCOUNT
from tests.fixtures.rates import (
    SAMPLE_ADAPTERS,
    SAMPLE_BUY_RATES,
    SAMPLE_CONTRACTS,
    SAMPLE_SELL_RATES,
)
from tests.mocks.blockchain import MockContractCaller
from tests.mocks.transport import MockFetcher

TEST_API_URL = "https://api.paraswap.test"

# ===== Pytest Markers =====


def pytest_configure(config: Any) -> None:
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (may require network access)")


# ===== Mock Adapter Fixtures =====


@pytest.fixture
def mock_fetcher() -> MockFetcher:
    """Mock fetcher serving adapters and contracts for mainnet."""
    fetcher = MockFetcher()
    fetcher.add_response("/adapters/", SAMPLE_ADAPTERS)
    fetcher.add_response("/adapters/contracts", SAMPLE_CONTRACTS)
    return fetcher


@pytest.fixture
def maker_caller() -> MockContractCaller:
    """Contract caller bound to the maker's local account."""
    return MockContractCaller(MAKER_ACCOUNT)


@pytest.fixture
def taker_caller() -> MockContractCaller:
    """Contract caller bound to the taker's local account."""
    return MockContractCaller(TAKER_ACCOUNT)


@pytest.fixture
def read_only_caller() -> MockContractCaller:
    """Contract caller with no account."""
    return MockContractCaller()


# ===== Config Fixtures =====


@pytest.fixture
def api_config(mock_fetcher: MockFetcher) -> SDKConfig:
    """Config without a contract caller."""
    return SDKConfig(chain_id=NetworkID.MAINNET, fetcher=mock_fetcher, api_url=TEST_API_URL)


@pytest.fixture
def maker_config(mock_fetcher: MockFetcher, maker_caller: MockContractCaller) -> SDKConfig:
    """Config bound to the maker."""
    return SDKConfig(
        chain_id=NetworkID.MAINNET,
        fetcher=mock_fetcher,
        contract_caller=maker_caller,
        api_url=TEST_API_URL,
    )


@pytest.fixture
def taker_config(mock_fetcher: MockFetcher, taker_caller: MockContractCaller) -> SDKConfig:
    """Config bound to the taker, sharing the maker's fetcher."""
    return SDKConfig(
        chain_id=NetworkID.MAINNET,
        fetcher=mock_fetcher,
        contract_caller=taker_caller,
        api_url=TEST_API_URL,
    )


@pytest.fixture
def static_config(mock_fetcher: MockFetcher, maker_caller: MockContractCaller) -> SDKConfig:
    """Config with adapters and contracts supplied up front."""
    return SDKConfig(
        chain_id=NetworkID.MAINNET,
        fetcher=mock_fetcher,
        contract_caller=maker_caller,
        api_url=TEST_API_URL,
        adapters=Adapters.from_api(SAMPLE_ADAPTERS),
        contracts=ContractAddresses.model_validate(SAMPLE_CONTRACTS),
    )


# ===== Data Fixtures =====


@pytest.fixture
def sample_sell_rates() -> dict[str, Any]:
    """Single-route SELL quote."""
    return SAMPLE_SELL_RATES.copy()


@pytest.fixture
def sample_buy_rates() -> dict[str, Any]:
    """Three-route BUY quote."""
    return SAMPLE_BUY_RATES.copy()


@pytest.fixture
def sample_order_input() -> dict[str, Any]:
    """Limit order input made by the maker."""
    return SAMPLE_ORDER_INPUT.copy()
