"""Typed async client for the ParaSwap pricing API and Augustus contracts."""

from .config.constants import (
    DEFAULT_API_URL,
    ETHER_ADDRESS,
    UNLIMITED_ALLOWANCE,
    ZERO_ADDRESS,
)
from .connectors.blockchain.web3_caller import Web3ContractCaller
from .connectors.transport.httpx_fetcher import HttpxFetcher
from .connectors.transport.requests_fetcher import RequestsFetcher
from .core.enums import EXCHANGES, LimitOrderState, NetworkID, SwapSide
from .core.exceptions import (
    ABIError,
    APIError,
    BuildError,
    CompositionError,
    ConfigurationError,
    InvalidOrderError,
    ParaSwapSDKError,
    SignerRequiredError,
    TransactionFailedError,
)
from .core.interfaces import ContractCaller, Fetcher
from .handlers.adapters import AdaptersHandler
from .handlers.approve import ApproveTokenHandler
from .handlers.base import Handler
from .handlers.limit_orders import LimitOrderHandlers
from .handlers.rates import RatesHandler
from .handlers.swap import SwapTxHandler
from .handlers.tokens import TokensHandler
from .models.limit_order import LimitOrderInput
from .models.rates import OptimalRates, RateOptions
from .models.transaction import BuildOptions, TransactionData, TransactionHandle
from .sdk.capabilities import (
    AdaptersCapability,
    ApproveTokenCapability,
    FullSDK,
    LimitOrderSDK,
    LimitOrdersCapability,
    RatesCapability,
    SwapSDK,
    SwapTxCapability,
    TokensCapability,
)
from .sdk.composer import (
    ComposedSDK,
    SDKBuilder,
    construct_full_sdk,
    construct_partial_sdk,
    construct_sdk_from_settings,
)
from .sdk.config import SDKConfig

__version__ = "0.1.0"

__all__ = [
    "ABIError",
    "APIError",
    "AdaptersCapability",
    "AdaptersHandler",
    "ApproveTokenCapability",
    "ApproveTokenHandler",
    "BuildError",
    "BuildOptions",
    "ComposedSDK",
    "CompositionError",
    "ConfigurationError",
    "ContractCaller",
    "DEFAULT_API_URL",
    "ETHER_ADDRESS",
    "EXCHANGES",
    "Fetcher",
    "FullSDK",
    "Handler",
    "HttpxFetcher",
    "InvalidOrderError",
    "LimitOrderHandlers",
    "LimitOrderInput",
    "LimitOrderSDK",
    "LimitOrderState",
    "LimitOrdersCapability",
    "NetworkID",
    "OptimalRates",
    "ParaSwapSDKError",
    "RateOptions",
    "RatesCapability",
    "RatesHandler",
    "RequestsFetcher",
    "SDKBuilder",
    "SDKConfig",
    "SignerRequiredError",
    "SwapSDK",
    "SwapSide",
    "SwapTxCapability",
    "SwapTxHandler",
    "TokensCapability",
    "TokensHandler",
    "TransactionData",
    "TransactionFailedError",
    "TransactionHandle",
    "UNLIMITED_ALLOWANCE",
    "Web3ContractCaller",
    "ZERO_ADDRESS",
    "construct_full_sdk",
    "construct_partial_sdk",
    "construct_sdk_from_settings",
]
