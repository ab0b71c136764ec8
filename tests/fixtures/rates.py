"""Sample pricing API payloads for testing."""

from web3 import Web3

from paraswap_sdk.config.constants import ETHER_ADDRESS

DAI = "0x6B175474E89094C44Da98b954EedeAC495271d0F"
HEX = Web3.to_checksum_address("0x2b591e99afe9f32eaa6214f7b7629768c40eeb39")
USDC = Web3.to_checksum_address("0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48")
ETH = Web3.to_checksum_address(ETHER_ADDRESS)

USER = Web3.to_checksum_address("0x1234567890123456789012345678901234567890")

AUGUSTUS = Web3.to_checksum_address("0x1bd435f3c054b6e901b7b108a0ab7617c808677b")
TOKEN_TRANSFER_PROXY = Web3.to_checksum_address("0xb70bc06d2c9bf03b3373799606dc7d39346c06b3")
AUGUSTUS_RFQ = Web3.to_checksum_address("0xe92b586627cca7a83dc919cc7127196d70f55a06")

UNISWAP_V2_ADAPTER = Web3.to_checksum_address("0x1111111111111111111111111111111111111111")
UNISWAP_V2_ROUTER = Web3.to_checksum_address("0x7a250d5630b4cf539739df2c5dacb4c659f2488d")
CURVE_ADAPTER = Web3.to_checksum_address("0x2222222222222222222222222222222222222222")
CURVE_POOL = Web3.to_checksum_address("0xa5407eae9ba41422680e2e00537571bcc53efbfd")
KYBER_ADAPTER = Web3.to_checksum_address("0x3333333333333333333333333333333333333333")

# GET /adapters/?network=1
SAMPLE_ADAPTERS = {
    "augustus": {"exchange": AUGUSTUS},
    "UniswapV2": {
        "exchange": UNISWAP_V2_ADAPTER,
        "targetExchange": UNISWAP_V2_ROUTER,
        "networkFee": "0",
    },
    "Curve": {
        "exchange": CURVE_ADAPTER,
        "targetExchange": CURVE_POOL,
        "networkFee": "0",
    },
    "Kyber": {
        "exchange": KYBER_ADAPTER,
        "networkFee": "1000",
    },
}

# GET /adapters/contracts?network=1
SAMPLE_CONTRACTS = {
    "AugustusSwapper": AUGUSTUS,
    "TokenTransferProxy": TOKEN_TRANSFER_PROXY,
    "AugustusRFQ": AUGUSTUS_RFQ,
}

# Single UniswapV2 route, 1 DAI -> 8 HEX
SAMPLE_SELL_RATES = {
    "srcAmount": "1000000000000000000",
    "destAmount": "8000000000000000000",
    "side": "SELL",
    "bestRoute": [
        {
            "exchange": "UniswapV2",
            "percent": "100",
            "srcAmount": "1000000000000000000",
            "destAmount": "8000000000000000000",
        }
    ],
    "multiPath": False,
    "others": [],
    "details": {"tokenFrom": DAI, "tokenTo": HEX},
}

# Split sell across UniswapV2 and Curve
SAMPLE_SPLIT_SELL_RATES = {
    "srcAmount": "1000000000000000000",
    "destAmount": "998000000",
    "side": "SELL",
    "bestRoute": [
        {
            "exchange": "UniswapV2",
            "percent": "62.5",
            "srcAmount": "625000000000000000",
            "destAmount": "624000000",
        },
        {
            "exchange": "Curve",
            "percent": "37.5",
            "srcAmount": "375000000000000000",
            "destAmount": "374000000",
            "data": {"i": 0, "j": 1, "deadline": 1700000000, "underlyingSwap": False},
        },
    ],
    "details": {"tokenFrom": DAI, "tokenTo": USDC},
}

# Buy 3 routes with amounts that do not split evenly
SAMPLE_BUY_RATES = {
    "srcAmount": "1000000000000000001",
    "destAmount": "3000000007",
    "side": "BUY",
    "bestRoute": [
        {
            "exchange": "UniswapV2",
            "percent": "33.33",
            "srcAmount": "333300000000000000",
            "destAmount": "999900002",
        },
        {
            "exchange": "UniswapV2",
            "percent": "33.33",
            "srcAmount": "333300000000000000",
            "destAmount": "999900002",
        },
        {
            "exchange": "Kyber",
            "percent": "33.34",
            "srcAmount": "333400000000000001",
            "destAmount": "1000200003",
        },
    ],
    "details": {"tokenFrom": ETH, "tokenTo": DAI},
}

# DAI -> USDC -> HEX through a connector token
SAMPLE_MULTI_ROUTE_RATES = {
    "srcAmount": "1000000000000000000",
    "destAmount": "5000000000000000000",
    "side": "SELL",
    "bestRoute": [
        {
            "exchange": "MultiPath",
            "percent": "100",
            "srcAmount": "1000000000000000000",
            "destAmount": "5000000000000000000",
        }
    ],
    "multiRoute": [
        [
            {
                "exchange": "UniswapV2",
                "percent": "100",
                "srcAmount": "1000000000000000000",
                "destAmount": "999000000",
            }
        ],
        [
            {
                "exchange": "UniswapV2",
                "percent": "100",
                "srcAmount": "999000000",
                "destAmount": "5000000000000000000",
            }
        ],
    ],
    "details": {"tokenFrom": DAI, "tokenTo": HEX, "connector": USDC},
}

# GET /prices/ response envelope
SAMPLE_PRICES_RESPONSE = {"priceRoute": {k: v for k, v in SAMPLE_SELL_RATES.items() if k != "details"}}

# GET /tokens/1
SAMPLE_TOKENS_RESPONSE = {
    "tokens": [
        {"symbol": "DAI", "address": DAI, "decimals": 18, "img": "https://img/dai.png", "network": 1},
        {"symbol": "USDC", "address": USDC, "decimals": 6, "network": 1},
        {"symbol": "ETH", "address": ETHER_ADDRESS, "decimals": 18, "network": 1},
    ]
}

# GET /users/tokens/1/<user>
SAMPLE_BALANCES_RESPONSE = {
    "tokens": [
        {
            "symbol": "DAI",
            "address": DAI,
            "decimals": 18,
            "balance": "2500000000000000000",
            "allowance": "0",
        },
        {
            "symbol": "USDC",
            "address": USDC,
            "decimals": 6,
            "balance": "10000000",
            "allowance": "10000000",
        },
    ]
}
