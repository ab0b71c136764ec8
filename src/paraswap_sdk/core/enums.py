"""Core enumerations for the ParaSwap SDK."""

from enum import Enum, IntEnum


class SwapSide(str, Enum):
    """Swap side (sell exact source amount or buy exact destination amount)."""

    SELL = "SELL"
    BUY = "BUY"


class NetworkID(IntEnum):
    """Supported chain IDs."""

    MAINNET = 1
    ROPSTEN = 3
    RINKEBY = 4
    KOVAN = 42


class LimitOrderState(str, Enum):
    """Limit order state as reported by the order API."""

    PENDING = "PENDING"  # Posted and fillable
    PARTIALLY_FILLED = "PARTIALLY_FILLED"
    FULFILLED = "FULFILLED"  # Terminal
    CANCELLED = "CANCELLED"  # Terminal
    EXPIRED = "EXPIRED"  # Terminal


class EXCHANGES(str, Enum):
    """Exchange identifiers used by the pricing API."""

    UNISWAP = "Uniswap"
    KYBER = "Kyber"
    BANCOR = "Bancor"
    OASIS = "Oasis"
    COMPOUND = "Compound"
    BZX = "Fulcrum"
    ZEROX = "0x"
    MakerDAO = "MakerDAO"
    CHAI = "Chai"
    PARASWAPPOOL = "ParaSwapPool"
    AAVE = "Aave"
    MULTIPATH = "MultiPath"
    CURVE = "Curve"
    BDAI = "BDai"
    IDLE = "idle"
    WETH = "Weth"
    BETH = "Beth"
    UNISWAPV2 = "UniswapV2"
    BALANCER = "Balancer"
    ZEROX_RFQT = "0xApi"
    PARASWAPPOOL2 = "ParaSwapPool2"
    SUSHISWAP = "SushiSwap"
    SYNTHETIX = "Synthetix"
    SYNTHETIX_DEPOT = "SynthetixDepot"
