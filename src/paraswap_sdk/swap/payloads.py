"""Exchange payload encoders.

Each priced route carries an exchange-specific ``data`` dict. Before the
route can be passed to the router it is turned into the adapter ``payload``
bytes by the encoder registered for its exchange. New exchanges are added by
registering an encoder, not by widening ``data``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from eth_abi import encode
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..core.exceptions import BuildError, ConfigurationError
from ..models.adapters import DexConf
from ..models.common import Address, NumberAsString
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RouteContext:
    """Everything an encoder may need to encode one route."""

    exchange: str
    src_token: str
    dest_token: str
    adapter: DexConf
    data: dict[str, Any] | None = None


@dataclass(frozen=True)
class EncodedRoute:
    payload: str
    network_fee: int


class PayloadData(BaseModel):
    """Base for per-exchange ``data`` models."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    network_fee: NumberAsString | None = Field(None, alias="networkFee")


class PayloadEncoder(ABC):
    """Turns a route's ``data`` into adapter payload bytes.

    Subclasses set ``data_model`` and implement ``encode_data``.
    """

    data_model: type[PayloadData] = PayloadData

    def encode(self, context: RouteContext) -> EncodedRoute:
        try:
            data = self.data_model.model_validate(context.data or {})
        except ValidationError as e:
            raise BuildError(f"Invalid {context.exchange} route data: {e}") from e

        network_fee = data.network_fee if data.network_fee is not None else context.adapter.network_fee
        payload = self.encode_data(data, context)
        return EncodedRoute(payload="0x" + payload.hex(), network_fee=int(network_fee))

    @abstractmethod
    def encode_data(self, data: PayloadData, context: RouteContext) -> bytes:
        pass


class EmptyPayloadEncoder(PayloadEncoder):
    """For adapters that need no extra data."""

    def encode_data(self, data: PayloadData, context: RouteContext) -> bytes:
        return b""


class UniswapV2Data(PayloadData):
    path: list[Address] | None = None


class UniswapV2PayloadEncoder(PayloadEncoder):
    """``(address[] path)``; defaults to the direct ``[src, dest]`` pair."""

    data_model = UniswapV2Data

    def encode_data(self, data: UniswapV2Data, context: RouteContext) -> bytes:
        path = data.path or [context.src_token, context.dest_token]
        if len(path) < 2:
            raise BuildError(f"{context.exchange} path needs at least two tokens")
        return encode(["address[]"], [path])


class CurveData(PayloadData):
    i: int
    j: int
    deadline: int = 0
    underlying_swap: bool = Field(False, alias="underlyingSwap")


class CurvePayloadEncoder(PayloadEncoder):
    """``(int128 i, int128 j, uint256 deadline, bool underlyingSwap)``."""

    data_model = CurveData

    def encode_data(self, data: CurveData, context: RouteContext) -> bytes:
        return encode(
            ["int128", "int128", "uint256", "bool"],
            [data.i, data.j, data.deadline, data.underlying_swap],
        )


class BalancerData(PayloadData):
    pools: list[Address] = Field(..., min_length=1)


class BalancerPayloadEncoder(PayloadEncoder):
    """``(address[] pools)``."""

    data_model = BalancerData

    def encode_data(self, data: BalancerData, context: RouteContext) -> bytes:
        return encode(["address[]"], [data.pools])


class ExchangePayloadRegistry:
    """Exchange name (case-insensitive) -> payload encoder."""

    def __init__(self, encoders: dict[str, PayloadEncoder] | None = None):
        self._encoders: dict[str, PayloadEncoder] = {}
        for exchange, encoder in (encoders or {}).items():
            self.register(exchange, encoder)

    def register(self, exchange: str, encoder: PayloadEncoder, replace: bool = False) -> None:
        key = exchange.lower()
        if key in self._encoders and not replace:
            raise ConfigurationError(f"Payload encoder already registered for {exchange}")
        self._encoders[key] = encoder

    def get(self, exchange: str) -> PayloadEncoder | None:
        return self._encoders.get(exchange.lower())

    def exchanges(self) -> list[str]:
        return sorted(self._encoders)

    def copy(self) -> "ExchangePayloadRegistry":
        return ExchangePayloadRegistry(dict(self._encoders))

    def encode(self, context: RouteContext) -> EncodedRoute:
        """Encode one route.

        Exchanges without an encoder are accepted only when the route
        carries no data; their payload is empty.

        Raises:
            BuildError: If the route has data but no encoder is registered,
                or the data does not fit the encoder's model
        """
        encoder = self.get(context.exchange)
        if encoder is None:
            if context.data:
                raise BuildError(f"No payload encoder registered for {context.exchange}")
            encoder = _EMPTY
        encoded = encoder.encode(context)
        logger.debug(
            "Route payload encoded",
            exchange=context.exchange,
            payload_size=(len(encoded.payload) - 2) // 2,
            network_fee=encoded.network_fee,
        )
        return encoded


_EMPTY = EmptyPayloadEncoder()

_UNISWAP_V2 = UniswapV2PayloadEncoder()


def default_payload_registry() -> ExchangePayloadRegistry:
    """Registry with the encoders shipped by the SDK."""
    return ExchangePayloadRegistry(
        {
            "UniswapV2": _UNISWAP_V2,
            "SushiSwap": _UNISWAP_V2,
            "DefiSwap": _UNISWAP_V2,
            "LinkSwap": _UNISWAP_V2,
            "Curve": CurvePayloadEncoder(),
            "Balancer": BalancerPayloadEncoder(),
        }
    )
