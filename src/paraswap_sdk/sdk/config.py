"""Configuration shared by every handler of one composed SDK."""

from dataclasses import dataclass, field

from ..config.constants import DEFAULT_API_URL
from ..core.enums import NetworkID
from ..core.exceptions import ConfigurationError
from ..core.interfaces import ContractCaller, Fetcher
from ..models.adapters import Adapters, ContractAddresses
from ..swap.payloads import ExchangePayloadRegistry, default_payload_registry


@dataclass(frozen=True)
class SDKConfig:
    """Base config closed over by every handler.

    Attributes:
        chain_id: Network the SDK operates on (known ids become ``NetworkID``)
        fetcher: HTTP transport, may be shared between SDK instances
        contract_caller: Chain adapter bound to one account (None for API-only use)
        api_url: Pricing/order API base URL
        adapters: Static exchange adapter map (fetched from the API when None)
        contracts: Static core contract addresses (fetched from the API when None)
        payload_registry: Exchange payload encoders used by ``build_tx``
    """

    chain_id: int
    fetcher: Fetcher
    contract_caller: ContractCaller | None = None
    api_url: str = DEFAULT_API_URL
    adapters: Adapters | None = None
    contracts: ContractAddresses | None = None
    payload_registry: ExchangePayloadRegistry = field(default_factory=default_payload_registry)

    def __post_init__(self):
        if isinstance(self.chain_id, bool) or not isinstance(self.chain_id, int) or self.chain_id <= 0:
            raise ConfigurationError(f"chain_id must be a positive integer, got {self.chain_id!r}")
        if self.chain_id in {network.value for network in NetworkID}:
            object.__setattr__(self, "chain_id", NetworkID(self.chain_id))
        object.__setattr__(self, "api_url", self.api_url.rstrip("/"))
