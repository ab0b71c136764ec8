"""Static routing configuration: exchange adapters and core contracts."""

from typing import Any

from pydantic import Field

from .common import Address, APIModel, NumberAsString


class DexConf(APIModel):
    """On-chain adapter for one exchange.

    Attributes:
        exchange: Adapter contract the router delegates to
        target_exchange: Exchange router/pool the adapter talks to (if any)
        network_fee: Fee forwarded with every route through this adapter
    """

    exchange: Address
    target_exchange: Address | None = None
    network_fee: NumberAsString = "0"


class Adapters(APIModel):
    """Exchange name -> adapter mapping for one network, plus the router."""

    augustus: DexConf
    dexes: dict[str, DexConf] = Field(default_factory=dict)

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "Adapters":
        """Build from the flat ``{"augustus": ..., "<dex>": ...}`` API shape."""
        if "augustus" not in payload:
            raise ValueError("Adapters payload has no 'augustus' entry")
        dexes = {name.lower(): conf for name, conf in payload.items() if name != "augustus"}
        return cls(augustus=payload["augustus"], dexes=dexes)

    def get(self, exchange: str) -> DexConf | None:
        """Look up an exchange adapter (case-insensitive)."""
        return self.dexes.get(exchange.lower())

    @property
    def router(self) -> str:
        return self.augustus.exchange


class ContractAddresses(APIModel):
    """Core protocol contracts for one network."""

    augustus_swapper: Address = Field(..., alias="AugustusSwapper")
    token_transfer_proxy: Address = Field(..., alias="TokenTransferProxy")
    augustus_rfq: Address | None = Field(None, alias="AugustusRFQ")
