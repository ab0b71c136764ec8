"""Adapter and contract discovery handler."""

from ..core.exceptions import APIError
from ..models.adapters import Adapters, ContractAddresses
from ..sdk.capabilities import AdaptersCapability
from .base import Handler
from .common import resolve_adapters, resolve_contracts


class AdaptersHandler(Handler):
    capability = AdaptersCapability

    async def get_adapters(self) -> Adapters:
        return await resolve_adapters(self.config)

    async def get_market_names(self) -> list[str]:
        """Names of the exchanges the API prices on the configured network."""
        data = await self.fetcher.fetch(self.api("/adapters/list", network=self.chain_id))
        if not isinstance(data, list) or not all(isinstance(name, str) for name in data):
            raise APIError("Malformed market names response", data=data)
        return data

    async def get_contracts(self) -> ContractAddresses:
        return await resolve_contracts(self.config)
