"""Token list and balance handler."""

from pydantic import TypeAdapter, ValidationError

from ..core.exceptions import APIError
from ..models.common import checksum_address
from ..models.token import Token
from ..sdk.capabilities import TokensCapability
from .base import Handler

_TOKEN_LIST = TypeAdapter(list[Token])


class TokensHandler(Handler):
    capability = TokensCapability

    async def get_tokens(self) -> list[Token]:
        """Tokens the API can route on the configured network."""
        data = await self.fetcher.fetch(self.api(f"/tokens/{self.chain_id}"))
        return self._parse_tokens(data)

    async def get_balances(self, user_address: str) -> list[Token]:
        """Tokens held by ``user_address`` with balances and allowances."""
        user_address = checksum_address(user_address)
        data = await self.fetcher.fetch(self.api(f"/users/tokens/{self.chain_id}/{user_address}"))
        return self._parse_tokens(data)

    async def get_balance(self, user_address: str, token: str) -> Token:
        """Balance of one token held by ``user_address``.

        Raises:
            APIError: If the API reports no balance for the token
        """
        token = checksum_address(token)
        for entry in await self.get_balances(user_address):
            if entry.address == token:
                return entry
        raise APIError(f"No balance reported for token {token}")

    @staticmethod
    def _parse_tokens(data) -> list[Token]:
        tokens = data.get("tokens") if isinstance(data, dict) else data
        try:
            return _TOKEN_LIST.validate_python(tokens)
        except ValidationError as e:
            raise APIError(f"Malformed tokens response: {e}", data=data) from e
