"""Tests for the tokens handler."""

import pytest

from paraswap_sdk.core.exceptions import APIError
from paraswap_sdk.handlers.tokens import TokensHandler
from tests.fixtures.rates import (
    DAI,
    ETH,
    HEX,
    SAMPLE_BALANCES_RESPONSE,
    SAMPLE_TOKENS_RESPONSE,
    USDC,
    USER,
)


class TestTokensHandler:
    """Test token list and balances."""

    async def test_get_tokens(self, api_config, mock_fetcher):
        """Tokens are listed for the configured network."""
        mock_fetcher.add_response("/tokens/1", SAMPLE_TOKENS_RESPONSE)

        tokens = await TokensHandler(api_config).get_tokens()

        assert [token.address for token in tokens] == [DAI, USDC, ETH]
        assert tokens[1].decimals == 6

    async def test_get_balances(self, api_config, mock_fetcher):
        """Balances are fetched per user."""
        mock_fetcher.add_response(f"/users/tokens/1/{USER}", SAMPLE_BALANCES_RESPONSE)

        balances = await TokensHandler(api_config).get_balances(USER.lower())

        assert balances[0].balance == "2500000000000000000"
        assert balances[1].allowance == "10000000"

    async def test_get_balance(self, api_config, mock_fetcher):
        """One token's balance is picked from the list."""
        mock_fetcher.add_response(f"/users/tokens/1/{USER}", SAMPLE_BALANCES_RESPONSE)

        token = await TokensHandler(api_config).get_balance(USER, DAI.lower())

        assert token.symbol == "DAI"
        assert token.balance == "2500000000000000000"

    async def test_get_balance_unknown_token(self, api_config, mock_fetcher):
        """A token the user does not hold is an API error."""
        mock_fetcher.add_response(f"/users/tokens/1/{USER}", SAMPLE_BALANCES_RESPONSE)

        with pytest.raises(APIError, match="No balance"):
            await TokensHandler(api_config).get_balance(USER, HEX)

    async def test_malformed_response(self, api_config, mock_fetcher):
        """Unparseable token lists are API errors."""
        mock_fetcher.add_response("/tokens/1", {"tokens": [{"symbol": "BAD"}]})

        with pytest.raises(APIError, match="Malformed"):
            await TokensHandler(api_config).get_tokens()
