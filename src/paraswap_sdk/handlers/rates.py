"""Rates handler: priced quotes from the pricing API."""

from pydantic import ValidationError

from ..core.enums import SwapSide
from ..core.exceptions import APIError, BuildError
from ..models.common import checksum_address, parse_amount
from ..models.rates import OptimalRates, RateDetails, RateOptions
from ..sdk.capabilities import RatesCapability
from ..utils.logger import get_logger
from .base import Handler

logger = get_logger(__name__)


class RatesHandler(Handler):
    capability = RatesCapability

    async def get_rate(
        self,
        src_token: str,
        dest_token: str,
        amount: int | str,
        side: SwapSide = SwapSide.SELL,
        options: RateOptions | None = None,
        *,
        src_decimals: int | None = None,
        dest_decimals: int | None = None,
    ) -> OptimalRates:
        """Fetch the best route for swapping ``src_token`` into ``dest_token``.

        Args:
            src_token: Token sold (``ETHER_ADDRESS`` for native ETH)
            dest_token: Token bought
            amount: Source amount for SELL, destination amount for BUY (base units)
            side: SELL or BUY
            options: DEX include/exclude filters
            src_decimals: Source token decimals, for tokens unknown to the API
            dest_decimals: Destination token decimals, for tokens unknown to the API

        Returns:
            OptimalRates: The quote, with ``details`` always populated

        Raises:
            BuildError: If an address, the amount or the side is invalid
            APIError: If the API rejects the request or finds no route
        """
        src_token = checksum_address(src_token)
        dest_token = checksum_address(dest_token)
        amount = parse_amount(amount)
        if amount == 0:
            raise BuildError("Amount must be positive")
        try:
            side = SwapSide(side)
        except ValueError as e:
            raise BuildError(f"Invalid swap side: {side!r}") from e

        params = {
            "from": src_token,
            "to": dest_token,
            "amount": str(amount),
            "side": side.value,
            "network": self.chain_id,
            "srcDecimals": src_decimals,
            "destDecimals": dest_decimals,
        }
        if options is not None:
            params.update(options.to_query())

        data = await self.fetcher.fetch(self.api("/prices/", **params))

        route = data.get("priceRoute", data) if isinstance(data, dict) else None
        if not route or not route.get("bestRoute"):
            logger.info(
                "No route found",
                src_token=src_token,
                dest_token=dest_token,
                amount=str(amount),
                side=side.value,
            )
            raise APIError("No route found for the requested pair and amount", data=data)

        try:
            rates = OptimalRates.model_validate(route)
        except ValidationError as e:
            raise APIError(f"Malformed rates response: {e}", data=data) from e

        if rates.details is None:
            rates = rates.model_copy(
                update={
                    "details": RateDetails(
                        token_from=src_token,
                        token_to=dest_token,
                        src_amount=rates.src_amount,
                    )
                }
            )

        logger.debug(
            "Rate fetched",
            side=side.value,
            src_amount=rates.src_amount,
            dest_amount=rates.dest_amount,
            routes=len(rates.best_route),
        )
        return rates
