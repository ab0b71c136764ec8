"""Swap transaction handler: turns a quote into router calldata."""

from ..core.exceptions import BuildError
from ..models.common import checksum_address
from ..models.rates import OptimalRates
from ..models.transaction import (
    BuildOptions,
    TransactionBuyParams,
    TransactionData,
    TransactionSellParams,
)
from ..sdk.capabilities import SwapTxCapability
from ..swap.builder import build_swap_params, encode_swap_calldata
from ..utils.logger import get_logger
from .base import Handler
from .common import resolve_adapters

logger = get_logger(__name__)


class SwapTxHandler(Handler):
    capability = SwapTxCapability

    async def build_tx(
        self,
        optimal_rates: OptimalRates,
        slippage: int,
        user_address: str | None = None,
        options: BuildOptions | None = None,
        *,
        referrer: str = "",
        receiver: str | None = None,
        donation_percentage: int = 0,
    ) -> TransactionData | TransactionSellParams | TransactionBuyParams:
        """Build the router transaction for a quote.

        Only the adapter map may be fetched (when not configured); the
        result is otherwise a pure function of the arguments.

        Args:
            optimal_rates: Quote returned by ``get_rate``
            slippage: Tolerated slippage in basis points (0..10000)
            user_address: Sender (defaults to the contract caller's account)
            options: ``only_params`` to return the unencoded parameters,
                ``gas_price`` / ``gas`` to set on the transaction
            referrer: Referrer tag recorded by the router
            receiver: Beneficiary of the output (defaults to the sender)
            donation_percentage: Share of positive slippage donated, in basis points

        Returns:
            TransactionData, or the sell/buy parameters with ``only_params``

        Raises:
            BuildError: If the quote cannot be turned into a valid transaction
        """
        options = options or BuildOptions()

        if user_address is None and self.config.contract_caller is not None:
            user_address = self.config.contract_caller.account
        if user_address is None and not options.only_params:
            raise BuildError("user_address is required when no account is bound")

        adapters = await resolve_adapters(self.config)
        params = build_swap_params(
            optimal_rates,
            slippage,
            adapters,
            self.config.payload_registry,
            referrer=referrer,
            receiver=checksum_address(receiver) if receiver else None,
            donation_percentage=donation_percentage,
        )

        logger.debug(
            "Swap parameters built",
            side=optimal_rates.side.value,
            from_amount=params.from_amount,
            to_amount=params.to_amount,
            value=params.value,
            slippage=slippage,
        )

        if options.only_params:
            return params

        return TransactionData(
            from_address=user_address,
            to=adapters.router,
            data=encode_swap_calldata(params),
            chain_id=self.chain_id,
            value=params.value,
            gas_price=options.gas_price,
            gas=options.gas,
        )
