"""Token approval handler for the swap router's spender."""

import asyncio

from ..models.token import Allowance
from ..models.transaction import TransactionHandle
from ..sdk.capabilities import ApproveTokenCapability
from .base import Handler
from .common import approve_erc20, read_allowance, resolve_contracts


class ApproveTokenHandler(Handler):
    """Allowances and approvals against the TokenTransferProxy."""

    capability = ApproveTokenCapability
    requires_contract_caller = True

    async def get_spender(self) -> str:
        """Address that must be approved before swapping (TokenTransferProxy)."""
        contracts = await resolve_contracts(self.config)
        return contracts.token_transfer_proxy

    async def get_allowance(self, account: str, token: str) -> Allowance:
        spender = await self.get_spender()
        return await read_allowance(self.config, account, spender, token)

    async def get_allowances(self, account: str, tokens: list[str]) -> list[Allowance]:
        """Allowances for several tokens, in the order given.

        Every read runs to completion; the first failure is then raised.
        """
        spender = await self.get_spender()
        results = await asyncio.gather(
            *(read_allowance(self.config, account, spender, token) for token in tokens),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return list(results)

    async def approve_token(self, amount: int | str, token: str) -> TransactionHandle:
        """Approve the spender to move ``amount`` of ``token``.

        Raises:
            BuildError: If ``token`` is native ETH
            SignerRequiredError: If no account is bound
        """
        spender = await self.get_spender()
        return await approve_erc20(self.config, spender, amount, token)
