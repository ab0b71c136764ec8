"""Core interfaces for the ParaSwap SDK.

Handlers only ever talk to the outside world through these two seams: a
``Fetcher`` for the HTTP API and a ``ContractCaller`` for the chain.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..models.transaction import TransactionHandle


class Fetcher(ABC):
    """Interface for HTTP transports."""

    @abstractmethod
    async def fetch(
        self,
        url: str,
        method: str = "GET",
        data: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Perform one HTTP request and return the decoded JSON body.

        Args:
            url: Absolute request URL
            method: HTTP method
            data: JSON-serializable request body (optional)
            headers: Extra request headers (optional)

        Returns:
            Any: Decoded JSON response

        Raises:
            APIError: If the request fails or the API returns an error status
        """
        pass


class ContractCaller(ABC):
    """Interface for chain interactions bound to (at most) one account."""

    @property
    @abstractmethod
    def account(self) -> str | None:
        """Address of the bound account, None for a read-only caller."""
        pass

    @abstractmethod
    async def transact(
        self,
        address: str,
        abi: list[dict[str, Any]],
        method: str,
        args: list[Any] | tuple[Any, ...],
        overrides: dict[str, Any] | None = None,
    ) -> TransactionHandle:
        """Encode a contract call, sign it and broadcast it.

        Args:
            address: Contract address
            abi: Contract ABI definition
            method: Function name to call
            args: Function arguments
            overrides: Transaction field overrides (value, gas, gasPrice, nonce)

        Returns:
            TransactionHandle: Handle of the broadcast transaction

        Raises:
            ABIError: If the method is not in the ABI or arguments do not match
            SignerRequiredError: If no account is bound
            TransactionFailedError: If signing or broadcasting fails
        """
        pass

    @abstractmethod
    async def call(
        self,
        address: str,
        abi: list[dict[str, Any]],
        method: str,
        args: list[Any] | tuple[Any, ...] = (),
    ) -> Any:
        """Call a view or pure function and return the decoded value.

        Raises:
            ABIError: If the method is not in the ABI
            BlockchainConnectionError: If the call fails
        """
        pass

    @abstractmethod
    async def sign_typed_data(self, typed_data: dict[str, Any]) -> str:
        """Produce an EIP-712 signature with the bound account.

        Args:
            typed_data: Full typed-data message (types, primaryType, domain, message)

        Returns:
            str: 0x-prefixed 65-byte signature

        Raises:
            SignerRequiredError: If no account is bound
        """
        pass

    @abstractmethod
    async def wait_for_receipt(
        self,
        handle: TransactionHandle,
        timeout: int = 120,
    ) -> dict[str, Any]:
        """Wait for a transaction to be mined.

        Raises:
            TransactionFailedError: If the transaction reverted
            BlockchainConnectionError: If the receipt is not available within timeout
        """
        pass
