"""Core exceptions for the ParaSwap SDK."""

from typing import Any


class ParaSwapSDKError(Exception):
    """Base exception for all SDK errors."""

    pass


class APIError(ParaSwapSDKError):
    """Raised when the pricing/order API rejects or fails a request.

    Attributes:
        message: Error message as reported by the API (or the transport)
        status: HTTP status code, None when no response was received
        data: Decoded response body, if any
    """

    def __init__(self, message: str, status: int | None = None, data: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.data = data

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"[{self.status}] {self.message}"


class BuildError(ParaSwapSDKError):
    """Raised when a transaction or order cannot be built from the given input."""

    pass


class InvalidOrderError(BuildError):
    """Raised when limit order parameters are invalid (e.g. already expired)."""

    pass


class ABIError(ParaSwapSDKError):
    """Raised when a method is missing from a contract ABI or cannot be encoded."""

    pass


class CompositionError(ParaSwapSDKError):
    """Raised when handler modules cannot be composed into one SDK."""

    pass


class ConfigurationError(ParaSwapSDKError):
    """Raised when configuration is invalid."""

    pass


class SignerRequiredError(ConfigurationError):
    """Raised when a write or signing operation is attempted without a bound account."""

    pass


class BlockchainConnectionError(ParaSwapSDKError):
    """Raised when blockchain connection fails."""

    pass


class TransactionFailedError(ParaSwapSDKError):
    """Raised when a transaction fails."""

    pass


class InsufficientGasError(ParaSwapSDKError):
    """Raised when gas estimation fails."""

    pass


class InsufficientBalanceError(ParaSwapSDKError):
    """Raised when there's insufficient balance for an operation."""

    pass
