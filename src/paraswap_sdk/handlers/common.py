"""Plain helpers shared by handler modules.

Handlers never call each other; anything two of them need lives here.
"""

from typing import Any
from urllib.parse import urlencode

from ..config.constants import UNLIMITED_ALLOWANCE, is_ether, load_abi
from ..core.exceptions import APIError, BuildError, SignerRequiredError
from ..models.adapters import Adapters, ContractAddresses
from ..models.common import checksum_address, parse_amount
from ..models.token import Allowance
from ..models.transaction import TransactionHandle
from ..sdk.config import SDKConfig
from ..utils.logger import get_logger

logger = get_logger(__name__)


def api_url(config: SDKConfig, path: str, **params: Any) -> str:
    """Absolute API URL for ``path`` with the non-None ``params`` as query."""
    url = f"{config.api_url}/{path.lstrip('/')}"
    query = {key: value for key, value in params.items() if value is not None}
    if query:
        url = f"{url}?{urlencode(query)}"
    return url


async def resolve_adapters(config: SDKConfig) -> Adapters:
    """Adapters from the config, or from the API for the configured network.

    Raises:
        APIError: If the request fails or the response is malformed
    """
    if config.adapters is not None:
        return config.adapters

    payload = await config.fetcher.fetch(api_url(config, "/adapters/", network=int(config.chain_id)))
    try:
        return Adapters.from_api(payload)
    except (TypeError, ValueError) as e:
        raise APIError(f"Malformed adapters response: {e}", data=payload) from e


async def resolve_contracts(config: SDKConfig) -> ContractAddresses:
    """Core contract addresses from the config, or from the API.

    Raises:
        APIError: If the request fails or the response is malformed
    """
    if config.contracts is not None:
        return config.contracts

    payload = await config.fetcher.fetch(
        api_url(config, "/adapters/contracts", network=int(config.chain_id))
    )
    try:
        return ContractAddresses.model_validate(payload)
    except ValueError as e:
        raise APIError(f"Malformed contracts response: {e}", data=payload) from e


def require_account(config: SDKConfig, operation: str) -> str:
    """Address of the account bound to the contract caller.

    Raises:
        SignerRequiredError: If no account is bound
    """
    caller = config.contract_caller
    account = caller.account if caller is not None else None
    if account is None:
        raise SignerRequiredError(f"{operation} requires an account bound to the contract caller")
    return account


async def approve_erc20(config: SDKConfig, spender: str, amount: Any, token: str) -> TransactionHandle:
    """Approve ``spender`` to move ``amount`` of ``token`` from the bound account.

    Raises:
        BuildError: If the token is native ETH
    """
    token = checksum_address(token)
    if is_ether(token):
        raise BuildError("Native ETH needs no approval")
    amount = parse_amount(amount)
    require_account(config, "approve")

    logger.info("Approving token", token=token, spender=spender, amount=str(amount))
    return await config.contract_caller.transact(
        token, load_abi("ERC20"), "approve", [spender, amount]
    )


async def read_allowance(config: SDKConfig, owner: str, spender: str, token: str) -> Allowance:
    """Allowance of ``spender`` over ``owner``'s ``token``; unlimited for native ETH."""
    token = checksum_address(token)
    if is_ether(token):
        return Allowance(token_address=token, allowance=UNLIMITED_ALLOWANCE)

    value = await config.contract_caller.call(
        token, load_abi("ERC20"), "allowance", [checksum_address(owner), spender]
    )
    return Allowance(token_address=token, allowance=int(value))
