"""Contract caller using Web3.py."""

import asyncio
import json
import threading
from typing import Any

from eth_account.messages import encode_typed_data
from eth_account.signers.local import LocalAccount
from tenacity import (
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from web3 import Web3
from web3.contract.contract import ContractFunction
from web3.exceptions import TimeExhausted, Web3Exception

from ...config.constants import TRANSACTION_TIMEOUT_SECONDS
from ...core.exceptions import (
    ABIError,
    BlockchainConnectionError,
    InsufficientBalanceError,
    InsufficientGasError,
    SignerRequiredError,
    TransactionFailedError,
)
from ...core.interfaces import ContractCaller
from ...models.transaction import TransactionHandle
from ...utils.logger import get_logger

logger = get_logger(__name__)

_TX_OVERRIDE_KEYS = {"value", "gas", "gasPrice", "maxFeePerGas", "maxPriorityFeePerGas", "nonce"}


def _to_hex(value: bytes | str) -> str:
    if isinstance(value, str):
        return value if value.startswith("0x") else "0x" + value
    return "0x" + bytes(value).hex()


def _stringify_uints(types: dict[str, list[dict[str, str]]], type_name: str, value: Any) -> Any:
    """Integer fields of a typed-data struct as decimal strings.

    JSON numbers above 2**53 lose precision in JavaScript signers.
    """
    if type_name.endswith("]"):
        item_type = type_name[: type_name.rindex("[")]
        return [_stringify_uints(types, item_type, item) for item in value]
    if type_name in types:
        fields = {field["name"]: field["type"] for field in types[type_name]}
        return {
            name: _stringify_uints(types, fields[name], item) if name in fields else item
            for name, item in value.items()
        }
    if type_name.startswith(("uint", "int")) and isinstance(value, int):
        return str(value)
    return value


class Web3ContractCaller(ContractCaller):
    """Contract caller bound to one account (or none, for read-only use).

    The account is either an ``eth_account`` ``LocalAccount`` (transactions
    and typed data are signed locally) or the address of an account managed
    by the node behind ``w3`` (``eth_sendTransaction`` /
    ``eth_signTypedData_v4``). Swapping accounts means building a new caller.
    """

    def __init__(
        self,
        w3: Web3,
        account: LocalAccount | str | None = None,
        dry_run: bool = False,
        max_attempts: int = 1,
    ):
        """Initialize contract caller.

        Args:
            w3: Web3 instance connected to the target chain
            account: Local account, node-managed address, or None for read-only
            dry_run: If True, transactions are logged but not sent to blockchain
            max_attempts: Attempts for read calls on connection errors (1 = no retries)

        Raises:
            ValueError: If the account address is invalid
        """
        self.w3 = w3
        self.dry_run = dry_run
        self.max_attempts = max_attempts

        self._local_account: LocalAccount | None = None
        self._address: str | None = None
        if isinstance(account, str):
            if not Web3.is_address(account):
                raise ValueError(f"Invalid account address: {account}")
            self._address = Web3.to_checksum_address(account)
        elif account is not None:
            self._local_account = account
            self._address = account.address

        # Serializes nonce allocation and submission for a local account
        self._nonce_lock = threading.Lock()

        # Counter for dry run transaction hashes
        self._dry_run_tx_counter = 0

    @property
    def account(self) -> str | None:
        return self._address

    async def transact(
        self,
        address: str,
        abi: list[dict[str, Any]],
        method: str,
        args: list[Any] | tuple[Any, ...],
        overrides: dict[str, Any] | None = None,
    ) -> TransactionHandle:
        if self._address is None:
            raise SignerRequiredError(f"Cannot send {method}: no account bound to contract caller")

        overrides = dict(overrides or {})
        unknown = set(overrides) - _TX_OVERRIDE_KEYS
        if unknown:
            raise ValueError(f"Unsupported transaction overrides: {sorted(unknown)}")

        function = self._contract_function(address, abi, method, args)
        try:
            data = function._encode_transaction_data()
        except (TypeError, ValueError, Web3Exception) as e:
            raise ABIError(f"Failed to encode {method}: {e}") from e

        return await asyncio.to_thread(
            self._send_transaction, Web3.to_checksum_address(address), data, overrides
        )

    async def call(
        self,
        address: str,
        abi: list[dict[str, Any]],
        method: str,
        args: list[Any] | tuple[Any, ...] = (),
    ) -> Any:
        function = self._contract_function(address, abi, method, args)

        @retry(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            retry=retry_if_exception_type((ConnectionError, TimeoutError)),
        )
        def _call_with_retry():
            return function.call()

        try:
            return await asyncio.to_thread(_call_with_retry)
        except RetryError as e:
            raise BlockchainConnectionError(
                f"Failed to call {method}: {e.last_attempt.exception()}"
            ) from e
        except Exception as e:
            raise BlockchainConnectionError(f"Failed to call {method}: {e}") from e

    async def sign_typed_data(self, typed_data: dict[str, Any]) -> str:
        if self._address is None:
            raise SignerRequiredError("Cannot sign typed data: no account bound to contract caller")

        if self._local_account is not None:
            try:
                signable = encode_typed_data(full_message=typed_data)
            except Exception as e:
                raise ABIError(f"Invalid typed data: {e}") from e
            signed = self._local_account.sign_message(signable)
            return _to_hex(signed.signature)

        try:
            message = _stringify_uints(
                typed_data["types"], typed_data["primaryType"], typed_data["message"]
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ABIError(f"Invalid typed data: {e}") from e

        response = await asyncio.to_thread(
            self.w3.provider.make_request,
            "eth_signTypedData_v4",
            [self._address, json.dumps({**typed_data, "message": message})],
        )
        if "error" in response:
            raise TransactionFailedError(f"Typed data signing rejected: {response['error']}")
        return _to_hex(response["result"])

    async def wait_for_receipt(
        self,
        handle: TransactionHandle,
        timeout: int = TRANSACTION_TIMEOUT_SECONDS,
    ) -> dict[str, Any]:
        # DRY RUN MODE: Return fake receipt immediately
        if self.dry_run and handle.hash.startswith("0xdryrun"):
            logger.debug("[DRY RUN] Returning fake transaction receipt", tx_hash=handle.hash)
            return {
                "transactionHash": handle.hash,
                "status": 1,
                "blockNumber": 0,
                "logs": [],
                "gasUsed": 0,
            }

        try:
            receipt = await asyncio.to_thread(
                self.w3.eth.wait_for_transaction_receipt, handle.hash, timeout
            )
        except TimeExhausted as e:
            raise BlockchainConnectionError(
                f"Transaction {handle.hash} not confirmed within {timeout}s"
            ) from e
        except Web3Exception as e:
            raise BlockchainConnectionError(f"Failed to get transaction receipt: {e}") from e

        receipt = dict(receipt)
        if receipt.get("status") == 0:
            raise TransactionFailedError(f"Transaction {handle.hash} failed (status=0)")
        return receipt

    def _contract_function(
        self,
        address: str,
        abi: list[dict[str, Any]],
        method: str,
        args: list[Any] | tuple[Any, ...],
    ) -> ContractFunction:
        """Resolve ``method`` against ``abi`` and bind ``args``.

        Raises:
            ABIError: If the function is missing, arity does not match, or
                the arguments do not fit the function's input types
        """
        if not Web3.is_address(address):
            raise ValueError(f"Invalid contract address: {address}")

        candidates = [
            item
            for item in abi
            if item.get("type", "function") == "function" and item.get("name") == method
        ]
        if not candidates:
            raise ABIError(f"Function {method} not found in ABI")
        if not any(len(item.get("inputs", [])) == len(args) for item in candidates):
            arities = sorted({len(item.get("inputs", [])) for item in candidates})
            raise ABIError(
                f"Function {method} takes {arities} argument(s), got {len(args)}"
            )

        contract = self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)
        try:
            return getattr(contract.functions, method)(*args)
        except (TypeError, ValueError, Web3Exception) as e:
            raise ABIError(f"Arguments do not match {method}: {e}") from e

    def _send_transaction(
        self,
        to: str,
        data: str,
        overrides: dict[str, Any],
    ) -> TransactionHandle:
        """Build, sign and send a transaction (blocking)."""
        try:
            with self._nonce_lock:
                tx: dict[str, Any] = {
                    "from": self._address,
                    "to": to,
                    "value": int(overrides.get("value", 0)),
                    "data": data,
                    "chainId": self.w3.eth.chain_id,
                }
                for key in ("gasPrice", "maxFeePerGas", "maxPriorityFeePerGas"):
                    if key in overrides:
                        tx[key] = int(overrides[key])

                if self._local_account is not None:
                    tx["nonce"] = overrides.get(
                        "nonce", self.w3.eth.get_transaction_count(self._address, "pending")
                    )
                    if "gasPrice" not in tx and "maxFeePerGas" not in tx:
                        tx["gasPrice"] = self.w3.eth.gas_price
                elif "nonce" in overrides:
                    tx["nonce"] = overrides["nonce"]

                if "gas" in overrides:
                    tx["gas"] = int(overrides["gas"])
                else:
                    tx["gas"] = self._estimate_gas(tx)

                # DRY RUN MODE: Log transaction instead of sending it
                if self.dry_run:
                    self._dry_run_tx_counter += 1
                    fake_tx_hash = f"0xdryrun{self._dry_run_tx_counter:058x}"
                    logger.info(
                        "[DRY RUN] Transaction simulated (not sent to blockchain)",
                        to=to,
                        value=tx["value"],
                        data=data[:66] + "..." if len(data) > 66 else data,
                        gas=tx["gas"],
                        fake_tx_hash=fake_tx_hash,
                    )
                    return TransactionHandle(
                        hash=fake_tx_hash,
                        sender=self._address,
                        to=to,
                        data=data,
                        value=tx["value"],
                        nonce=tx.get("nonce"),
                    )

                if self._local_account is not None:
                    signed_tx = self._local_account.sign_transaction(tx)
                    tx_hash = self.w3.eth.send_raw_transaction(signed_tx.raw_transaction)
                else:
                    tx_hash = self.w3.eth.send_transaction(tx)

        except (ConnectionError, TimeoutError) as e:
            raise BlockchainConnectionError(f"Failed to send transaction: {e}") from e
        except (InsufficientBalanceError, InsufficientGasError):
            raise
        except (ValueError, Web3Exception) as e:
            raise TransactionFailedError(f"Transaction failed: {e}") from e

        handle = TransactionHandle(
            hash=_to_hex(tx_hash),
            sender=self._address,
            to=to,
            data=data,
            value=tx["value"],
            nonce=tx.get("nonce"),
        )
        logger.info("Transaction sent", tx_hash=handle.hash, to=to, sender=self._address)
        return handle

    def _estimate_gas(self, tx: dict[str, Any]) -> int:
        try:
            return self.w3.eth.estimate_gas(tx)
        except Web3Exception as e:
            error_msg = str(e).lower()
            if any(keyword in error_msg for keyword in ("insufficient", "balance", "funds")):
                raise InsufficientBalanceError(f"Insufficient balance: {e}") from e
            raise InsufficientGasError(f"Failed to estimate gas: {e}") from e
