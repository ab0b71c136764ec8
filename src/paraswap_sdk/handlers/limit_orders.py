"""Limit order handler: build, sign, post, list, fill and cancel RFQ orders."""

import time

from pydantic import TypeAdapter, ValidationError

from ..config.constants import RFQ_DOMAIN_NAME, RFQ_DOMAIN_VERSION, ZERO_ADDRESS, load_abi
from ..core.exceptions import APIError, BuildError, ConfigurationError, InvalidOrderError
from ..models.common import checksum_address
from ..models.limit_order import (
    LimitOrderDomain,
    LimitOrderFromApi,
    LimitOrderInput,
    OrderData,
    SignedLimitOrder,
    UnsignedLimitOrder,
    pack_nonce_and_meta,
)
from ..models.transaction import TransactionHandle
from ..sdk.capabilities import LimitOrdersCapability
from ..utils.logger import get_logger
from .base import Handler
from .common import approve_erc20, require_account, resolve_contracts

logger = get_logger(__name__)

_ORDER_LIST = TypeAdapter(list[LimitOrderFromApi])

OrderRef = str | LimitOrderFromApi | SignedLimitOrder


def ensure_not_expired(expiry: int, now: int | None = None) -> None:
    """Reject orders whose expiry has passed (``expiry == 0`` never expires).

    Raises:
        InvalidOrderError: If ``0 < expiry <= now``
    """
    now = int(time.time()) if now is None else now
    if 0 < expiry <= now:
        raise InvalidOrderError(f"Order expired at {expiry} (now {now})")


def _order_hash_bytes(order: OrderRef) -> bytes:
    order_hash = order if isinstance(order, str) else order.order_hash
    try:
        raw = bytes.fromhex(order_hash.removeprefix("0x"))
    except ValueError as e:
        raise BuildError(f"Invalid order hash: {order_hash}") from e
    if len(raw) != 32:
        raise BuildError(f"Order hash must be 32 bytes, got {len(raw)}")
    return raw


class LimitOrderHandlers(Handler):
    """Lifecycle of AugustusRFQ limit orders for the bound account.

    Orders are plain values: nothing is cached between calls, so a failed
    post can simply be retried with the same signed order.
    """

    capability = LimitOrdersCapability
    requires_contract_caller = True

    async def get_limit_order_contract(self) -> str:
        """AugustusRFQ address on the configured network.

        Raises:
            ConfigurationError: If the network has no limit order contract
        """
        contracts = await resolve_contracts(self.config)
        if contracts.augustus_rfq is None:
            raise ConfigurationError(f"No limit order contract on chain {self.chain_id}")
        return contracts.augustus_rfq

    async def build_limit_order(self, order_input: LimitOrderInput) -> UnsignedLimitOrder:
        """Build the EIP-712 domain and order struct for a maker intent.

        Raises:
            InvalidOrderError: If the order is already expired or the nonce is out of range
            SignerRequiredError: If no maker is given and no account is bound
        """
        ensure_not_expired(order_input.expiry)
        nonce_and_meta = pack_nonce_and_meta(order_input.nonce, order_input.taker_in_nonce)
        maker = order_input.maker or require_account(self.config, "build_limit_order")

        verifying_contract = await self.get_limit_order_contract()
        data = OrderData(
            nonce_and_meta=nonce_and_meta,
            expiry=order_input.expiry,
            maker_asset=order_input.maker_asset,
            taker_asset=order_input.taker_asset,
            maker=maker,
            taker=order_input.taker,
            maker_amount=order_input.maker_amount,
            taker_amount=order_input.taker_amount,
        )
        domain = LimitOrderDomain(
            name=RFQ_DOMAIN_NAME,
            version=RFQ_DOMAIN_VERSION,
            chain_id=self.chain_id,
            verifying_contract=verifying_contract,
        )
        return UnsignedLimitOrder(domain=domain, data=data)

    async def sign_limit_order(self, order: UnsignedLimitOrder) -> SignedLimitOrder:
        """Sign a built order with the bound account.

        Raises:
            InvalidOrderError: If the order's maker is not the bound account
            SignerRequiredError: If no account is bound
        """
        account = require_account(self.config, "sign_limit_order")
        if order.data.maker != checksum_address(account):
            raise InvalidOrderError(
                f"Order maker {order.data.maker} is not the bound account {account}"
            )

        signature = await self.contract_caller.sign_typed_data(order.to_typed_data())
        signed = SignedLimitOrder(
            domain=order.domain,
            data=order.data,
            signature=signature,
            order_hash=order.compute_hash(),
        )
        logger.debug("Limit order signed", order_hash=signed.order_hash, maker=account)
        return signed

    async def post_limit_order(self, order: SignedLimitOrder) -> LimitOrderFromApi:
        """Post a signed order to the order API.

        Raises:
            InvalidOrderError: If the order is expired (checked before posting)
            APIError: If the API rejects the order
        """
        ensure_not_expired(order.data.expiry)

        data = await self.fetcher.fetch(
            self.api(f"/ft/orders/{self.chain_id}/"),
            method="POST",
            data=order.to_api(),
        )
        payload = data.get("order", data) if isinstance(data, dict) else data
        try:
            posted = LimitOrderFromApi.model_validate(payload)
        except ValidationError as e:
            raise APIError(f"Malformed order response: {e}", data=data) from e

        logger.info("Limit order posted", order_hash=posted.order_hash, state=posted.state.value)
        return posted

    async def submit_limit_order(
        self, order: LimitOrderInput | UnsignedLimitOrder | SignedLimitOrder
    ) -> LimitOrderFromApi:
        """Build, sign and post in one call (steps already done are skipped)."""
        if isinstance(order, LimitOrderInput):
            order = await self.build_limit_order(order)
        if not isinstance(order, SignedLimitOrder):
            order = await self.sign_limit_order(order)
        return await self.post_limit_order(order)

    async def get_limit_orders(self, maker: str) -> list[LimitOrderFromApi]:
        maker = checksum_address(maker)
        data = await self.fetcher.fetch(self.api(f"/ft/orders/{self.chain_id}/maker/{maker}"))
        orders = data.get("orders") if isinstance(data, dict) else data
        try:
            return _ORDER_LIST.validate_python(orders)
        except ValidationError as e:
            raise APIError(f"Malformed orders response: {e}", data=data) from e

    async def cancel_limit_order(self, order: OrderRef) -> TransactionHandle:
        order_hash = _order_hash_bytes(order)
        contract = await self.get_limit_order_contract()
        logger.info("Cancelling limit order", order_hash="0x" + order_hash.hex())
        return await self.contract_caller.transact(
            contract, load_abi("AugustusRFQ"), "cancelOrder", [order_hash]
        )

    async def cancel_limit_order_bulk(self, orders: list[OrderRef]) -> TransactionHandle:
        if not orders:
            raise BuildError("No orders to cancel")
        order_hashes = [_order_hash_bytes(order) for order in orders]
        contract = await self.get_limit_order_contract()
        logger.info("Cancelling limit orders", count=len(order_hashes))
        return await self.contract_caller.transact(
            contract, load_abi("AugustusRFQ"), "cancelOrders", [order_hashes]
        )

    async def fill_direct_limit_order(self, order: OrderData, signature: str) -> TransactionHandle:
        """Fill an order directly on-chain as the bound account (taker).

        Raises:
            InvalidOrderError: If the order is expired or reserved for another taker
        """
        ensure_not_expired(order.expiry)
        taker = require_account(self.config, "fill_direct_limit_order")
        if order.taker != ZERO_ADDRESS and order.taker != checksum_address(taker):
            raise InvalidOrderError(f"Order is reserved for taker {order.taker}")

        try:
            signature_bytes = bytes.fromhex(signature.removeprefix("0x"))
        except ValueError as e:
            raise InvalidOrderError(f"Invalid signature: {signature}") from e

        contract = await self.get_limit_order_contract()
        return await self.contract_caller.transact(
            contract, load_abi("AugustusRFQ"), "fillOrder", [order.to_abi(), signature_bytes]
        )

    async def approve_maker_token_for_limit_order(
        self, amount: int | str, token: str
    ) -> TransactionHandle:
        """Allow AugustusRFQ to pull the maker asset when the order is filled."""
        return await approve_erc20(self.config, await self.get_limit_order_contract(), amount, token)

    async def approve_taker_token_for_limit_order(
        self, amount: int | str, token: str
    ) -> TransactionHandle:
        """Allow AugustusRFQ to pull the taker asset when filling."""
        return await approve_erc20(self.config, await self.get_limit_order_contract(), amount, token)
