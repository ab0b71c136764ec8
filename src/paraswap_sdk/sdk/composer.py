"""SDK composition: handler modules merged into one client object."""

from collections.abc import Callable, Iterable
from typing import Any

from eth_account import Account
from web3 import Web3

from ..config.settings import SDKSettings
from ..connectors.blockchain.web3_caller import Web3ContractCaller
from ..connectors.transport.requests_fetcher import RequestsFetcher
from ..core.exceptions import CompositionError
from ..handlers.adapters import AdaptersHandler
from ..handlers.approve import ApproveTokenHandler
from ..handlers.base import Handler
from ..handlers.limit_orders import LimitOrderHandlers
from ..handlers.rates import RatesHandler
from ..handlers.swap import SwapTxHandler
from ..handlers.tokens import TokensHandler
from ..utils.logger import configure_logging, get_logger
from .capabilities import capability_methods
from .config import SDKConfig

logger = get_logger(__name__)

ALL_HANDLERS: tuple[type[Handler], ...] = (
    RatesHandler,
    SwapTxHandler,
    ApproveTokenHandler,
    LimitOrderHandlers,
    TokensHandler,
    AdaptersHandler,
)

API_ONLY_HANDLERS: tuple[type[Handler], ...] = (
    RatesHandler,
    SwapTxHandler,
    TokensHandler,
    AdaptersHandler,
)


class ComposedSDK:
    """Client exposing exactly the methods of the handlers it was built from.

    Methods are plain attributes, so ``isinstance(sdk, RatesCapability)``
    holds whenever the rates handler was included. Instances are immutable.
    """

    def __init__(
        self,
        config: SDKConfig,
        methods: dict[str, Callable[..., Any]],
        capabilities: tuple[type, ...],
    ):
        object.__setattr__(self, "config", config)
        object.__setattr__(self, "_capabilities", capabilities)
        object.__setattr__(self, "_method_names", frozenset(methods))
        for name, method in methods.items():
            object.__setattr__(self, name, method)

    def __setattr__(self, name: str, value: Any):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def method_names(self) -> frozenset[str]:
        return self._method_names

    @property
    def capabilities(self) -> tuple[type, ...]:
        return self._capabilities

    def has_capability(self, protocol: type) -> bool:
        """Whether every method of ``protocol`` is available."""
        return capability_methods(protocol) <= self._method_names

    def __repr__(self) -> str:
        names = ", ".join(capability.__name__ for capability in self._capabilities)
        return f"<ComposedSDK chain_id={int(self.config.chain_id)} capabilities=[{names}]>"


class SDKBuilder:
    """Immutable builder; every ``with_handlers`` returns a new builder.

    Method name collisions are detected when a handler is added, from the
    names its class declares, before any handler is instantiated.
    """

    def __init__(self, config: SDKConfig, handlers: Iterable[type[Handler]] = ()):
        self._config = config
        self._handlers: tuple[type[Handler], ...] = ()
        self._owners: dict[str, type[Handler]] = {}
        if handlers:
            self._handlers, self._owners = self._add(handlers)

    @property
    def handlers(self) -> tuple[type[Handler], ...]:
        return self._handlers

    def with_handlers(self, *handlers: type[Handler]) -> "SDKBuilder":
        """Return a builder that also includes ``handlers``.

        Raises:
            CompositionError: If a handler is not a ``Handler`` subclass or
                provides a method name already provided by another handler
        """
        builder = SDKBuilder(self._config)
        builder._handlers, builder._owners = self._add(handlers)
        return builder

    def _add(
        self, handlers: Iterable[type[Handler]]
    ) -> tuple[tuple[type[Handler], ...], dict[str, type[Handler]]]:
        added = list(self._handlers)
        owners = dict(self._owners)
        for handler in handlers:
            if not (isinstance(handler, type) and issubclass(handler, Handler)):
                raise CompositionError(f"Not a handler module: {handler!r}")
            if not handler.provides:
                raise CompositionError(f"{handler.__name__} declares no capability")
            for name in sorted(handler.provides):
                if name in owners:
                    raise CompositionError(
                        f"Method {name!r} provided by both {owners[name].__name__} "
                        f"and {handler.__name__}"
                    )
            for name in handler.provides:
                owners[name] = handler
            added.append(handler)
        return tuple(added), owners

    def build(self) -> ComposedSDK:
        """Instantiate every handler with the shared config and merge their methods.

        Raises:
            CompositionError: If no handler was added, or a handler's
                requirements (e.g. a contract caller) are not met
        """
        if not self._handlers:
            raise CompositionError("No handler modules to compose")

        methods: dict[str, Callable[..., Any]] = {}
        for factory in self._handlers:
            methods.update(factory(self._config).methods())

        sdk = ComposedSDK(
            self._config,
            methods,
            tuple(factory.capability for factory in self._handlers),
        )
        logger.debug(
            "SDK composed",
            chain_id=int(self._config.chain_id),
            handlers=[factory.__name__ for factory in self._handlers],
        )
        return sdk


def construct_partial_sdk(config: SDKConfig, *handlers: type[Handler]) -> ComposedSDK:
    """Compose an SDK from the given handler modules."""
    return SDKBuilder(config).with_handlers(*handlers).build()


def construct_full_sdk(config: SDKConfig) -> ComposedSDK:
    """Compose an SDK with every handler module (requires a contract caller)."""
    return construct_partial_sdk(config, *ALL_HANDLERS)


def construct_sdk_from_settings(
    settings: SDKSettings | None = None,
    *handlers: type[Handler],
) -> ComposedSDK:
    """Build the default adapters from settings and compose an SDK.

    Uses a ``RequestsFetcher`` and, when ``rpc_url`` is set, a
    ``Web3ContractCaller`` bound to the configured private key (or read-only).
    Without explicit handlers, every handler the configuration supports is
    included.

    Args:
        settings: Settings (loaded from the environment when omitted)
        *handlers: Handler modules to compose

    Returns:
        ComposedSDK: Composed client
    """
    settings = settings or SDKSettings()
    configure_logging(log_level=settings.log_level, json_logs=settings.json_logs)

    fetcher = RequestsFetcher(timeout=settings.request_timeout, max_attempts=settings.max_attempts)

    contract_caller = None
    if settings.rpc_url:
        w3 = Web3(Web3.HTTPProvider(settings.rpc_url))
        account = Account.from_key(settings.private_key) if settings.private_key else None
        contract_caller = Web3ContractCaller(
            w3,
            account=account,
            dry_run=settings.dry_run,
            max_attempts=settings.max_attempts,
        )

    config = SDKConfig(
        chain_id=settings.chain_id,
        fetcher=fetcher,
        contract_caller=contract_caller,
        api_url=settings.api_url,
    )

    if not handlers:
        handlers = ALL_HANDLERS if contract_caller is not None else API_ONLY_HANDLERS

    logger.info(
        "Constructing SDK from settings",
        chain_id=settings.chain_id,
        api_url=settings.api_url,
        account=contract_caller.account if contract_caller else None,
        dry_run=settings.dry_run,
    )
    return construct_partial_sdk(config, *handlers)
