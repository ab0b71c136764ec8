"""Base class for handler modules."""

from collections.abc import Callable
from typing import Any, ClassVar

from ..core.exceptions import CompositionError
from ..core.interfaces import ContractCaller, Fetcher
from ..sdk.capabilities import capability_methods
from ..sdk.config import SDKConfig
from .common import api_url


class Handler:
    """A handler module: a set of methods closed over one ``SDKConfig``.

    The class is the factory: ``HandlerClass(config)``. Subclasses declare
    the capability protocol they implement; ``provides`` is derived from it
    when the class is defined, so collisions between modules can be
    detected before anything is instantiated.
    """

    capability: ClassVar[type | None] = None
    provides: ClassVar[frozenset[str]] = frozenset()
    requires_contract_caller: ClassVar[bool] = False

    def __init_subclass__(cls, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        if cls.capability is None:
            return

        names = capability_methods(cls.capability)
        if not names:
            raise CompositionError(f"{cls.__name__}: {cls.capability.__name__} declares no methods")
        missing = sorted(name for name in names if not callable(getattr(cls, name, None)))
        if missing:
            raise CompositionError(
                f"{cls.__name__} does not implement {cls.capability.__name__}: missing {missing}"
            )
        cls.provides = names

    def __init__(self, config: SDKConfig):
        if self.requires_contract_caller and config.contract_caller is None:
            raise CompositionError(f"{type(self).__name__} requires a contract caller")
        self.config = config

    @property
    def fetcher(self) -> Fetcher:
        return self.config.fetcher

    @property
    def contract_caller(self) -> ContractCaller:
        if self.config.contract_caller is None:
            raise CompositionError(f"{type(self).__name__} has no contract caller")
        return self.config.contract_caller

    @property
    def chain_id(self) -> int:
        return int(self.config.chain_id)

    def api(self, path: str, **params: Any) -> str:
        """Absolute API URL for ``path`` with query ``params``."""
        return api_url(self.config, path, **params)

    def methods(self) -> dict[str, Callable[..., Any]]:
        """Bound implementations of the declared capability."""
        return {name: getattr(self, name) for name in sorted(self.provides)}
