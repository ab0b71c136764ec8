"""Token, allowance and user models."""

from pydantic import Field

from ..core.enums import NetworkID
from .common import Address, APIModel, NumberAsString


class Token(APIModel):
    """Token as listed by the API, optionally with a user's balance/allowance."""

    address: Address
    decimals: int = Field(..., ge=0, le=255)
    symbol: str | None = None
    token_type: str = "ERC20"
    main_connector: str | None = None
    connectors: list[str] = Field(default_factory=list)
    network: int = NetworkID.MAINNET
    img: str | None = None
    allowance: NumberAsString | None = None
    balance: NumberAsString | None = None


class Allowance(APIModel):
    """Amount of ``token_address`` a spender may move on the owner's behalf."""

    token_address: Address
    allowance: NumberAsString


class User(APIModel):
    """Caller identity. Owned by the application; the SDK never mutates it."""

    address: Address
    network: int = NetworkID.MAINNET
    tokens: list[Token] | None = None
