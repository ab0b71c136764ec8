"""Pricing models returned by the rates endpoint."""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..core.enums import SwapSide
from .common import Address, APIModel, NumberAsString, PercentString


class Rate(APIModel):
    """A priced on-chain route through one exchange."""

    exchange: str
    src_amount: NumberAsString
    dest_amount: NumberAsString
    percent: PercentString
    data: dict[str, Any] | None = None


class OthersRate(APIModel):
    """Alternative single-exchange quote."""

    exchange: str
    rate: NumberAsString
    unit: NumberAsString


class OnChainOptimalRates(APIModel):
    """Quote computed from on-chain pricing."""

    amount: NumberAsString
    best_route: list[Rate]
    others: list[OthersRate] | None = None


class SimpleComputedRate(APIModel):
    """Alternative quote as computed by the pricing service."""

    exchange: str
    rate: NumberAsString
    slippage: str | None = None
    unit: NumberAsString | None = None
    data: dict[str, Any] | None = None


class SimpleComputedRateWithFee(SimpleComputedRate):
    """Alternative quote including partner fees."""

    rate_without_fee: NumberAsString
    unit_without_fee: NumberAsString | None = None


class OptimalRate(APIModel):
    """One leg of the best route.

    ``data`` is exchange-specific and opaque to the quote; it is decoded by the
    payload encoder registered for ``exchange`` when a transaction is built.
    """

    exchange: str
    address: Address | None = None
    src_amount: NumberAsString
    dest_amount: NumberAsString
    percent: PercentString
    rate: NumberAsString | None = None
    data: dict[str, Any] | None = None


class OptimalRateWithFee(OptimalRate):
    """Route leg including partner fees."""

    src_amount_without_fee: NumberAsString | None = None
    dest_amount_without_fee: NumberAsString | None = None


class RateDetails(APIModel):
    """Tokens the quote was computed for."""

    token_from: Address
    token_to: Address
    connector: Address | None = None
    src_amount: NumberAsString | None = None


class OptimalRates(APIModel):
    """Full priced quote for a swap. Immutable once returned."""

    src_amount: NumberAsString
    dest_amount: NumberAsString
    side: SwapSide
    best_route: list[OptimalRate]
    multi_path: bool = False
    multi_route: list[list[OptimalRate]] | None = None
    others: list[SimpleComputedRate] = Field(default_factory=list)
    from_usd: str | None = Field(None, alias="fromUSD")
    to_usd: str | None = Field(None, alias="toUSD")
    details: RateDetails | None = None

    def route_percent_total(self, route: list[OptimalRate] | None = None) -> Decimal:
        """Sum of route percentages (100 for a complete allocation)."""
        legs = self.best_route if route is None else route
        return sum((Decimal(leg.percent) for leg in legs), Decimal("0"))


class OptimalRatesWithPartnerFees(OptimalRates):
    """Quote including partner fees."""

    src_amount_without_fee: NumberAsString | None = None
    dest_amount_without_fee: NumberAsString | None = None
    best_route: list[OptimalRateWithFee]
    multi_route: list[list[OptimalRateWithFee]] | None = None
    others: list[SimpleComputedRateWithFee] = Field(default_factory=list)
    from_usd_without_fee: str | None = Field(None, alias="fromUSDWithoutFee")
    to_usd_without_fee: str | None = Field(None, alias="toUSDWithoutFee")


class RateOptions(BaseModel):
    """DEX include/exclude filters for ``get_rate``."""

    model_config = ConfigDict(frozen=True)

    include_dexs: list[str] | None = None
    exclude_dexs: list[str] | None = None
    include_mp_dexs: list[str] | None = None
    exclude_mp_dexs: list[str] | None = None

    @field_validator("*", mode="before")
    @classmethod
    def parse_dex_list(cls, v: str | list[str] | None) -> list[str] | None:
        """Parse DEX list from comma-separated string or list."""
        if v is None or v == "":
            return None
        if isinstance(v, str):
            return [dex.strip() for dex in v.split(",") if dex.strip()]
        return v

    @model_validator(mode="after")
    def validate_filters(self) -> "RateOptions":
        """A DEX cannot be both included and excluded."""
        for included, excluded in (
            (self.include_dexs, self.exclude_dexs),
            (self.include_mp_dexs, self.exclude_mp_dexs),
        ):
            overlap = set(included or ()) & set(excluded or ())
            if overlap:
                raise ValueError(f"DEXs both included and excluded: {sorted(overlap)}")
        return self

    def to_query(self) -> dict[str, str]:
        """Query parameters understood by the pricing API."""
        params = {
            "includeDEXS": self.include_dexs,
            "excludeDEXS": self.exclude_dexs,
            "includeMPDEXS": self.include_mp_dexs,
            "excludeMPDEXS": self.exclude_mp_dexs,
        }
        return {key: ",".join(value) for key, value in params.items() if value}
