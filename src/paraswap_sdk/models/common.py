"""Shared field types and base model for API data."""

import re
from decimal import Decimal, InvalidOperation
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel
from web3 import Web3

from ..core.exceptions import BuildError

_INTEGER_STRING = re.compile(r"^\d+$", re.ASCII)


def _validate_address(v: str) -> str:
    if not isinstance(v, str) or not Web3.is_address(v):
        raise ValueError(f"Invalid Ethereum address: {v}")
    return Web3.to_checksum_address(v)


def _coerce_number_string(v: Any) -> str:
    # bool is an int subclass; reject it explicitly
    if isinstance(v, bool):
        raise ValueError("Amount must be an integer or a decimal-integer string")
    if isinstance(v, int):
        if v < 0:
            raise ValueError(f"Amount must not be negative: {v}")
        return str(v)
    if isinstance(v, str) and _INTEGER_STRING.match(v):
        return v
    raise ValueError(f"Amount must be an integer or a decimal-integer string, got {v!r}")


def _coerce_percent_string(v: Any) -> str:
    if isinstance(v, bool) or not isinstance(v, int | str):
        raise ValueError(f"Percent must be an integer or a decimal string, got {v!r}")
    try:
        percent = Decimal(str(v))
    except InvalidOperation as e:
        raise ValueError(f"Invalid percent: {v!r}") from e
    if not percent.is_finite() or percent < 0 or percent > 100:
        raise ValueError(f"Percent must be between 0 and 100: {v}")
    return str(v)


Address = Annotated[str, AfterValidator(_validate_address)]
"""Hex address normalized to EIP-55 checksum form."""

NumberAsString = Annotated[str, BeforeValidator(_coerce_number_string)]
"""Arbitrary-precision non-negative integer carried as a decimal string."""

PriceString = NumberAsString

PercentString = Annotated[str, BeforeValidator(_coerce_percent_string)]
"""Percentage in [0, 100] carried as a decimal string."""


class APIModel(BaseModel):
    """Immutable model mirroring camelCase API JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    def to_api(self) -> dict[str, Any]:
        """Serialize with API field names, dropping unset optionals."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


def parse_amount(v: Any) -> int:
    """Validate an amount argument (int or decimal-integer string) and return it as int.

    Raises:
        BuildError: If the amount is negative or not an integer
    """
    try:
        return int(_coerce_number_string(v))
    except ValueError as e:
        raise BuildError(str(e)) from e


def checksum_address(v: Any) -> str:
    """Validate an address argument and return its checksum form.

    Raises:
        BuildError: If the value is not an Ethereum address
    """
    try:
        return _validate_address(v)
    except ValueError as e:
        raise BuildError(str(e)) from e
