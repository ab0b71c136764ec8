"""Settings for building an SDK from environment variables."""

from dotenv import load_dotenv
from eth_account import Account
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import DEFAULT_API_URL, DEFAULT_REQUEST_TIMEOUT_SECONDS

# Load environment variables from .env file
load_dotenv()


class SDKSettings(BaseSettings):
    """SDK settings loaded from ``PARASWAP_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PARASWAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Configuration
    api_url: str = Field(default=DEFAULT_API_URL, description="Pricing/order API base URL")
    chain_id: int = Field(default=1, gt=0, description="Chain ID the SDK operates on")
    request_timeout: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT_SECONDS,
        gt=0,
        description="HTTP request timeout in seconds",
    )
    max_attempts: int = Field(
        default=1,
        ge=1,
        le=10,
        description="Attempts per request for connection errors (1 = no retries)",
    )

    # Chain Configuration
    rpc_url: str | None = Field(None, description="JSON-RPC endpoint (omit for API-only use)")
    private_key: str | None = Field(
        None, description="Private key of the account to bind (omit for read-only use)"
    )
    account_address: str | None = Field(None, description="Derived from private_key")
    dry_run: bool = Field(default=False, description="Log transactions instead of sending them")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=False, description="Render logs as JSON")

    @field_validator("api_url", "rpc_url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """Validate URL format."""
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("private_key")
    @classmethod
    def validate_private_key(cls, v: str | None) -> str | None:
        """Validate private key format."""
        if v is None:
            return v
        if not v.startswith("0x") or len(v) != 66:
            raise ValueError("Private key must be a 66-character hex string starting with 0x")
        try:
            int(v, 16)
        except ValueError as e:
            raise ValueError("Private key must be a valid hexadecimal string") from e
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v_upper

    @model_validator(mode="after")
    def derive_account(self) -> "SDKSettings":
        """Derive the account address from the private key."""
        if self.private_key and not self.account_address:
            try:
                self.account_address = Account.from_key(self.private_key).address
            except Exception as e:
                raise ValueError(f"Failed to derive address from private key: {e}") from e

        if self.private_key and not self.rpc_url:
            raise ValueError("rpc_url is required when private_key is set")

        return self
