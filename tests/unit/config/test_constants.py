"""Tests for constants and shipped ABIs."""

import pytest
from web3 import Web3

from paraswap_sdk.config.constants import (
    DEFAULT_API_URL,
    ETHER_ADDRESS,
    UNLIMITED_ALLOWANCE,
    ZERO_ADDRESS,
    is_ether,
    load_abi,
)


class TestConstants:
    """Test that constants are properly defined."""

    def test_unlimited_allowance_is_max_uint256(self):
        """UNLIMITED_ALLOWANCE should be 2**256 - 1 as a plain decimal string."""
        assert UNLIMITED_ALLOWANCE == str(2**256 - 1)
        assert UNLIMITED_ALLOWANCE == (
            "115792089237316195423570985008687907853269984665640564039457584007913129639935"
        )
        assert "e" not in UNLIMITED_ALLOWANCE.lower()

    def test_special_addresses_are_valid(self):
        """ETH marker and zero address should be valid addresses."""
        assert Web3.is_address(ETHER_ADDRESS)
        assert Web3.is_address(ZERO_ADDRESS)

    def test_default_api_url_is_https(self):
        """Default API URL should use HTTPS."""
        assert DEFAULT_API_URL.startswith("https://")


class TestIsEther:
    """Test the native ETH check."""

    def test_is_ether_ignores_case(self):
        """Checksummed and lowercase forms should both match."""
        assert is_ether(ETHER_ADDRESS)
        assert is_ether(Web3.to_checksum_address(ETHER_ADDRESS))

    def test_is_ether_rejects_tokens(self):
        """ERC20 addresses are not ETH."""
        assert not is_ether("0x6B175474E89094C44Da98b954EedeAC495271d0F")


class TestLoadAbi:
    """Test ABI loading."""

    @pytest.mark.parametrize(
        "name,method",
        [
            ("ERC20", "approve"),
            ("ERC20", "allowance"),
            ("AugustusSwapper", "multiSwap"),
            ("AugustusSwapper", "buy"),
            ("AugustusRFQ", "fillOrder"),
            ("AugustusRFQ", "cancelOrder"),
            ("AugustusRFQ", "cancelOrders"),
        ],
    )
    def test_abi_contains_method(self, name, method):
        """Shipped ABIs should define the methods the handlers use."""
        abi = load_abi(name)
        assert any(item.get("name") == method for item in abi)

    def test_missing_abi_raises(self):
        """Unknown ABI names should fail loudly."""
        with pytest.raises(FileNotFoundError):
            load_abi("DoesNotExist")
