"""Wallet collaborator interface consumed by swap plugins.

A swap plugin never does unit arithmetic itself. Amounts are converted by
the wallet that owns the asset:

- native amounts are integer strings in the smallest unit (satoshi, wei, drops)
- denominated amounts are human-readable decimal strings ("0.5")
"""

import logging
from abc import ABC, abstractmethod
from decimal import ROUND_DOWN, Decimal
from typing import NewType, Optional

logger = logging.getLogger(__name__)

NativeAmount = NewType("NativeAmount", str)
DenominatedAmount = NewType("DenominatedAmount", str)


def format_decimal(value: Decimal) -> str:
    """Render a Decimal as a plain (non-scientific) string without trailing zeros."""
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


class SwapWallet(ABC):
    """Wallet as seen by a swap plugin."""

    @property
    @abstractmethod
    def wallet_id(self) -> str:
        """Unique wallet identifier."""
        pass

    @property
    @abstractmethod
    def plugin_id(self) -> str:
        """Chain identifier of the wallet (e.g., "bitcoin", "ethereum")."""
        pass

    @abstractmethod
    async def get_receive_address(self) -> str:
        """Return an address that can receive funds on this wallet."""
        pass

    @abstractmethod
    async def native_to_denomination(
        self, native_amount: str, currency_code: str
    ) -> DenominatedAmount:
        """Convert a native integer amount to a decimal display amount."""
        pass

    @abstractmethod
    async def denomination_to_native(
        self, amount: str, currency_code: str
    ) -> NativeAmount:
        """Convert a decimal display amount to a native integer amount."""
        pass


class WalletError(Exception):
    """Exception raised by wallet operations."""
    pass


class SimpleWallet(SwapWallet):
    """Wallet with a fixed receive address and a decimals table per currency code.

    Good enough for the CLI and for tests; a real wallet derives addresses
    and looks up denominations from its chain metadata.
    """

    def __init__(
        self,
        plugin_id: str,
        address: str,
        decimals: dict[str, int],
        wallet_id: Optional[str] = None,
    ):
        """Initialize wallet.

        Args:
            plugin_id: Chain identifier (e.g., "bitcoin")
            address: Receive address returned by get_receive_address
            decimals: Currency code -> number of decimals (e.g., {"BTC": 8})
            wallet_id: Wallet identifier (defaults to "<plugin_id>-wallet")
        """
        self._plugin_id = plugin_id
        self._address = address
        self._decimals = {code.upper(): places for code, places in decimals.items()}
        self._wallet_id = wallet_id or f"{plugin_id}-wallet"

    @property
    def wallet_id(self) -> str:
        return self._wallet_id

    @property
    def plugin_id(self) -> str:
        return self._plugin_id

    async def get_receive_address(self) -> str:
        return self._address

    def _get_decimals(self, currency_code: str) -> int:
        places = self._decimals.get(currency_code.upper())
        if places is None:
            raise WalletError(f"Unknown currency code {currency_code} on {self._plugin_id}")
        return places

    async def native_to_denomination(
        self, native_amount: str, currency_code: str
    ) -> DenominatedAmount:
        places = self._get_decimals(currency_code)
        value = Decimal(native_amount).scaleb(-places)
        return DenominatedAmount(format_decimal(value))

    async def denomination_to_native(
        self, amount: str, currency_code: str
    ) -> NativeAmount:
        places = self._get_decimals(currency_code)
        value = Decimal(amount).scaleb(places).quantize(Decimal("1"), rounding=ROUND_DOWN)
        return NativeAmount(format_decimal(value))

    def __repr__(self) -> str:
        return f"SimpleWallet(plugin_id={self._plugin_id}, address={self._address})"
