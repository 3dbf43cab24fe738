"""Swap request, spend plan and order types shared by all swap plugins."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from fixedswap.wallet import NativeAmount, SwapWallet


class QuoteDirection(str, Enum):
    """Which side of the exchange the requested amount refers to."""
    FROM = "from"  # amount is what goes in
    TO = "to"      # amount is what must come out


class FeeOption(str, Enum):
    """Network fee aggressiveness hint for the spend."""
    STANDARD = "standard"
    HIGH = "high"


@dataclass(frozen=True)
class SwapInfo:
    """Static description of a swap provider."""

    plugin_id: str
    display_name: str
    support_email: str
    is_dex: bool = False


@dataclass(frozen=True)
class SwapRequest:
    """A request to exchange one asset for another.

    Attributes:
        from_wallet: Wallet that spends the input asset
        to_wallet: Wallet that receives the output asset
        from_currency_code: Input asset symbol (e.g., "BTC", "USDT")
        to_currency_code: Output asset symbol
        native_amount: Amount in native integer units of the quoted side
        quote_for: Whether native_amount is the input or the output amount
        from_token_id: Token identifier on the from chain (None for the chain's own asset)
        to_token_id: Token identifier on the to chain (None for the chain's own asset)
    """
    from_wallet: SwapWallet
    to_wallet: SwapWallet
    from_currency_code: str
    to_currency_code: str
    native_amount: NativeAmount
    quote_for: QuoteDirection = QuoteDirection.FROM
    from_token_id: Optional[str] = None
    to_token_id: Optional[str] = None

    @property
    def quoted_wallet(self) -> SwapWallet:
        """Wallet owning the asset the amount is expressed in."""
        return self.from_wallet if self.quote_for == QuoteDirection.FROM else self.to_wallet

    @property
    def quoted_currency_code(self) -> str:
        """Currency code the amount is expressed in."""
        if self.quote_for == QuoteDirection.FROM:
            return self.from_currency_code
        return self.to_currency_code


@dataclass(frozen=True)
class SpendTarget:
    """A single output of the spend."""

    native_amount: NativeAmount
    public_address: str


@dataclass(frozen=True)
class Memo:
    """Auxiliary tag attached to a spend (destination tag, memo text, ...)."""

    type: str  # "text", "number" or "hex"
    value: str


@dataclass(frozen=True)
class AssetAmount:
    """One leg of a swap in native units."""

    plugin_id: str
    token_id: Optional[str]
    native_amount: NativeAmount


@dataclass(frozen=True)
class SwapSavedAction:
    """Provenance metadata stored alongside the spend for support and audit."""

    swap_info: SwapInfo
    order_id: str
    order_uri: str
    from_asset: AssetAmount
    to_asset: AssetAmount
    payout_address: str
    payout_wallet_id: str
    refund_address: str
    is_estimate: bool = False
    action_type: str = "swap"


@dataclass(frozen=True)
class SpendInfo:
    """Everything a wallet needs to build the deposit transaction."""

    spend_targets: list[SpendTarget]
    saved_action: SwapSavedAction
    token_id: Optional[str] = None
    memos: list[Memo] = field(default_factory=list)
    network_fee_option: FeeOption = FeeOption.STANDARD
    asset_action: str = "swap"


@dataclass(frozen=True)
class SwapOrder:
    """Normalized, executable result of a quote negotiation."""

    request: SwapRequest
    spend_info: SpendInfo
    swap_info: SwapInfo
    from_native_amount: NativeAmount
    expiration_date: datetime

    @property
    def to_native_amount(self) -> NativeAmount:
        return self.spend_info.saved_action.to_asset.native_amount

    def is_expired(self, now: datetime) -> bool:
        """Check whether the order must no longer be honored."""
        return now >= self.expiration_date


@dataclass(frozen=True)
class SwapQuote:
    """Final quote handed to the user interface."""

    swap_info: SwapInfo
    request: SwapRequest
    from_native_amount: NativeAmount
    to_native_amount: NativeAmount
    expiration_date: datetime
    spend_info: SpendInfo
    is_estimate: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary for display or logging."""
        saved = self.spend_info.saved_action
        return {
            "provider": self.swap_info.plugin_id,
            "order_id": saved.order_id,
            "order_uri": saved.order_uri,
            "from_currency_code": self.request.from_currency_code,
            "to_currency_code": self.request.to_currency_code,
            "from_native_amount": self.from_native_amount,
            "to_native_amount": self.to_native_amount,
            "deposit_address": self.spend_info.spend_targets[0].public_address,
            "memos": [{"type": m.type, "value": m.value} for m in self.spend_info.memos],
            "network_fee_option": self.spend_info.network_fee_option.value,
            "expiration_date": self.expiration_date.isoformat(),
            "is_estimate": self.is_estimate,
        }
