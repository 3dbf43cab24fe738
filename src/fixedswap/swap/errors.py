"""Errors raised by swap plugins."""

from typing import Optional

from fixedswap.swap.types import QuoteDirection, SwapInfo, SwapRequest


class SwapError(Exception):
    """Base exception for swap quote failures."""

    def __init__(self, swap_info: SwapInfo, message: str):
        super().__init__(message)
        self.swap_info = swap_info


class CurrencyUnsupportedError(SwapError):
    """Exception raised when the provider cannot trade one of the assets.

    Detected before any network call. Not retryable without changing the
    request.
    """

    def __init__(self, swap_info: SwapInfo, request: SwapRequest):
        self.from_currency_code = request.from_currency_code
        self.to_currency_code = request.to_currency_code
        self.from_plugin_id = request.from_wallet.plugin_id
        self.to_plugin_id = request.to_wallet.plugin_id
        super().__init__(
            swap_info,
            f"{swap_info.display_name} does not support "
            f"{self.from_currency_code} ({self.from_plugin_id}) -> "
            f"{self.to_currency_code} ({self.to_plugin_id})",
        )


class BelowLimitError(SwapError):
    """Exception raised when the amount is under the provider minimum."""

    def __init__(self, swap_info: SwapInfo, native_min: str, direction: QuoteDirection):
        self.native_min = native_min
        self.direction = direction
        super().__init__(
            swap_info,
            f"{swap_info.display_name} minimum ({direction.value}) is {native_min}",
        )


class ProviderError(SwapError):
    """Exception raised when the provider response cannot be used."""

    def __init__(
        self,
        swap_info: SwapInfo,
        message: str,
        status_code: Optional[int] = None,
    ):
        self.status_code = status_code
        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        super().__init__(swap_info, message)
