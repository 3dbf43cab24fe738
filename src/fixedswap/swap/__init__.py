"""Provider-independent swap types, transcription and order assembly."""

from fixedswap.swap.assembler import OrderAssembler, memo_type
from fixedswap.swap.errors import (
    BelowLimitError,
    CurrencyUnsupportedError,
    ProviderError,
    SwapError,
)
from fixedswap.swap.transcription import (
    ALL_CODES,
    ALL_TOKENS,
    CurrencyTranscriber,
    InvalidCurrencyCodes,
    TranscribedCodes,
)
from fixedswap.swap.types import (
    AssetAmount,
    FeeOption,
    Memo,
    QuoteDirection,
    SpendInfo,
    SpendTarget,
    SwapInfo,
    SwapOrder,
    SwapQuote,
    SwapRequest,
    SwapSavedAction,
)

__all__ = [
    # Types
    "AssetAmount",
    "FeeOption",
    "Memo",
    "QuoteDirection",
    "SpendInfo",
    "SpendTarget",
    "SwapInfo",
    "SwapOrder",
    "SwapQuote",
    "SwapRequest",
    "SwapSavedAction",
    # Errors
    "SwapError",
    "CurrencyUnsupportedError",
    "BelowLimitError",
    "ProviderError",
    # Transcription
    "ALL_CODES",
    "ALL_TOKENS",
    "CurrencyTranscriber",
    "InvalidCurrencyCodes",
    "TranscribedCodes",
    # Assembly
    "OrderAssembler",
    "memo_type",
]
