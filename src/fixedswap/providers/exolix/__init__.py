"""Exolix fixed-rate exchange integration."""

from fixedswap.providers.exolix.client import (
    BoundOrder,
    ExolixClient,
    RateQuote,
    RateResult,
    RateSignal,
)
from fixedswap.providers.exolix.plugin import (
    MAINNET_CODE_TRANSCRIPTION,
    SWAP_INFO,
    ExolixSwapPlugin,
    make_exolix_plugin,
)

__all__ = [
    "BoundOrder",
    "ExolixClient",
    "RateQuote",
    "RateResult",
    "RateSignal",
    "MAINNET_CODE_TRANSCRIPTION",
    "SWAP_INFO",
    "ExolixSwapPlugin",
    "make_exolix_plugin",
]
