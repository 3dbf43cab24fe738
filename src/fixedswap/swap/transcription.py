"""Currency code transcription between wallet chain ids and provider vocabularies.

Each provider ships two static tables:

- a mainnet table: wallet chain id -> provider network code (whitelist)
- an invalid-codes table: per side, chain id -> asset symbols the provider
  refuses even though the chain itself is supported (blacklist)

Both are checked before any network call.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from fixedswap.swap.errors import CurrencyUnsupportedError
from fixedswap.swap.types import SwapInfo, SwapRequest

logger = logging.getLogger(__name__)

# Blacklist sentinels
ALL_CODES = "allCodes"    # every asset on the chain
ALL_TOKENS = "allTokens"  # every token (asset with a token id) on the chain


@dataclass(frozen=True)
class InvalidCurrencyCodes:
    """Per-side blacklist of (chain id, asset symbol) pairs."""

    from_codes: Mapping[str, frozenset[str]]
    to_codes: Mapping[str, frozenset[str]]

    @classmethod
    def build(
        cls,
        from_codes: Optional[Mapping[str, Iterable[str]]] = None,
        to_codes: Optional[Mapping[str, Iterable[str]]] = None,
    ) -> "InvalidCurrencyCodes":
        return cls(
            from_codes=_freeze(from_codes or {}),
            to_codes=_freeze(to_codes or {}),
        )


@dataclass(frozen=True)
class TranscribedCodes:
    """Currency and network codes in the provider's vocabulary."""

    from_currency_code: str
    to_currency_code: str
    from_mainnet_code: str
    to_mainnet_code: str


def _freeze(table: Mapping[str, Iterable[str]]) -> Mapping[str, frozenset[str]]:
    return MappingProxyType({chain: frozenset(codes) for chain, codes in table.items()})


def _is_blacklisted(codes: frozenset[str], currency_code: str, token_id: Optional[str]) -> bool:
    if ALL_CODES in codes:
        return True
    if ALL_TOKENS in codes and token_id is not None:
        return True
    return currency_code in codes


class CurrencyTranscriber:
    """Maps wallet chain ids to a provider's network codes.

    Tables are copied into read-only mappings at construction and never
    mutated, so one transcriber can be shared by concurrent negotiations.
    """

    def __init__(
        self,
        swap_info: SwapInfo,
        mainnet_codes: Mapping[str, str],
        invalid_codes: Optional[InvalidCurrencyCodes] = None,
        currency_codes: Optional[Mapping[str, Mapping[str, str]]] = None,
    ):
        """Initialize transcriber.

        Args:
            swap_info: Provider the tables belong to (used in errors)
            mainnet_codes: Chain id -> provider network code
            invalid_codes: Blacklisted (chain id, asset symbol) pairs
            currency_codes: Optional chain id -> {wallet symbol: provider symbol}
        """
        self.swap_info = swap_info
        self.mainnet_codes: Mapping[str, str] = MappingProxyType(dict(mainnet_codes))
        self.invalid_codes = invalid_codes or InvalidCurrencyCodes.build()
        self.currency_codes: Mapping[str, Mapping[str, str]] = MappingProxyType(
            {chain: MappingProxyType(dict(table)) for chain, table in (currency_codes or {}).items()}
        )

    def transcribe(self, plugin_id: str) -> Optional[str]:
        """Return the provider network code for a chain, or None if unsupported."""
        return self.mainnet_codes.get(plugin_id)

    def supports_chain(self, plugin_id: str) -> bool:
        return plugin_id in self.mainnet_codes

    def check_invalid_codes(self, request: SwapRequest) -> None:
        """Reject blacklisted (chain, symbol) pairs on either side.

        Raises:
            CurrencyUnsupportedError: If either leg is blacklisted
        """
        from_codes = self.invalid_codes.from_codes.get(request.from_wallet.plugin_id, frozenset())
        to_codes = self.invalid_codes.to_codes.get(request.to_wallet.plugin_id, frozenset())

        if _is_blacklisted(from_codes, request.from_currency_code, request.from_token_id) or \
                _is_blacklisted(to_codes, request.to_currency_code, request.to_token_id):
            logger.debug(
                f"{self.swap_info.plugin_id}: blacklisted pair "
                f"{request.from_currency_code} -> {request.to_currency_code}"
            )
            raise CurrencyUnsupportedError(self.swap_info, request)

    def check_whitelisted_mainnet_codes(self, request: SwapRequest) -> None:
        """Reject the request unless both chains have a network code.

        Raises:
            CurrencyUnsupportedError: If either chain is missing from the table
        """
        if not self.supports_chain(request.from_wallet.plugin_id) or \
                not self.supports_chain(request.to_wallet.plugin_id):
            logger.debug(
                f"{self.swap_info.plugin_id}: unsupported chain "
                f"{request.from_wallet.plugin_id} -> {request.to_wallet.plugin_id}"
            )
            raise CurrencyUnsupportedError(self.swap_info, request)

    def check_request(self, request: SwapRequest) -> None:
        """Run blacklist then whitelist checks."""
        self.check_invalid_codes(request)
        self.check_whitelisted_mainnet_codes(request)

    def get_codes(self, request: SwapRequest) -> TranscribedCodes:
        """Transcribe both legs of the request.

        Raises:
            CurrencyUnsupportedError: If either chain has no network code
        """
        from_mainnet = self.transcribe(request.from_wallet.plugin_id)
        to_mainnet = self.transcribe(request.to_wallet.plugin_id)
        if from_mainnet is None or to_mainnet is None:
            raise CurrencyUnsupportedError(self.swap_info, request)

        from_table = self.currency_codes.get(request.from_wallet.plugin_id, {})
        to_table = self.currency_codes.get(request.to_wallet.plugin_id, {})

        return TranscribedCodes(
            from_currency_code=from_table.get(request.from_currency_code, request.from_currency_code),
            to_currency_code=to_table.get(request.to_currency_code, request.to_currency_code),
            from_mainnet_code=from_mainnet,
            to_mainnet_code=to_mainnet,
        )
