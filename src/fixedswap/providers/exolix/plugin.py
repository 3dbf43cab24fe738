"""Exolix fixed-rate swap plugin.

Negotiates a binding quote with Exolix and assembles the spend the wallet
must broadcast to fund it:

1. resolve payout/refund addresses
2. convert the request amount to a decimal amount
3. transcribe chain ids to Exolix network codes
4. GET rate
5. enforce the minimum on the quoted side
6. POST transactions (binds the quote, reserves a deposit address)
7. convert the bound amounts back to native units
8. assemble the order
"""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Optional

import httpx
from pydantic import BaseModel, Field

from fixedswap.config import Settings, get_settings
from fixedswap.providers.exolix.client import ExolixClient, RateSignal
from fixedswap.swap.assembler import OrderAssembler
from fixedswap.swap.errors import BelowLimitError
from fixedswap.swap.quote import (
    MaxSwappable,
    QuoteFormatter,
    keep_requested_amount,
    make_swap_quote,
)
from fixedswap.swap.transcription import CurrencyTranscriber, InvalidCurrencyCodes
from fixedswap.swap.types import SwapInfo, SwapOrder, SwapQuote, SwapRequest
from fixedswap.wallet import format_decimal

logger = logging.getLogger(__name__)

SWAP_INFO = SwapInfo(
    plugin_id="exolix",
    display_name="Exolix",
    support_email="support@exolix.com",
    is_dex=False,
)

INVALID_CURRENCY_CODES = InvalidCurrencyCodes.build(
    from_codes={},
    to_codes={
        "zcash": ["ZEC"],
    },
)

# See https://exolix.com/currencies for list of supported currencies
MAINNET_CODE_TRANSCRIPTION = {
    "algorand": "ALGO",
    "arbitrum": "ARBITRUM",
    "avalanche": "AVAXC",
    "binancesmartchain": "BSC",
    "bitcoin": "BTC",
    "bitcoincash": "BCH",
    "cardano": "ADA",
    "celo": "CELO",
    "cosmoshub": "ATOM",
    "dash": "DASH",
    "digibyte": "DGB",
    "dogecoin": "DOGE",
    "eos": "EOS",
    "ethereum": "ETH",
    "ethereumclassic": "ETC",
    "fantom": "FTM",
    "filecoin": "FIL",
    "hedera": "HBAR",
    "litecoin": "LTC",
    "monero": "XMR",
    "optimism": "OPTIMISM",
    "osmosis": "OSMO",
    "polkadot": "DOT",
    "qtum": "QTUM",
    "ravencoin": "RVN",
    "ripple": "XRP",
    "solana": "SOL",
    "stellar": "XLM",
    "telos": "TELOS",
    "tezos": "XTZ",
    "thorchainrune": "RUNE",
    "tron": "TRX",
    "zcash": "ZEC",
}


class ExolixInitOptions(BaseModel):
    """Options required to construct the plugin."""

    api_key: str = Field(..., min_length=1)


class ExolixSwapPlugin:
    """Fixed-rate swap plugin backed by Exolix."""

    swap_info = SWAP_INFO

    def __init__(
        self,
        api_key: str,
        api_url: Optional[str] = None,
        order_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        max_swappable: MaxSwappable = keep_requested_amount,
        quote_formatter: QuoteFormatter = make_swap_quote,
        clock: Optional[Callable[[], datetime]] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize plugin.

        Args:
            api_key: Exolix API key
            api_url: API base URL (defaults to settings)
            order_url: Tracking URL prefix (defaults to settings)
            timeout: HTTP timeout in seconds (defaults to settings)
            transport: Optional httpx transport for the API client
            max_swappable: Adjusts the request before negotiation
            quote_formatter: Turns the negotiated order into the final quote
            clock: Current time source for order expiration
            settings: Settings to read defaults from (defaults to get_settings())
        """
        settings = settings or get_settings()
        options = ExolixInitOptions(api_key=api_key)

        self.transcriber = CurrencyTranscriber(
            SWAP_INFO,
            mainnet_codes=MAINNET_CODE_TRANSCRIPTION,
            invalid_codes=INVALID_CURRENCY_CODES,
        )
        self.client = ExolixClient(
            api_key=options.api_key,
            swap_info=SWAP_INFO,
            base_url=api_url or settings.exolix_api_url,
            timeout=timeout if timeout is not None else settings.http_timeout,
            transport=transport,
        )
        self.assembler = OrderAssembler(
            SWAP_INFO,
            order_url=order_url or settings.exolix_order_url,
            clock=clock,
        )
        self.max_swappable = max_swappable
        self.quote_formatter = quote_formatter

    async def fetch_swap_quote(self, request: SwapRequest) -> SwapQuote:
        """Negotiate a binding fixed-rate quote.

        Raises:
            CurrencyUnsupportedError: Pair outside the Exolix tables (no network call made)
            BelowLimitError: Amount under the Exolix minimum (no order bound)
            ProviderError: Unusable Exolix response
        """
        self.transcriber.check_invalid_codes(request)
        self.transcriber.check_whitelisted_mainnet_codes(request)

        new_request = await self.max_swappable(self.get_fixed_quote, request)
        order = await self.get_fixed_quote(new_request)
        return await self.quote_formatter(order)

    async def get_fixed_quote(self, request: SwapRequest) -> SwapOrder:
        """Run the negotiation for one request and return the normalized order."""
        direction = request.quote_for

        from_address, to_address = await asyncio.gather(
            request.from_wallet.get_receive_address(),
            request.to_wallet.get_receive_address(),
        )

        exchange_quote_amount = await request.quoted_wallet.native_to_denomination(
            request.native_amount, request.quoted_currency_code
        )
        quote_amount = float(exchange_quote_amount)

        codes = self.transcriber.get_codes(request)

        logger.info(
            f"Exolix {direction.value} quote: {exchange_quote_amount} "
            f"{request.from_currency_code} ({codes.from_mainnet_code}) -> "
            f"{request.to_currency_code} ({codes.to_mainnet_code})"
        )

        rate = await self.client.get_rate(codes, quote_amount, direction)

        # Minimum is checked in native units on the quoted side
        native_min = await request.quoted_wallet.denomination_to_native(
            format_decimal(rate.quote.minimum_for(direction)),
            request.quoted_currency_code,
        )
        if int(request.native_amount) < int(native_min):
            logger.info(f"Exolix {direction.value} amount {request.native_amount} below minimum {native_min}")
            raise BelowLimitError(SWAP_INFO, native_min, direction)
        if rate.signal == RateSignal.BELOW_MINIMUM:
            logger.warning(f"Exolix flagged limits but {request.native_amount} meets minimum {native_min}")

        bound = await self.client.create_order(
            codes,
            quote_amount,
            direction,
            withdrawal_address=to_address,
            refund_address=from_address,
        )

        from_native_amount = await request.from_wallet.denomination_to_native(
            format_decimal(bound.amount), request.from_currency_code
        )
        to_native_amount = await request.to_wallet.denomination_to_native(
            format_decimal(bound.amount_to), request.to_currency_code
        )

        return self.assembler.assemble(
            request,
            order_id=bound.id,
            deposit_address=bound.deposit_address,
            deposit_extra_id=bound.deposit_extra_id,
            from_native_amount=from_native_amount,
            to_native_amount=to_native_amount,
            payout_address=to_address,
            refund_address=from_address,
        )


def make_exolix_plugin(
    api_key: Optional[str] = None,
    settings: Optional[Settings] = None,
    **kwargs,
) -> ExolixSwapPlugin:
    """Create the Exolix plugin, reading the API key from settings when not given."""
    settings = settings or get_settings()
    return ExolixSwapPlugin(
        api_key=api_key if api_key is not None else settings.exolix_api_key,
        settings=settings,
        **kwargs,
    )
