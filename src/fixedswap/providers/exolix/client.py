"""Exolix fixed-rate exchange API client.

API docs: https://exolix.com/developers

Two calls are needed to bind a fixed-rate order:
- GET rate: quote + limits for a pair and amount
- POST transactions: bind the quote and reserve a deposit address

Amounts on the wire are decimal (human-readable) values. Conversion to and
from native wallet units is done by the caller.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Optional

import httpx
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from fixedswap.swap.errors import ProviderError
from fixedswap.swap.transcription import TranscribedCodes
from fixedswap.swap.types import QuoteDirection, SwapInfo
from fixedswap.wallet import format_decimal

logger = logging.getLogger(__name__)

EXOLIX_API_URL = "https://exolix.com/api/v2/"

RATE_TYPE = "fixed"


def _require_number(value: Any) -> Any:
    """Accept JSON numbers only; numeric strings and booleans are malformed."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValueError("expected a number")
    return value


def _number_or_zero(value: Any) -> Any:
    if value is None:
        return Decimal(0)
    return _require_number(value)


WireNumber = Annotated[Decimal, BeforeValidator(_require_number)]
# Missing output-side minimum is read as zero
OptionalWireNumber = Annotated[Decimal, BeforeValidator(_number_or_zero)]


class RateQuote(BaseModel):
    """Response of GET rate."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    min_amount: WireNumber = Field(..., alias="minAmount")
    withdraw_min: OptionalWireNumber = Field(default=Decimal(0), alias="withdrawMin")
    from_amount: WireNumber = Field(..., alias="fromAmount")
    to_amount: WireNumber = Field(..., alias="toAmount")
    message: Optional[str] = Field(..., description="Set when the amount is out of limits")

    def minimum_for(self, direction: QuoteDirection) -> Decimal:
        """Minimum on the side the request amount is expressed in."""
        return self.min_amount if direction == QuoteDirection.FROM else self.withdraw_min


class BoundOrder(BaseModel):
    """Response of POST transactions."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    amount: WireNumber
    amount_to: WireNumber = Field(..., alias="amountTo")
    deposit_address: str = Field(..., alias="depositAddress")
    deposit_extra_id: Optional[str] = Field(default=None, alias="depositExtraId")


class RateSignal(str, Enum):
    """How a rate response should be read."""
    OK = "ok"
    # Exolix answers an under-minimum "from" quote with an error status and
    # an under-minimum "to" quote with a success status and a message.
    # Both still carry a valid rate body with the limits.
    BELOW_MINIMUM = "below_minimum"


@dataclass(frozen=True)
class RateResult:
    """Tagged rate response. The provider-error variant is raised as ProviderError."""

    signal: RateSignal
    quote: RateQuote
    status_code: int


class ExolixClient:
    """Thin async client for the Exolix v2 API."""

    def __init__(
        self,
        api_key: str,
        swap_info: SwapInfo,
        base_url: str = EXOLIX_API_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize client.

        Args:
            api_key: Exolix API key, sent verbatim in the Authorization header
            swap_info: Provider info attached to raised errors
            base_url: API base URL (with trailing slash)
            timeout: HTTP timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.api_key = api_key
        self.swap_info = swap_info
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": self.api_key,
        }

    async def _call(self, method: str, route: str, params: dict) -> tuple[httpx.Response, Any]:
        """Issue one request and decode its JSON body."""
        url = f"{self.base_url}{route}"
        logger.debug(f"Exolix {method} {route}: {params}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                if method == "POST":
                    response = await client.post(url, headers=self.headers, json=params)
                else:
                    response = await client.get(url, headers=self.headers, params=params)
        except httpx.TransportError as e:
            raise ProviderError(self.swap_info, f"Exolix request failed: {type(e).__name__}: {e}") from e

        try:
            body = response.json(parse_float=Decimal)
        except ValueError as e:
            raise ProviderError(
                self.swap_info, "Exolix returned a non-JSON body", response.status_code
            ) from e

        return response, body

    @staticmethod
    def _amount_params(amount: float, direction: QuoteDirection, as_text: bool = False) -> dict:
        value: Any = amount
        # Query values are plain decimal text, never exponent form
        if as_text:
            value = format_decimal(Decimal(str(amount)))
        params: dict[str, Any] = {"amount": value}
        # withdrawalAmount tells Exolix the amount is what must come out
        if direction == QuoteDirection.TO:
            params["withdrawalAmount"] = value
        return params

    async def get_rate(
        self,
        codes: TranscribedCodes,
        amount: float,
        direction: QuoteDirection,
    ) -> RateResult:
        """Get a fixed-rate quote and the pair limits.

        Args:
            codes: Transcribed currency and network codes
            amount: Decimal amount on the quoted side
            direction: Which side the amount refers to

        Returns:
            RateResult tagged OK or BELOW_MINIMUM

        Raises:
            ProviderError: On transport failure, unexpected status or malformed body
        """
        params = {
            "coinFrom": codes.from_currency_code,
            "coinFromNetwork": codes.from_mainnet_code,
            "coinTo": codes.to_currency_code,
            "coinToNetwork": codes.to_mainnet_code,
            **self._amount_params(amount, direction, as_text=True),
            "rateType": RATE_TYPE,
        }

        response, body = await self._call("GET", "rate", params)

        try:
            quote = RateQuote.model_validate(body)
        except ValidationError as e:
            if response.is_success:
                raise ProviderError(
                    self.swap_info, f"Invalid Exolix rate response: {e}", response.status_code
                ) from e
            raise ProviderError(
                self.swap_info, "Exolix returned error code", response.status_code
            ) from e

        if not response.is_success:
            logger.warning(
                f"Exolix rate returned HTTP {response.status_code} with limits: {quote.message}"
            )
            return RateResult(RateSignal.BELOW_MINIMUM, quote, response.status_code)

        signal = RateSignal.OK if quote.message is None else RateSignal.BELOW_MINIMUM
        return RateResult(signal, quote, response.status_code)

    async def create_order(
        self,
        codes: TranscribedCodes,
        amount: float,
        direction: QuoteDirection,
        withdrawal_address: str,
        refund_address: str,
    ) -> BoundOrder:
        """Bind a fixed-rate order and reserve a deposit address.

        This call has a side effect on the Exolix side; issue it once.

        Raises:
            ProviderError: On transport failure, error status or malformed body
        """
        params = {
            "coinFrom": codes.from_currency_code,
            "networkFrom": codes.from_mainnet_code,
            "coinTo": codes.to_currency_code,
            "networkTo": codes.to_mainnet_code,
            **self._amount_params(amount, direction),
            "withdrawalAddress": withdrawal_address,
            "withdrawalExtraId": "",
            "refundAddress": refund_address,
            "refundExtraId": "",
            "rateType": RATE_TYPE,
        }

        response, body = await self._call("POST", "transactions", params)

        if not response.is_success:
            raise ProviderError(self.swap_info, "Exolix returned error code", response.status_code)

        try:
            order = BoundOrder.model_validate(body)
        except ValidationError as e:
            raise ProviderError(
                self.swap_info, f"Invalid Exolix order response: {e}", response.status_code
            ) from e

        logger.info(f"Exolix order {order.id}: {order.amount} -> {order.amount_to}")
        return order
