"""Collaborators invoked around the quote negotiation.

The negotiator only needs their shapes: the max-swappable adjuster maps a
SwapRequest to a SwapRequest, the formatter maps a SwapOrder to a SwapQuote.
"""

from typing import Awaitable, Callable

from fixedswap.swap.types import SwapOrder, SwapQuote, SwapRequest

GetQuote = Callable[[SwapRequest], Awaitable[SwapOrder]]
MaxSwappable = Callable[[GetQuote, SwapRequest], Awaitable[SwapRequest]]
QuoteFormatter = Callable[[SwapOrder], Awaitable[SwapQuote]]


async def keep_requested_amount(get_quote: GetQuote, request: SwapRequest) -> SwapRequest:
    """Default max-swappable adjuster: the request amount is used as-is."""
    return request


async def make_swap_quote(order: SwapOrder) -> SwapQuote:
    """Default formatter: expose the order as a binding (non-estimate) quote."""
    return SwapQuote(
        swap_info=order.swap_info,
        request=order.request,
        from_native_amount=order.from_native_amount,
        to_native_amount=order.to_native_amount,
        expiration_date=order.expiration_date,
        spend_info=order.spend_info,
        is_estimate=order.spend_info.saved_action.is_estimate,
    )
