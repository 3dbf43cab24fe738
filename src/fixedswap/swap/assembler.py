"""Build the spend plan and normalized order from a bound provider order."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from fixedswap.swap.types import (
    AssetAmount,
    FeeOption,
    Memo,
    SpendInfo,
    SpendTarget,
    SwapInfo,
    SwapOrder,
    SwapRequest,
    SwapSavedAction,
)
from fixedswap.wallet import NativeAmount

logger = logging.getLogger(__name__)

# Orders are honored for one minute after assembly, whatever the provider says
ORDER_EXPIRATION = timedelta(seconds=60)

# Source asset with unpredictable confirmation times
HIGH_FEE_CURRENCY_CODE = "BTC"

# Chains whose memo is numeric (XRP destination tag); everything else is text
NUMBER_MEMO_CHAINS = frozenset({"ripple"})


def memo_type(plugin_id: str) -> str:
    """Memo format expected by a chain."""
    return "number" if plugin_id in NUMBER_MEMO_CHAINS else "text"


def fee_option(from_currency_code: str) -> FeeOption:
    if from_currency_code.upper() == HIGH_FEE_CURRENCY_CODE:
        return FeeOption.HIGH
    return FeeOption.STANDARD


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OrderAssembler:
    """Turns a bound provider order into a SwapOrder."""

    def __init__(
        self,
        swap_info: SwapInfo,
        order_url: str,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize assembler.

        Args:
            swap_info: Provider recorded in the saved action
            order_url: Tracking URL prefix, the order id is appended
            clock: Returns the current time (defaults to UTC now)
        """
        self.swap_info = swap_info
        self.order_url = order_url
        self.clock = clock or utc_now

    def assemble(
        self,
        request: SwapRequest,
        order_id: str,
        deposit_address: str,
        deposit_extra_id: Optional[str],
        from_native_amount: NativeAmount,
        to_native_amount: NativeAmount,
        payout_address: str,
        refund_address: str,
    ) -> SwapOrder:
        memos = []
        if deposit_extra_id is not None:
            memos.append(Memo(type=memo_type(request.from_wallet.plugin_id), value=deposit_extra_id))

        saved_action = SwapSavedAction(
            swap_info=self.swap_info,
            order_id=order_id,
            order_uri=f"{self.order_url}{order_id}",
            from_asset=AssetAmount(
                plugin_id=request.from_wallet.plugin_id,
                token_id=request.from_token_id,
                native_amount=from_native_amount,
            ),
            to_asset=AssetAmount(
                plugin_id=request.to_wallet.plugin_id,
                token_id=request.to_token_id,
                native_amount=to_native_amount,
            ),
            payout_address=payout_address,
            payout_wallet_id=request.to_wallet.wallet_id,
            refund_address=refund_address,
        )

        spend_info = SpendInfo(
            token_id=request.from_token_id,
            spend_targets=[
                SpendTarget(native_amount=from_native_amount, public_address=deposit_address)
            ],
            memos=memos,
            network_fee_option=fee_option(request.from_currency_code),
            saved_action=saved_action,
        )

        expiration_date = self.clock() + ORDER_EXPIRATION
        logger.debug(f"Assembled {self.swap_info.plugin_id} order {order_id}, expires {expiration_date}")

        return SwapOrder(
            request=request,
            spend_info=spend_info,
            swap_info=self.swap_info,
            from_native_amount=from_native_amount,
            expiration_date=expiration_date,
        )
