"""Pytest configuration and fixtures."""

import os
from datetime import datetime, timezone
from typing import Any, Optional, Union

import httpx
import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["EXOLIX_API_KEY"] = ""
os.environ["DEBUG"] = "true"

from fixedswap.config import Settings, get_settings
from fixedswap.providers.exolix import ExolixSwapPlugin
from fixedswap.wallet import SimpleWallet

FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)

RATE_BODY = {
    "minAmount": 0.01,
    "withdrawMin": 0.2,
    "fromAmount": 1,
    "toAmount": 15.5,
    "message": None,
}

ORDER_BODY = {
    "id": "ex123abc",
    "amount": 1,
    "amountTo": 15.5,
    "depositAddress": "bc1qdeposit",
    "depositExtraId": None,
    "status": "wait",
}

Body = Union[dict, bytes]


class FakeExolix:
    """Fake Exolix API on top of httpx.MockTransport.

    Every request is recorded so tests can assert how many calls were made.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.rate_response: tuple[int, Body] = (200, dict(RATE_BODY))
        self.order_response: tuple[int, Body] = (200, dict(ORDER_BODY))
        self.error: Optional[Exception] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error

        if request.url.path.endswith("/rate"):
            status, body = self.rate_response
        elif request.url.path.endswith("/transactions"):
            status, body = self.order_response
        else:
            return httpx.Response(404, json={"message": "Not found"})

        if isinstance(body, bytes):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, route: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(f"/{route}")]

    def set_rate(self, status: int = 200, **fields: Any) -> None:
        body = dict(RATE_BODY)
        body.update(fields)
        self.rate_response = (status, body)

    def set_order(self, status: int = 200, **fields: Any) -> None:
        body = dict(ORDER_BODY)
        body.update(fields)
        self.order_response = (status, body)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reset cached settings between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(exolix_api_key="test-key")


@pytest.fixture
def fake_exolix() -> FakeExolix:
    return FakeExolix()


@pytest.fixture
def plugin(fake_exolix: FakeExolix, settings: Settings) -> ExolixSwapPlugin:
    return ExolixSwapPlugin(
        api_key="test-key",
        transport=fake_exolix.transport,
        clock=lambda: FIXED_NOW,
        settings=settings,
    )


@pytest.fixture
def btc_wallet() -> SimpleWallet:
    return SimpleWallet("bitcoin", "bc1qrefund", {"BTC": 8}, wallet_id="btc-wallet")


@pytest.fixture
def eth_wallet() -> SimpleWallet:
    return SimpleWallet("ethereum", "0xpayout", {"ETH": 18, "USDT": 6}, wallet_id="eth-wallet")


@pytest.fixture
def xrp_wallet() -> SimpleWallet:
    return SimpleWallet("ripple", "rRefund", {"XRP": 6}, wallet_id="xrp-wallet")
