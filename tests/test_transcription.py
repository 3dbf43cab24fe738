"""Tests for currency code transcription and support checks."""

import itertools

import pytest

from fixedswap.providers.exolix import MAINNET_CODE_TRANSCRIPTION, ExolixSwapPlugin
from fixedswap.swap.errors import CurrencyUnsupportedError
from fixedswap.swap.transcription import (
    ALL_CODES,
    ALL_TOKENS,
    CurrencyTranscriber,
    InvalidCurrencyCodes,
)
from fixedswap.swap.types import SwapInfo, SwapRequest
from fixedswap.wallet import NativeAmount, SimpleWallet

SWAP_INFO = SwapInfo(plugin_id="test", display_name="Test", support_email="support@test.invalid")


def make_request(from_chain, from_code, to_chain, to_code, from_token_id=None, to_token_id=None):
    return SwapRequest(
        from_wallet=SimpleWallet(from_chain, "from-address", {from_code: 8}),
        to_wallet=SimpleWallet(to_chain, "to-address", {to_code: 8}),
        from_currency_code=from_code,
        to_currency_code=to_code,
        native_amount=NativeAmount("100000000"),
        from_token_id=from_token_id,
        to_token_id=to_token_id,
    )


@pytest.fixture
def transcriber() -> CurrencyTranscriber:
    return CurrencyTranscriber(
        SWAP_INFO,
        mainnet_codes={"bitcoin": "BTC", "ethereum": "ETH", "zcash": "ZEC", "tron": "TRX"},
        invalid_codes=InvalidCurrencyCodes.build(
            from_codes={"tron": [ALL_TOKENS]},
            to_codes={"zcash": ["ZEC"], "tron": [ALL_CODES]},
        ),
        currency_codes={"ethereum": {"USDT": "USDTERC20"}},
    )


class TestTranscribe:
    """Tests for chain id transcription."""

    def test_transcribe_known_chain(self, transcriber):
        assert transcriber.transcribe("bitcoin") == "BTC"

    def test_transcribe_unknown_chain(self, transcriber):
        assert transcriber.transcribe("polygon") is None

    def test_get_codes(self, transcriber):
        """Test network codes and currency code renames are applied."""
        codes = transcriber.get_codes(make_request("ethereum", "USDT", "bitcoin", "BTC"))

        assert codes.from_currency_code == "USDTERC20"
        assert codes.from_mainnet_code == "ETH"
        assert codes.to_currency_code == "BTC"
        assert codes.to_mainnet_code == "BTC"

    def test_get_codes_unsupported(self, transcriber):
        with pytest.raises(CurrencyUnsupportedError):
            transcriber.get_codes(make_request("bitcoin", "BTC", "polygon", "MATIC"))

    def test_tables_are_read_only(self, transcriber):
        with pytest.raises(TypeError):
            transcriber.mainnet_codes["polygon"] = "MATIC"

    def test_source_table_not_shared(self):
        """Test later edits to the input table do not leak in."""
        table = {"bitcoin": "BTC"}
        transcriber = CurrencyTranscriber(SWAP_INFO, mainnet_codes=table)
        table["polygon"] = "MATIC"

        assert transcriber.transcribe("polygon") is None


class TestWhitelist:
    """Tests for the mainnet code whitelist."""

    def test_supported_pair(self, transcriber):
        transcriber.check_whitelisted_mainnet_codes(make_request("bitcoin", "BTC", "ethereum", "ETH"))

    @pytest.mark.parametrize(
        "from_chain,to_chain",
        [("polygon", "bitcoin"), ("bitcoin", "polygon"), ("polygon", "base")],
    )
    def test_unsupported_leg(self, transcriber, from_chain, to_chain):
        with pytest.raises(CurrencyUnsupportedError):
            transcriber.check_whitelisted_mainnet_codes(make_request(from_chain, "X", to_chain, "Y"))

    def test_every_exolix_pair_transcribes(self, settings):
        """Test all pairs of chains in the Exolix table transcribe."""
        transcriber = ExolixSwapPlugin(api_key="test-key", settings=settings).transcriber

        for from_chain, to_chain in itertools.product(MAINNET_CODE_TRANSCRIPTION, repeat=2):
            request = make_request(from_chain, "A", to_chain, "B")
            transcriber.check_whitelisted_mainnet_codes(request)
            codes = transcriber.get_codes(request)
            assert codes.from_mainnet_code == MAINNET_CODE_TRANSCRIPTION[from_chain]
            assert codes.to_mainnet_code == MAINNET_CODE_TRANSCRIPTION[to_chain]


class TestBlacklist:
    """Tests for invalid currency codes."""

    def test_blacklisted_destination(self, transcriber):
        with pytest.raises(CurrencyUnsupportedError) as exc_info:
            transcriber.check_invalid_codes(make_request("bitcoin", "BTC", "zcash", "ZEC"))

        assert "ZEC" in str(exc_info.value)

    def test_blacklist_is_per_side(self, transcriber):
        """Test ZEC is only refused as destination."""
        transcriber.check_invalid_codes(make_request("zcash", "ZEC", "bitcoin", "BTC"))

    def test_all_tokens_only_blocks_tokens(self, transcriber):
        transcriber.check_invalid_codes(make_request("tron", "TRX", "bitcoin", "BTC"))

        with pytest.raises(CurrencyUnsupportedError):
            transcriber.check_invalid_codes(
                make_request("tron", "USDT", "bitcoin", "BTC", from_token_id="TR7NHqje")
            )

    def test_all_codes_blocks_everything(self, transcriber):
        with pytest.raises(CurrencyUnsupportedError):
            transcriber.check_invalid_codes(make_request("bitcoin", "BTC", "tron", "TRX"))

    def test_check_request_runs_both(self, transcriber):
        with pytest.raises(CurrencyUnsupportedError):
            transcriber.check_request(make_request("bitcoin", "BTC", "zcash", "ZEC"))
        with pytest.raises(CurrencyUnsupportedError):
            transcriber.check_request(make_request("bitcoin", "BTC", "polygon", "MATIC"))
