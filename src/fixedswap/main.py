"""Command-line fixed-rate quote tool.

Example:
    fixedswap-quote --from-chain bitcoin --from-code BTC --from-decimals 8 \\
        --from-address bc1q... --to-chain ethereum --to-code ETH \\
        --to-decimals 18 --to-address 0xabc... --amount 1000000

Binds a real Exolix order (a deposit address is reserved); nothing is sent.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

from pydantic import ValidationError

from fixedswap.config import get_settings
from fixedswap.providers.exolix import make_exolix_plugin
from fixedswap.swap.errors import BelowLimitError, SwapError
from fixedswap.swap.types import QuoteDirection, SwapRequest
from fixedswap.wallet import NativeAmount, SimpleWallet

logger = logging.getLogger(__name__)


def native_amount(value: str) -> str:
    """Argparse type for a non-negative integer amount in native units."""
    if not (value.isascii() and value.isdigit()):
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer amount in native units")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Get a binding fixed-rate Exolix quote")
    parser.add_argument("--from-chain", required=True, help="Source chain id (e.g., bitcoin)")
    parser.add_argument("--from-code", required=True, help="Source currency code (e.g., BTC)")
    parser.add_argument("--from-decimals", type=int, required=True, help="Source currency decimals")
    parser.add_argument("--from-address", required=True, help="Refund address on the source chain")
    parser.add_argument("--to-chain", required=True, help="Destination chain id (e.g., ethereum)")
    parser.add_argument("--to-code", required=True, help="Destination currency code (e.g., ETH)")
    parser.add_argument("--to-decimals", type=int, required=True, help="Destination currency decimals")
    parser.add_argument("--to-address", required=True, help="Payout address on the destination chain")
    parser.add_argument("--amount", type=native_amount, required=True, help="Amount in native units")
    parser.add_argument(
        "--direction",
        choices=[d.value for d in QuoteDirection],
        default=QuoteDirection.FROM.value,
        help="Whether --amount is the input (from) or output (to) amount",
    )
    return parser


async def run(args: argparse.Namespace) -> int:
    settings = get_settings()
    try:
        plugin = make_exolix_plugin(settings=settings)
    except ValidationError:
        print("EXOLIX_API_KEY is not set")
        return 1

    request = SwapRequest(
        from_wallet=SimpleWallet(args.from_chain, args.from_address, {args.from_code: args.from_decimals}),
        to_wallet=SimpleWallet(args.to_chain, args.to_address, {args.to_code: args.to_decimals}),
        from_currency_code=args.from_code,
        to_currency_code=args.to_code,
        native_amount=NativeAmount(args.amount),
        quote_for=QuoteDirection(args.direction),
    )

    try:
        quote = await plugin.fetch_swap_quote(request)
    except BelowLimitError as e:
        print(f"Amount too small: minimum {e.direction.value} amount is {e.native_min}")
        return 1
    except SwapError as e:
        print(f"Quote failed: {e}")
        return 1

    print(json.dumps(quote.to_dict(), indent=2))
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    args = build_parser().parse_args(argv)
    logger.info(f"Environment: {settings.environment}")
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
