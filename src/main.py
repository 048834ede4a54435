from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Sequence

from pydantic import ValidationError

from config import AppSettings, config
from domain.tokens import Token, UnsupportedNetworkError, known_symbols, resolve_by_symbol, resolve_network
from services.quote_service import PriceQuote, QuoteError, get_quote
from services.quoter import Quoter, UniswapV3Quoter

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _chain_id(raw: str) -> int:
    return int(raw, 0)


def load_settings(rpc_url: str | None) -> AppSettings:
    if rpc_url is None:
        return config()
    return AppSettings(rpc_url=rpc_url)


def build_quoter(settings: AppSettings, *, quoter_address: str | None = None) -> Quoter:
    return UniswapV3Quoter(
        rpc_url=settings.rpc_url,
        quoter_address=quoter_address or settings.quoter_address,
        timeout=settings.request_timeout,
    )


async def run(base: Token, reference: Token, quoter: Quoter) -> PriceQuote:
    return await get_quote(base, reference, quoter)


def print_quote(quote: PriceQuote, chain_id: int) -> None:
    print(f"1 {quote.source.symbol} = {quote.price} {quote.reference.symbol} units (chain {chain_id})")
    print(f"  fee tier:   {quote.fee_tier}")
    print(f"  amount in:  {quote.amount_in}")
    print(f"  amount out: {quote.amount_out}")
    if quote.is_truncated:
        print("  warning: amount out exceeds 32 bits, price is truncated")


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Quote one token in another through the Uniswap V3 quoter.")
    parser.add_argument("--base", default="WETH", help=f"Token to price ({', '.join(known_symbols())}).")
    parser.add_argument("--reference", default="USDC", help="Token the price is denominated in.")
    parser.add_argument("--chain-id", type=_chain_id, default=None, help="Chain id, decimal or 0x hex (default: mainnet).")
    parser.add_argument("--rpc-url", default=None, help="JSON-RPC endpoint (default: RPC_URL from env/.env).")
    parser.add_argument("--quoter-address", default=None, help="Quoter contract address.")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    try:
        settings = load_settings(args.rpc_url)
    except ValidationError as exc:
        parser.error(f"invalid settings, pass --rpc-url or set RPC_URL: {exc}")

    chain_id = args.chain_id if args.chain_id is not None else settings.chain_id
    try:
        base = resolve_by_symbol(args.base, chain_id)
        reference = resolve_by_symbol(args.reference, chain_id)
    except UnsupportedNetworkError as exc:
        parser.error(str(exc))
    if base is None:
        parser.error(f"unknown token symbol {args.base!r}")
    if reference is None:
        parser.error(f"unknown token symbol {args.reference!r}")

    quoter = build_quoter(settings, quoter_address=args.quoter_address)
    try:
        quote = asyncio.run(run(base, reference, quoter))
    except QuoteError as exc:
        logger.error("Quote failed: %s", exc)
        raise SystemExit(1) from exc

    print_quote(quote, resolve_network(chain_id))


if __name__ == "__main__":
    main()
