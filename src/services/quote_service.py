from __future__ import annotations

import logging
from dataclasses import dataclass

from domain.tokens import Token

from .quoter import Quoter

logger = logging.getLogger(__name__)

# 0.05% pool in Uniswap V3 fee units (hundredths of a basis point).
FEE_TIER = 500

_UINT256_MAX = 2**256 - 1
_UINT32_MASK = 0xFFFFFFFF


class QuoteError(RuntimeError):
    def __init__(self, message: str, *, source: Token, reference: Token) -> None:
        super().__init__(message)
        self.source = source
        self.reference = reference


@dataclass(frozen=True)
class PriceQuote:
    """Result of a single quoter call.

    ``amount_out`` is the raw amount of ``reference`` smallest units returned
    for one whole ``source`` token. ``price`` is that amount truncated to 32
    bits, which is what :func:`get_price` returns. The truncation is kept as
    is: amounts above ``2**32 - 1`` wrap silently.
    """

    source: Token
    reference: Token
    fee_tier: int
    amount_in: int
    amount_out: int

    @property
    def price(self) -> int:
        return self.amount_out & _UINT32_MASK

    @property
    def is_truncated(self) -> bool:
        return self.amount_out > _UINT32_MASK


def one_unit(decimals: int) -> int | None:
    """Fixed-point value of 1.0 at ``decimals``, or ``None`` if it does not fit a uint256."""
    if decimals < 0:
        return None
    amount = 10**decimals
    if amount > _UINT256_MAX:
        return None
    return amount


async def get_quote(source: Token, reference: Token, quoter: Quoter) -> PriceQuote:
    amount_in = one_unit(source.decimals)
    if amount_in is None:
        msg = f"1 {reference.symbol} did not parse correctly"
        raise QuoteError(msg, source=source, reference=reference)

    logger.debug(
        "Quoting %s %s (%s) in %s (%s), fee tier %s",
        amount_in,
        source.symbol,
        source.address,
        reference.symbol,
        reference.address,
        FEE_TIER,
    )
    try:
        amount_out = await quoter.quote_exact_input_single(
            source.address,
            reference.address,
            FEE_TIER,
            amount_in,
            0,
        )
    except Exception as exc:
        msg = f"Quote for {source.symbol}/{reference.symbol} failed: {exc}"
        raise QuoteError(msg, source=source, reference=reference) from exc

    if isinstance(amount_out, bool) or not isinstance(amount_out, int) or amount_out < 0:
        msg = f"Quoter returned a malformed amount for {source.symbol}/{reference.symbol}: {amount_out!r}"
        raise QuoteError(msg, source=source, reference=reference)

    quote = PriceQuote(
        source=source,
        reference=reference,
        fee_tier=FEE_TIER,
        amount_in=amount_in,
        amount_out=amount_out,
    )
    if quote.is_truncated:
        logger.warning(
            "Quoted amount %s for %s/%s exceeds 32 bits, price truncated to %s",
            amount_out,
            source.symbol,
            reference.symbol,
            quote.price,
        )
    return quote


async def get_price(source: Token, reference: Token, quoter: Quoter) -> int:
    quote = await get_quote(source, reference, quoter)
    return quote.price


__all__ = ["FEE_TIER", "PriceQuote", "QuoteError", "get_price", "get_quote", "one_unit"]
