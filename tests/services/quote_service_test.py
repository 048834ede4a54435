from __future__ import annotations

import asyncio

import pytest

from domain.tokens import ZERO_ADDRESS, Token, usdc, weth
from services.quote_service import FEE_TIER, QuoteError, get_price, get_quote, one_unit
from tests.helpers.stub_quoter import StubQuoter


def test_get_price_issues_single_call_with_one_whole_unit(stub_quoter: StubQuoter) -> None:
    price = asyncio.run(get_price(weth(), usdc(), stub_quoter))

    assert price == 1_234_567_890
    assert len(stub_quoter.calls) == 1
    call = stub_quoter.calls[0]
    assert call.token_in == weth().address
    assert call.token_out == usdc().address
    assert call.fee_tier == FEE_TIER == 500
    assert call.amount_in == 10**18
    assert call.min_amount_out == 0


def test_amount_in_follows_source_decimals() -> None:
    quoter = StubQuoter(amount_out=5)

    asyncio.run(get_price(usdc(), weth(), quoter))

    assert quoter.calls[0].amount_in == 10**6


def test_get_price_truncates_to_32_bits() -> None:
    amount_out = 3_000 * 10**18
    quoter = StubQuoter(amount_out=amount_out)

    price = asyncio.run(get_price(weth(), usdc(), quoter))

    assert price == amount_out & 0xFFFFFFFF


def test_get_quote_keeps_full_width_amount() -> None:
    amount_out = 2**40 + 7
    quoter = StubQuoter(amount_out=amount_out)

    quote = asyncio.run(get_quote(weth(), usdc(), quoter))

    assert quote.amount_out == amount_out
    assert quote.price == 7
    assert quote.is_truncated
    assert quote.fee_tier == 500
    assert quote.source == weth()
    assert quote.reference == usdc()


def test_quoter_failure_is_wrapped() -> None:
    cause = ConnectionError("node unreachable")
    quoter = StubQuoter(error=cause)

    with pytest.raises(QuoteError) as exc_info:
        asyncio.run(get_price(weth(), usdc(), quoter))

    assert exc_info.value.__cause__ is cause
    assert exc_info.value.reference == usdc()
    assert len(quoter.calls) == 1


def test_unrepresentable_unit_fails_before_calling_quoter() -> None:
    source = Token(symbol="HUGE", address=ZERO_ADDRESS, decimals=78)
    quoter = StubQuoter(amount_out=1)

    with pytest.raises(QuoteError, match="1 USDC did not parse correctly"):
        asyncio.run(get_price(source, usdc(), quoter))

    assert quoter.calls == []


@pytest.mark.parametrize("amount_out", [None, "100", -1, 1.5])
def test_malformed_amount_is_rejected(amount_out: object) -> None:
    quoter = StubQuoter(amount_out=amount_out)

    with pytest.raises(QuoteError, match="malformed"):
        asyncio.run(get_price(weth(), usdc(), quoter))


def test_one_unit() -> None:
    assert one_unit(0) == 1
    assert one_unit(6) == 1_000_000
    assert one_unit(77) == 10**77
    assert one_unit(78) is None
    assert one_unit(-1) is None


def test_concurrent_quotes_are_independent() -> None:
    quoter = StubQuoter(amount_out=42)

    async def quote_both() -> list[int]:
        return await asyncio.gather(get_price(weth(), usdc(), quoter), get_price(usdc(), weth(), quoter))

    assert asyncio.run(quote_both()) == [42, 42]
    assert len(quoter.calls) == 2
