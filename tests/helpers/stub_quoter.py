from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class QuoterCall:
    token_in: str
    token_out: str
    fee_tier: int
    amount_in: int
    min_amount_out: int


class StubQuoter:
    """Quoter double returning a fixed amount, or raising ``error`` when set."""

    def __init__(self, amount_out: object = 0, *, error: Exception | None = None) -> None:
        self.amount_out = amount_out
        self.error = error
        self.calls: list[QuoterCall] = []

    async def quote_exact_input_single(
        self,
        token_in: str,
        token_out: str,
        fee_tier: int,
        amount_in: int,
        min_amount_out: int,
    ) -> int:
        self.calls.append(QuoterCall(token_in, token_out, fee_tier, amount_in, min_amount_out))
        if self.error is not None:
            raise self.error
        return self.amount_out  # type: ignore[return-value]
