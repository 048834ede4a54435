from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

from web3 import AsyncWeb3, Web3

logger = logging.getLogger(__name__)

# Uniswap V3 QuoterV1, deployed at the same address on mainnet, goerli and arbitrum.
UNISWAP_V3_QUOTER_ADDRESS = "0xb27308f9F90D607463bb33eA1BeBb41C27CE5AB6"

QUOTER_ABI: list[dict[str, Any]] = [
    {
        "inputs": [
            {"internalType": "address", "name": "tokenIn", "type": "address"},
            {"internalType": "address", "name": "tokenOut", "type": "address"},
            {"internalType": "uint24", "name": "fee", "type": "uint24"},
            {"internalType": "uint256", "name": "amountIn", "type": "uint256"},
            {"internalType": "uint160", "name": "sqrtPriceLimitX96", "type": "uint160"},
        ],
        "name": "quoteExactInputSingle",
        "outputs": [{"internalType": "uint256", "name": "amountOut", "type": "uint256"}],
        "stateMutability": "nonpayable",
        "type": "function",
    }
]


class Quoter(Protocol):
    async def quote_exact_input_single(
        self,
        token_in: str,
        token_out: str,
        fee_tier: int,
        amount_in: int,
        min_amount_out: int,
    ) -> int: ...


class QuoterCallError(RuntimeError):
    def __init__(self, message: str, *, token_in: str | None = None, token_out: str | None = None) -> None:
        super().__init__(message)
        self.token_in = token_in
        self.token_out = token_out


class UniswapV3Quoter(Quoter):
    """Read-only client for the Uniswap V3 quoter contract.

    Calls are plain ``eth_call`` requests; nothing is signed or sent.
    """

    def __init__(
        self,
        *,
        rpc_url: str | None = None,
        quoter_address: str = UNISWAP_V3_QUOTER_ADDRESS,
        timeout: float = 10.0,
        w3: AsyncWeb3 | None = None,
    ) -> None:
        if w3 is None and not rpc_url:
            msg = "rpc_url must be provided when no web3 client is given"
            raise ValueError(msg)
        if timeout <= 0:
            msg = "timeout must be > 0"
            raise ValueError(msg)

        self.timeout = timeout
        self.quoter_address = Web3.to_checksum_address(quoter_address)
        self._w3 = w3 or AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
        self._contract = self._w3.eth.contract(address=self.quoter_address, abi=QUOTER_ABI)

    async def quote_exact_input_single(
        self,
        token_in: str,
        token_out: str,
        fee_tier: int,
        amount_in: int,
        min_amount_out: int,
    ) -> int:
        try:
            amount_out = await asyncio.wait_for(
                self._call(token_in, token_out, fee_tier, amount_in, min_amount_out),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            msg = f"quoteExactInputSingle timed out after {self.timeout}s"
            raise QuoterCallError(msg, token_in=token_in, token_out=token_out) from exc
        except Exception as exc:
            msg = f"quoteExactInputSingle failed: {exc}"
            raise QuoterCallError(msg, token_in=token_in, token_out=token_out) from exc

        logger.debug("Quoter %s returned %s for %s -> %s", self.quoter_address, amount_out, token_in, token_out)
        return amount_out

    async def _call(
        self,
        token_in: str,
        token_out: str,
        fee_tier: int,
        amount_in: int,
        min_amount_out: int,
    ) -> Any:
        # The contract's last argument is a sqrt price limit; zero disables it.
        function = self._contract.functions.quoteExactInputSingle(
            Web3.to_checksum_address(token_in),
            Web3.to_checksum_address(token_out),
            fee_tier,
            amount_in,
            min_amount_out,
        )
        return await function.call()


__all__ = ["QUOTER_ABI", "UNISWAP_V3_QUOTER_ADDRESS", "Quoter", "QuoterCallError", "UniswapV3Quoter"]
