from __future__ import annotations

from enum import IntEnum
from typing import Callable, Iterator, NewType

from pydantic import BaseModel, ConfigDict, Field, field_validator
from web3 import Web3

ChainId = NewType("ChainId", int)

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class Network(IntEnum):
    MAINNET = 0x1
    GOERLI = 0x5
    ARBITRUM_ONE = 0xA4B1


DEFAULT_NETWORK = Network.MAINNET


class UnsupportedNetworkError(LookupError):
    def __init__(self, network: int, token: str) -> None:
        super().__init__(f"unsupported chain {network} for {token}")
        self.network = network
        self.token = token


class Token(BaseModel):
    """A fungible asset on one network.

    The default instance is the empty sentinel: zero address, no symbol and
    zero decimals.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str = ""
    fallback_symbol: str = ""
    address: str = ZERO_ADDRESS
    decimals: int = Field(default=0, ge=0)

    @field_validator("address", mode="before")
    @classmethod
    def _validate_address(cls, value: object) -> str:
        # Casing is not treated as a checksum claim; the stored form is always EIP-55.
        if not isinstance(value, str) or value[:2].lower() != "0x" or not Web3.is_address(value.lower()):
            raise ValueError(f"{value!r} is not a valid account address")
        return Web3.to_checksum_address(value.lower())

    @property
    def is_empty(self) -> bool:
        return self == EMPTY_TOKEN


class TokenPair(BaseModel):
    """Ordered (base, quote) pair; unpacks and indexes like a 2-tuple."""

    model_config = ConfigDict(frozen=True)

    base: Token
    quote: Token

    def __iter__(self) -> Iterator[Token]:  # type: ignore[override]
        yield self.base
        yield self.quote

    def __getitem__(self, index: int) -> Token:
        return (self.base, self.quote)[index]

    def __len__(self) -> int:
        return 2


EMPTY_TOKEN = Token()

# symbol -> (fallback symbol, decimals, {chain id -> address})
_TOKEN_TABLE: dict[str, tuple[str, int, dict[int, str]]] = {
    "USDC": (
        "",
        6,
        {
            Network.MAINNET: "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
            Network.GOERLI: "0x07865c6E87B9F70255377e024ace6630C1Eaa37F",
            # native USDC, not the bridged USDC.e
            Network.ARBITRUM_ONE: "0xaf88d065e77c8cc2239327c5edb3a432268e5831",
        },
    ),
    "WETH": (
        "ETH/USD",
        18,
        {
            Network.MAINNET: "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
            Network.GOERLI: "0xb4fbf271143f4fbf7b91a5ded31805e42b2208d6",
            Network.ARBITRUM_ONE: "0x82af49447d8a07e3bd95bd0d56f35241523fbab1",
        },
    ),
}


def _build_registry() -> dict[tuple[str, int], Token]:
    registry: dict[tuple[str, int], Token] = {}
    for symbol, (fallback_symbol, decimals, addresses) in _TOKEN_TABLE.items():
        for network, address in addresses.items():
            registry[(symbol, int(network))] = Token(
                symbol=symbol,
                fallback_symbol=fallback_symbol,
                address=address,
                decimals=decimals,
            )
    return registry


_REGISTRY = _build_registry()


def resolve_network(network: int | None) -> ChainId:
    if network is None:
        return ChainId(int(DEFAULT_NETWORK))
    return ChainId(int(network))


def _known_token(symbol: str, network: int | None) -> Token:
    chain_id = resolve_network(network)
    token = _REGISTRY.get((symbol, chain_id))
    if token is None:
        raise UnsupportedNetworkError(chain_id, symbol)
    return token


def empty() -> Token:
    return EMPTY_TOKEN


def usdc(network: int | None = None) -> Token:
    return _known_token("USDC", network)


def weth(network: int | None = None) -> Token:
    return _known_token("WETH", network)


def usdc_weth_pair(network: int | None = None) -> TokenPair:
    return TokenPair(base=usdc(network), quote=weth(network))


_CONSTRUCTORS: dict[str, Callable[[int | None], Token]] = {
    "USDC": usdc,
    "WETH": weth,
}


def resolve_by_symbol(symbol: str, network: int | None = None) -> Token | None:
    """Return the token for ``symbol`` or ``None`` when the symbol is unknown.

    Matching is exact and case sensitive. A known symbol on a network without
    an address raises :class:`UnsupportedNetworkError`.
    """
    constructor = _CONSTRUCTORS.get(symbol)
    if constructor is None:
        return None
    return constructor(network)


def known_symbols() -> list[str]:
    return sorted(_CONSTRUCTORS)


def supported_networks(symbol: str) -> list[ChainId]:
    entry = _TOKEN_TABLE.get(symbol)
    if entry is None:
        return []
    return sorted(ChainId(int(network)) for network in entry[2])


__all__ = [
    "DEFAULT_NETWORK",
    "EMPTY_TOKEN",
    "ZERO_ADDRESS",
    "ChainId",
    "Network",
    "Token",
    "TokenPair",
    "UnsupportedNetworkError",
    "empty",
    "known_symbols",
    "resolve_by_symbol",
    "resolve_network",
    "supported_networks",
    "usdc",
    "usdc_weth_pair",
    "weth",
]
