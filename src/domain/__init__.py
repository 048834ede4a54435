"""Domain types for token identities.

Tokens and pairs are immutable pydantic values resolved from a static
per-network address table; nothing in this package performs I/O.
"""

__all__ = [
    "tokens",
]
