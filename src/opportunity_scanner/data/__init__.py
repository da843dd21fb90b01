"""Market data providers."""

from .connector import ProviderClient, ProviderError, SourceAdapter, AdapterOutcome
from .dexscreener import BoostedTokensAdapter
from .geckoterminal import TrendingPoolsAdapter

__all__ = [
    "ProviderClient",
    "ProviderError",
    "SourceAdapter",
    "AdapterOutcome",
    "BoostedTokensAdapter",
    "TrendingPoolsAdapter",
]
