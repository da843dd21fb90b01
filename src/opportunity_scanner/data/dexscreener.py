"""DexScreener boosted-token adapter."""

from typing import Any, Dict, List, Optional
import asyncio
import logging

from pydantic import ValidationError

from ..core.enums import CandidateSource
from ..core.models import Candidate
from ..scanner.models import MarketMetrics
from ..scanner.scoring import score_boosted_pair
from .connector import (
    AdapterOutcome, ProviderClient, ProviderError, SourceAdapter,
    nested, to_float, to_non_negative,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.dexscreener.com"
BOOSTS_PATH = "/token-boosts/latest/v1"
TOKEN_PAIRS_PATH = "/latest/dex/tokens/{address}"


class BoostedTokensAdapter(SourceAdapter):
    """
    Recently boosted (promoted) tokens.

    Fetches the latest boosts, keeps the ones on the requested chain, then
    looks up each token's pairs and scores the first pair as representative.
    """

    source = CandidateSource.DEXSCREENER_BOOSTED

    def __init__(self, client: Optional[ProviderClient] = None, config: Optional[Dict] = None):
        config = config or {}
        client = client or ProviderClient(
            config.get('base_url', DEFAULT_BASE_URL),
            timeout=config.get('timeout', 10.0),
        )
        super().__init__(client, config)
        self.max_concurrency = int(config.get('max_concurrency', 10))

    async def fetch(self, chain: str, limit: int) -> AdapterOutcome:
        outcome = AdapterOutcome(source=self.source)

        try:
            boosts = await self.client.get_json(BOOSTS_PATH)
        except ProviderError as e:
            outcome.record_error(f"boosts request failed: {e}")
            return outcome

        if not isinstance(boosts, list):
            outcome.record_error(f"unexpected boosts payload: {type(boosts).__name__}")
            return outcome

        addresses = self._select_addresses(boosts, chain, limit)
        if not addresses:
            logger.debug(f"No boosted tokens on {chain}")
            return outcome

        semaphore = asyncio.Semaphore(max(1, min(limit, self.max_concurrency)))

        async def lookup(address: str) -> Optional[Candidate]:
            async with semaphore:
                return await self._fetch_candidate(address, outcome)

        results = await asyncio.gather(*(lookup(a) for a in addresses), return_exceptions=True)
        for address, result in zip(addresses, results):
            if isinstance(result, Exception):
                outcome.record_error(f"pair lookup for {address} raised {type(result).__name__}: {result}")
            elif isinstance(result, BaseException):
                raise result
            elif result is not None:
                outcome.candidates.append(result)

        logger.debug(
            f"Boosted adapter: {len(outcome.candidates)}/{len(addresses)} tokens mapped on {chain}"
        )
        return outcome

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _select_addresses(self, boosts: List[Any], chain: str, limit: int) -> List[str]:
        """Token addresses on *chain*, feed order, duplicates collapsed."""
        seen = set()
        addresses: List[str] = []
        for entry in boosts:
            if not isinstance(entry, dict) or entry.get('chainId') != chain:
                continue
            address = entry.get('tokenAddress')
            if not isinstance(address, str) or not address.strip():
                continue
            address = address.strip()
            if address in seen:
                continue
            seen.add(address)
            addresses.append(address)
            if len(addresses) >= limit:
                break
        return addresses

    async def _fetch_candidate(self, address: str, outcome: AdapterOutcome) -> Optional[Candidate]:
        try:
            data = await self.client.get_json(TOKEN_PAIRS_PATH.format(address=address))
        except ProviderError as e:
            outcome.record_error(f"pair lookup failed for {address}: {e}")
            return None

        pairs = nested(data, 'pairs')
        if not isinstance(pairs, list) or not pairs:
            logger.debug(f"No pairs for boosted token {address}, skipping")
            return None

        try:
            return self.build_candidate(address, pairs[0])
        except (ValidationError, TypeError, ValueError, AttributeError) as e:
            outcome.record_error(f"could not map pair for {address}: {e}")
            return None

    @staticmethod
    def pair_metrics(pair: Dict[str, Any]) -> MarketMetrics:
        """Extract scorer inputs from a DexScreener pair, defaulting to 0."""
        return MarketMetrics(
            price_usd=to_non_negative(pair.get('priceUsd')),
            m5=to_float(nested(pair, 'priceChange', 'm5')),
            h1=to_float(nested(pair, 'priceChange', 'h1')),
            h6=to_float(nested(pair, 'priceChange', 'h6')),
            h24=to_float(nested(pair, 'priceChange', 'h24')),
            volume_24h=to_non_negative(nested(pair, 'volume', 'h24')),
            liquidity=to_non_negative(nested(pair, 'liquidity', 'usd')),
            fdv=to_non_negative(pair.get('fdv')),
            buys_24h=to_non_negative(nested(pair, 'txns', 'h24', 'buys')),
            sells_24h=to_non_negative(nested(pair, 'txns', 'h24', 'sells')),
        )

    def build_candidate(self, address: str, pair: Dict[str, Any]) -> Candidate:
        if not isinstance(pair, dict):
            raise TypeError(f"pair entry is {type(pair).__name__}, expected object")
        metrics = self.pair_metrics(pair)
        symbol = nested(pair, 'baseToken', 'symbol')
        return Candidate(
            mint=address,
            symbol=symbol.strip() if isinstance(symbol, str) and symbol.strip() else "Unknown",
            price_usd=metrics.price_usd,
            price_change=metrics.price_change,
            volume_24h=metrics.volume_24h,
            liquidity=metrics.liquidity,
            fdv=metrics.fdv,
            source=self.source,
            score=score_boosted_pair(metrics),
        )
