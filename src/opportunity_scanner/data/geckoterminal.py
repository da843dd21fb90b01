"""GeckoTerminal trending-pools adapter."""

from typing import Any, Dict, Optional
import logging

from pydantic import ValidationError

from ..core.enums import CandidateSource
from ..core.models import Candidate
from ..scanner.models import MarketMetrics
from ..scanner.scoring import score_trending_pool
from .connector import (
    AdapterOutcome, ProviderClient, ProviderError, SourceAdapter,
    nested, to_float, to_non_negative,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.geckoterminal.com/api/v2"
TRENDING_PATH = "/networks/{network}/trending_pools"

# Addresses shorter than this come from malformed relationship ids
MIN_ADDRESS_LENGTH = 10

NETWORK_MAP = {
    'ethereum': 'eth',
    'eth': 'eth',
}


def network_id(chain: str) -> str:
    """Map a chain name to the GeckoTerminal network id."""
    chain = chain.strip().lower()
    return NETWORK_MAP.get(chain, chain)


def base_token_address(relationship_id: str, network: str) -> str:
    """Strip the ``<network>_`` prefix from a relationship id."""
    prefix = f"{network}_"
    if relationship_id.startswith(prefix):
        return relationship_id[len(prefix):]
    return relationship_id


class TrendingPoolsAdapter(SourceAdapter):
    """
    Trending pools for a network.

    The response embeds the base-token relationship, so no per-item lookup
    is needed. Pools whose base-token address looks malformed are dropped.
    """

    source = CandidateSource.GECKOTERMINAL_TRENDING

    def __init__(self, client: Optional[ProviderClient] = None, config: Optional[Dict] = None):
        config = config or {}
        client = client or ProviderClient(
            config.get('base_url', DEFAULT_BASE_URL),
            timeout=config.get('timeout', 10.0),
        )
        super().__init__(client, config)

    async def fetch(self, chain: str, limit: int) -> AdapterOutcome:
        outcome = AdapterOutcome(source=self.source)
        network = network_id(chain)

        try:
            payload = await self.client.get_json(
                TRENDING_PATH.format(network=network),
                params={'include': 'base_token'},
            )
        except ProviderError as e:
            outcome.record_error(f"trending request failed: {e}")
            return outcome

        pools = nested(payload, 'data')
        if not isinstance(pools, list):
            outcome.record_error("trending payload has no data list")
            return outcome

        for pool in pools[:limit]:
            try:
                candidate = self.build_candidate(pool, network)
            except (ValidationError, TypeError, ValueError, AttributeError) as e:
                outcome.record_error(f"could not map trending pool: {e}")
                continue
            if candidate is not None:
                outcome.candidates.append(candidate)

        logger.debug(
            f"Trending adapter: {len(outcome.candidates)}/{min(len(pools), limit)} pools mapped on {network}"
        )
        return outcome

    @staticmethod
    def pool_metrics(attributes: Dict[str, Any]) -> MarketMetrics:
        """Extract scorer inputs from pool attributes, defaulting to 0."""
        return MarketMetrics(
            price_usd=to_non_negative(attributes.get('base_token_price_usd')),
            m5=to_float(nested(attributes, 'price_change_percentage', 'm5')),
            h1=to_float(nested(attributes, 'price_change_percentage', 'h1')),
            h6=to_float(nested(attributes, 'price_change_percentage', 'h6')),
            h24=to_float(nested(attributes, 'price_change_percentage', 'h24')),
            volume_24h=to_non_negative(nested(attributes, 'volume_usd', 'h24')),
            liquidity=to_non_negative(attributes.get('reserve_in_usd')),
        )

    def build_candidate(self, pool: Dict[str, Any], network: str) -> Optional[Candidate]:
        """Map one pool, or None if its base-token address is unusable."""
        if not isinstance(pool, dict):
            raise TypeError(f"pool entry is {type(pool).__name__}, expected object")

        relationship_id = nested(pool, 'relationships', 'base_token', 'data', 'id')
        if not isinstance(relationship_id, str):
            logger.debug("Trending pool without base token relationship, skipping")
            return None
        address = base_token_address(relationship_id.strip(), network)
        if len(address) < MIN_ADDRESS_LENGTH:
            logger.debug(f"Implausible base token address {address!r}, skipping")
            return None

        attributes = pool.get('attributes') or {}
        metrics = self.pool_metrics(attributes)
        name = attributes.get('name')
        symbol = name.split('/')[0].strip() if isinstance(name, str) else ""

        return Candidate(
            mint=address,
            symbol=symbol or "Unknown",
            price_usd=metrics.price_usd,
            price_change=metrics.price_change,
            volume_24h=metrics.volume_24h,
            liquidity=metrics.liquidity,
            fdv=0.0,
            source=self.source,
            score=score_trending_pool(metrics),
        )
