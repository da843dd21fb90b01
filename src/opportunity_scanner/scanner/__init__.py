"""Opportunity scoring and aggregation."""

from .aggregator import OpportunityAggregator, deduplicate, rank
from .models import MarketMetrics
from .scoring import score_boosted_pair, score_trending_pool

__all__ = [
    "OpportunityAggregator",
    "MarketMetrics",
    "deduplicate",
    "rank",
    "score_boosted_pair",
    "score_trending_pool",
]
