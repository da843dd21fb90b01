"""
Momentum opportunity scanner for newly listed tokens.

Pulls boosted tokens and trending pools from public market data
providers, scores each candidate with deterministic momentum/risk
heuristics and returns a ranked, deduplicated shortlist.
"""

__version__ = "0.1.0"
__author__ = "Trade Bot Team"

from .core.models import Candidate, PriceChange, ScanResult
from .core.enums import CandidateSource, DedupPolicy
from .scanner.aggregator import OpportunityAggregator
from .scanner.scoring import score_boosted_pair, score_trending_pool

__all__ = [
    "Candidate",
    "PriceChange",
    "ScanResult",
    "CandidateSource",
    "DedupPolicy",
    "OpportunityAggregator",
    "score_boosted_pair",
    "score_trending_pool",
]
