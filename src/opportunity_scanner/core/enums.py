"""Core enumerations for the opportunity scanner."""

from enum import Enum


class CandidateSource(str, Enum):
    """Provenance tags for candidates."""
    DEXSCREENER_BOOSTED = "dexscreener-boosted"
    GECKOTERMINAL_TRENDING = "geckoterminal-trending"


class DedupPolicy(str, Enum):
    """How duplicate mints across sources are resolved."""
    FIRST_SEEN = "first_seen"
    HIGHEST_SCORE = "highest_score"
