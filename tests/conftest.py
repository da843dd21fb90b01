"""Pytest configuration and fixtures."""

import pytest

from opportunity_scanner.core.enums import CandidateSource
from opportunity_scanner.core.models import Candidate, PriceChange


def make_pair(
    symbol="PUMP",
    price="0.0042",
    m5=5.0, h1=10.0, h6=12.0, h24=20.0,
    volume=150_000.0,
    liquidity=50_000.0,
    fdv=300_000.0,
    buys=120, sells=80,
):
    """A DexScreener pair object."""
    return {
        "chainId": "solana",
        "baseToken": {"symbol": symbol},
        "priceUsd": price,
        "priceChange": {"m5": m5, "h1": h1, "h6": h6, "h24": h24},
        "volume": {"h24": volume},
        "liquidity": {"usd": liquidity},
        "fdv": fdv,
        "txns": {"h24": {"buys": buys, "sells": sells}},
    }


def make_pool(
    address="So1TrendMint111111111111111111111111111111",
    network="solana",
    name="TREND / SOL",
    price="0.15",
    m5="1.2", h1="10", h6="20", h24="35",
    volume="100000",
    reserve="40000",
):
    """A GeckoTerminal trending pool object (numbers as strings, as served)."""
    return {
        "id": f"{network}_pool_{address[:8]}",
        "type": "pool",
        "attributes": {
            "name": name,
            "base_token_price_usd": price,
            "price_change_percentage": {"m5": m5, "h1": h1, "h6": h6, "h24": h24},
            "volume_usd": {"h24": volume},
            "reserve_in_usd": reserve,
        },
        "relationships": {
            "base_token": {"data": {"id": f"{network}_{address}", "type": "token"}},
        },
    }


@pytest.fixture
def sample_pair():
    """Pair matching the reference scoring scenario (score 115)."""
    return make_pair()


@pytest.fixture
def sample_pool():
    return make_pool()


@pytest.fixture
def candidate_factory():
    """Build candidates with just the fields a test cares about."""
    def _make(mint, score, source=CandidateSource.DEXSCREENER_BOOSTED, symbol=None):
        return Candidate(
            mint=mint,
            symbol=symbol or mint[:4].upper(),
            price_usd=1.0,
            price_change=PriceChange(),
            volume_24h=0.0,
            liquidity=0.0,
            fdv=0.0,
            source=source,
            score=score,
        )
    return _make


@pytest.fixture
def pair_factory():
    return make_pair


@pytest.fixture
def pool_factory():
    return make_pool
