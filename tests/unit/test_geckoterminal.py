"""Unit tests for the GeckoTerminal trending-pools adapter."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from opportunity_scanner.core.enums import CandidateSource
from opportunity_scanner.data.connector import ProviderClient, ProviderError
from opportunity_scanner.data.geckoterminal import (
    TrendingPoolsAdapter, base_token_address, network_id,
)

TREND_MINT = "So1TrendMint111111111111111111111111111111"


def _client(payload):
    client = MagicMock(spec=ProviderClient)
    if isinstance(payload, Exception):
        client.get_json = AsyncMock(side_effect=payload)
    else:
        client.get_json = AsyncMock(return_value=payload)
    return client


class TestHelpers:
    @pytest.mark.parametrize("chain,expected", [
        ("solana", "solana"),
        ("Solana", "solana"),
        ("ethereum", "eth"),
        ("eth", "eth"),
        ("base", "base"),
    ])
    def test_network_id(self, chain, expected):
        assert network_id(chain) == expected

    def test_base_token_address(self):
        assert base_token_address(f"solana_{TREND_MINT}", "solana") == TREND_MINT
        assert base_token_address("eth_0xabc0000000", "eth") == "0xabc0000000"
        # other prefixes are left alone
        assert base_token_address(f"base_{TREND_MINT}", "solana") == f"base_{TREND_MINT}"


class TestTrendingPoolsAdapter:
    @pytest.mark.asyncio
    async def test_maps_pool(self, sample_pool):
        client = _client({"data": [sample_pool], "included": []})
        outcome = await TrendingPoolsAdapter(client).fetch("solana", 5)

        client.get_json.assert_awaited_once_with(
            "/networks/solana/trending_pools", params={"include": "base_token"},
        )
        assert outcome.ok
        c = outcome.candidates[0]
        assert c.mint == TREND_MINT
        assert c.symbol == "TREND"
        assert c.price_usd == pytest.approx(0.15)
        assert c.price_change.h1 == 10.0
        assert c.price_change.h24 == 35.0
        assert c.volume_24h == 100_000
        assert c.liquidity == 40_000
        assert c.fdv == 0.0
        assert c.source == CandidateSource.GECKOTERMINAL_TRENDING
        assert c.score == 70

    @pytest.mark.asyncio
    async def test_ethereum_uses_eth_network(self, pool_factory):
        pool = pool_factory(address="0x2222222222222222222222222222222222222222", network="eth")
        client = _client({"data": [pool]})
        outcome = await TrendingPoolsAdapter(client).fetch("ethereum", 5)

        assert client.get_json.await_args.args[0] == "/networks/eth/trending_pools"
        assert outcome.candidates[0].mint == "0x2222222222222222222222222222222222222222"

    @pytest.mark.asyncio
    async def test_discards_short_addresses(self, pool_factory):
        pools = [
            pool_factory(address="short"),
            pool_factory(address="abcdefghi"),     # 9 chars
            pool_factory(address="abcdefghij"),    # 10 chars
            pool_factory(address=TREND_MINT),
        ]
        outcome = await TrendingPoolsAdapter(_client({"data": pools})).fetch("solana", 10)
        assert [c.mint for c in outcome.candidates] == ["abcdefghij", TREND_MINT]
        assert outcome.ok

    @pytest.mark.asyncio
    async def test_missing_relationship_is_skipped(self, sample_pool):
        broken = {"attributes": sample_pool["attributes"], "relationships": {}}
        outcome = await TrendingPoolsAdapter(_client({"data": [broken, sample_pool]})).fetch("solana", 5)
        assert [c.mint for c in outcome.candidates] == [TREND_MINT]

    @pytest.mark.asyncio
    async def test_limit_applies_before_filtering(self, pool_factory):
        pools = [pool_factory(address=f"Mint{i:040d}") for i in range(8)]
        outcome = await TrendingPoolsAdapter(_client({"data": pools})).fetch("solana", 3)
        assert [c.mint for c in outcome.candidates] == [f"Mint{i:040d}" for i in range(3)]

    @pytest.mark.asyncio
    async def test_missing_attributes_default(self, sample_pool):
        pool = {"relationships": sample_pool["relationships"]}
        outcome = await TrendingPoolsAdapter(_client({"data": [pool]})).fetch("solana", 5)

        c = outcome.candidates[0]
        assert c.symbol == "Unknown"
        assert c.price_usd == 0.0
        assert c.liquidity == 0.0
        # trending bonus minus thin liquidity
        assert c.score == 0.0

    @pytest.mark.asyncio
    async def test_malformed_pool_is_recorded(self, sample_pool):
        outcome = await TrendingPoolsAdapter(_client({"data": [42, sample_pool]})).fetch("solana", 5)
        assert [c.mint for c in outcome.candidates] == [TREND_MINT]
        assert len(outcome.errors) == 1

    @pytest.mark.asyncio
    async def test_request_failure_returns_empty(self):
        client = _client(ProviderError("https://api.geckoterminal.com/api/v2/networks/solana/trending_pools", "HTTP 429"))
        outcome = await TrendingPoolsAdapter(client).fetch("solana", 5)
        assert outcome.candidates == []
        assert "HTTP 429" in outcome.errors[0]

    @pytest.mark.asyncio
    async def test_payload_without_data(self):
        outcome = await TrendingPoolsAdapter(_client({"errors": [{"status": "404"}]})).fetch("solana", 5)
        assert outcome.candidates == []
        assert not outcome.ok
