"""Aggregates source adapters into one ranked, deduplicated opportunity list."""

import asyncio
import logging
from typing import Dict, List, Optional, Sequence

from ..core.enums import DedupPolicy
from ..core.models import Candidate, ScanResult
from ..data.connector import AdapterOutcome, SourceAdapter
from ..data.dexscreener import BoostedTokensAdapter
from ..data.geckoterminal import TrendingPoolsAdapter

logger = logging.getLogger(__name__)


def deduplicate(
    candidates: Sequence[Candidate],
    policy: DedupPolicy = DedupPolicy.FIRST_SEEN,
) -> List[Candidate]:
    """
    Collapse candidates sharing a mint.

    FIRST_SEEN keeps the earliest candidate regardless of score.
    HIGHEST_SCORE keeps the best-scored one (earliest on ties), in the
    position where the mint was first seen.
    """
    kept: Dict[str, Candidate] = {}
    for candidate in candidates:
        current = kept.get(candidate.mint)
        if current is None:
            kept[candidate.mint] = candidate
        elif policy == DedupPolicy.HIGHEST_SCORE and candidate.score > current.score:
            kept[candidate.mint] = candidate
    return list(kept.values())


def rank(candidates: Sequence[Candidate], max_results: int) -> List[Candidate]:
    """Sort by score descending and keep the top *max_results*."""
    return sorted(candidates, key=lambda c: c.score, reverse=True)[:max_results]


class OpportunityAggregator:
    """
    Runs every source adapter for a scan, merges what they return, drops
    duplicate mints and returns the best-scored slice.

    A failing adapter contributes nothing; it never cancels its siblings
    or fails the scan.
    """

    def __init__(
        self,
        config: Optional[Dict] = None,
        adapters: Optional[List[SourceAdapter]] = None,
    ):
        defaults = self._default_config()
        if config:
            for key, val in config.items():
                if isinstance(val, dict) and key in defaults and isinstance(defaults[key], dict):
                    merged = dict(defaults[key])
                    for sub_key, sub_val in val.items():
                        if isinstance(sub_val, dict) and isinstance(merged.get(sub_key), dict):
                            merged[sub_key] = {**merged[sub_key], **sub_val}
                        else:
                            merged[sub_key] = sub_val
                    defaults[key] = merged
                else:
                    defaults[key] = val
        self.config = defaults
        self.dedup_policy = DedupPolicy(self.config['dedup_policy'])
        self.adapters = adapters if adapters is not None else self._build_adapters()
        logger.info(
            f"Opportunity aggregator initialized with {len(self.adapters)} sources "
            f"(dedup: {self.dedup_policy.value})"
        )

    @staticmethod
    def _default_config() -> Dict:
        return {
            'chain': 'solana',
            'max_results': 5,
            'dedup_policy': DedupPolicy.FIRST_SEEN.value,
            'scan_timeout_seconds': 30.0,
            'blacklist': [],
            # invocation order decides which duplicate wins under first_seen
            'sources': {
                'dexscreener': {
                    'enabled': True,
                    'base_url': 'https://api.dexscreener.com',
                    'timeout': 10.0,
                    'max_concurrency': 10,
                },
                'geckoterminal': {
                    'enabled': True,
                    'base_url': 'https://api.geckoterminal.com/api/v2',
                    'timeout': 10.0,
                },
            },
        }

    def _build_adapters(self) -> List[SourceAdapter]:
        factories = {
            'dexscreener': BoostedTokensAdapter,
            'geckoterminal': TrendingPoolsAdapter,
        }
        adapters: List[SourceAdapter] = []
        for name, source_cfg in self.config['sources'].items():
            if name not in factories:
                logger.warning(f"Unknown source '{name}' in config, ignoring")
                continue
            if not source_cfg.get('enabled', True):
                logger.info(f"Source '{name}' disabled")
                continue
            adapters.append(factories[name](config=source_cfg))
        return adapters

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def scan(self, chain: Optional[str] = None, max_results: Optional[int] = None) -> ScanResult:
        """
        Run one scan.

        Never raises: partial provider outages just shrink the result, and
        anything unexpected comes back as a failed ScanResult with a reason.
        """
        chain = chain or self.config['chain']
        max_results = self.config['max_results'] if max_results is None else max_results

        if isinstance(max_results, bool) or not isinstance(max_results, int) or max_results < 1:
            return ScanResult.failure(f"max_results must be a positive integer, got {max_results!r}")

        timeout = self.config.get('scan_timeout_seconds')
        try:
            if timeout:
                opportunities = await asyncio.wait_for(self._run(chain, max_results), timeout)
            else:
                opportunities = await self._run(chain, max_results)
        except asyncio.TimeoutError:
            logger.error(f"Scan on {chain} timed out after {timeout}s")
            return ScanResult.failure(f"Scan timed out after {timeout}s")
        except Exception as e:
            logger.error(f"Scan on {chain} failed: {e}", exc_info=True)
            return ScanResult.failure(str(e) or type(e).__name__)

        return ScanResult(success=True, opportunities=opportunities)

    async def close(self):
        """Close every adapter's HTTP session."""
        for adapter in self.adapters:
            await adapter.close()

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    async def _run(self, chain: str, max_results: int) -> List[Candidate]:
        outcomes = await self._collect(chain, max_results)

        blacklist = set(self.config.get('blacklist') or [])
        merged = [
            c
            for outcome in outcomes
            for c in outcome.candidates
            if c.mint not in blacklist
        ]
        unique = deduplicate(merged, self.dedup_policy)
        ranked = rank(unique, max_results)

        summary = ", ".join(
            f"{o.source.value}={len(o.candidates)}" + (f" ({len(o.errors)} errors)" if o.errors else "")
            for o in outcomes
        )
        logger.info(
            f"Scan on {chain}: {summary or 'no sources'}; "
            f"{len(unique)} unique, returning {len(ranked)}"
        )
        return ranked

    async def _collect(self, chain: str, max_results: int) -> List[AdapterOutcome]:
        """Invoke all adapters concurrently; an adapter that raises yields an empty outcome."""
        results = await asyncio.gather(
            *(adapter.fetch(chain, max_results) for adapter in self.adapters),
            return_exceptions=True,
        )

        outcomes: List[AdapterOutcome] = []
        for adapter, result in zip(self.adapters, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                outcome = AdapterOutcome(source=adapter.source)
                outcome.record_error(f"adapter raised {type(result).__name__}: {result}")
                outcomes.append(outcome)
            else:
                outcomes.append(result)
        return outcomes
