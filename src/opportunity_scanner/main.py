"""One-shot opportunity scan."""

import asyncio
import json
import logging
import os
import sys
from typing import Dict, Optional

from dotenv import load_dotenv
import pandas as pd

from .core.enums import DedupPolicy
from .core.models import ScanResult
from .scanner.aggregator import OpportunityAggregator

logger = logging.getLogger(__name__)

_TRUE = ('1', 'true', 'yes')
_FALSE = ('0', 'false', 'no')


def setup_logging(level: Optional[str] = None):
    """Configure root logging to stdout."""
    level_name = (level or os.getenv('SCANNER_LOG_LEVEL', 'INFO')).strip().upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _config_from_env() -> Dict:
    """Build config dict from environment variables."""
    config: Dict = {}

    chain = os.getenv('SCANNER_CHAIN', '').strip()
    if chain:
        config['chain'] = chain

    max_results = os.getenv('SCANNER_MAX_RESULTS', '').strip()
    if max_results:
        config['max_results'] = int(max_results)

    dedup_policy = os.getenv('SCANNER_DEDUP_POLICY', '').strip().lower()
    if dedup_policy:
        config['dedup_policy'] = DedupPolicy(dedup_policy).value

    timeout = os.getenv('SCANNER_TIMEOUT_SECONDS', '').strip()
    if timeout:
        config['scan_timeout_seconds'] = float(timeout)

    blacklist = os.getenv('SCANNER_BLACKLIST', '').strip()
    if blacklist:
        config['blacklist'] = [s.strip() for s in blacklist.split(',') if s.strip()]

    # Sources
    http_timeout = os.getenv('HTTP_TIMEOUT_SECONDS', '').strip()
    sources: Dict = {}
    for name in ('dexscreener', 'geckoterminal'):
        prefix = name.upper()
        source_cfg: Dict = {}
        enabled = os.getenv(f'{prefix}_ENABLED', '').strip().lower()
        if enabled in _FALSE:
            source_cfg['enabled'] = False
        elif enabled in _TRUE:
            source_cfg['enabled'] = True
        base_url = os.getenv(f'{prefix}_BASE_URL', '').strip()
        if base_url:
            source_cfg['base_url'] = base_url
        if http_timeout:
            source_cfg['timeout'] = float(http_timeout)
        if source_cfg:
            sources[name] = source_cfg
    if sources:
        config['sources'] = sources

    return config


def render(result: ScanResult) -> str:
    """Human-readable table of a scan result."""
    if not result.success:
        return f"Scan failed: {result.error}"
    if not result.count:
        return "No opportunities found"
    df = result.to_dataframe().set_index('rank')
    with pd.option_context('display.width', 200, 'display.max_columns', None):
        return df.to_string(float_format=lambda v: f"{v:,.6g}")


async def main() -> int:
    """Main entry point."""
    load_dotenv()
    setup_logging()

    aggregator = OpportunityAggregator(_config_from_env())
    try:
        result = await aggregator.scan()
    finally:
        await aggregator.close()

    print(render(result))
    print(json.dumps(result.to_dict(), indent=2))
    return 0 if result.success else 1


def run():
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
