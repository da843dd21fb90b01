"""Opportunity scoring heuristics.

Two pure scorers, one per provider schema. Both start at zero, add
weighted momentum and activity contributions, subtract penalties for
deterioration signals and floor the total at zero.

Momentum is only rewarded inside an upper window (m5 below 15%, h1 below
30%, h6 below 50%): larger moves count as already happened.
"""

from .models import MarketMetrics

# Valuation bands for the early-stage bonus, (upper bound, points)
FDV_BANDS = (
    (500_000, 30.0),
    (2_000_000, 20.0),
    (10_000_000, 10.0),
)

MIN_LIQUIDITY_USD = 15_000


def _early_stage_bonus(fdv: float) -> float:
    if fdv <= 0:
        return 0.0
    for upper, points in FDV_BANDS:
        if fdv < upper:
            return points
    return 0.0


def score_boosted_pair(metrics: MarketMetrics) -> float:
    """Score a boosted-token pair that carries the full metric set."""
    score = _early_stage_bonus(metrics.fdv)

    # Momentum
    if 0 < metrics.m5 < 15:
        score += metrics.m5 * 3
    if 0 < metrics.h1 < 30:
        score += metrics.h1 * 2
    if metrics.h1 > 5 and metrics.m5 > 0:
        score += 15

    # Volume / liquidity
    vol_liq_ratio = metrics.volume_liquidity_ratio
    if vol_liq_ratio > 2:
        score += 20
    if vol_liq_ratio > 5:
        score += 15

    # Buy pressure
    buy_ratio = metrics.buy_sell_ratio
    if buy_ratio > 1.3:
        score += 15
    if buy_ratio > 2:
        score += 10

    # Penalties
    if metrics.m5 > 30:
        score -= 25  # already pumped
    if metrics.h1 < -15:
        score -= 20  # dumping
    if metrics.h24 < -40:
        score -= 20  # dead
    if metrics.liquidity < MIN_LIQUIDITY_USD:
        score -= 10  # too thin
    if buy_ratio < 0.5:
        score -= 15  # sell pressure

    return max(0.0, score)


def score_trending_pool(metrics: MarketMetrics) -> float:
    """Score a trending pool. No fdv or transaction counts are available."""
    score = 0.0

    if 0 < metrics.h1 < 30:
        score += metrics.h1 * 2
    if 0 < metrics.h6 < 50:
        score += metrics.h6

    if metrics.volume_liquidity_ratio > 2:
        score += 20

    # Being on the trending list is itself a signal
    score += 10

    if metrics.h1 < -15:
        score -= 20
    if metrics.liquidity < MIN_LIQUIDITY_USD:
        score -= 10

    return max(0.0, score)
