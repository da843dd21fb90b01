"""Models for the opportunity scorer."""

from dataclasses import dataclass

from ..core.models import PriceChange


@dataclass(frozen=True)
class MarketMetrics:
    """Normalized market metrics for one token, as consumed by the scorers."""

    price_usd: float = 0.0
    m5: float = 0.0
    h1: float = 0.0
    h6: float = 0.0
    h24: float = 0.0
    volume_24h: float = 0.0
    liquidity: float = 0.0
    fdv: float = 0.0
    buys_24h: float = 0.0
    sells_24h: float = 0.0

    @property
    def price_change(self) -> PriceChange:
        return PriceChange(m5=self.m5, h1=self.h1, h6=self.h6, h24=self.h24)

    @property
    def volume_liquidity_ratio(self) -> float:
        return self.volume_24h / max(self.liquidity, 1.0)

    @property
    def buy_sell_ratio(self) -> float:
        return self.buys_24h / max(self.sells_24h, 1.0)
