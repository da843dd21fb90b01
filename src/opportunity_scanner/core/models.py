"""Core data models for the opportunity scanner."""

from typing import Optional, List, Dict, Any

from pydantic import BaseModel, Field, validator
import pandas as pd

from .enums import CandidateSource


class PriceChange(BaseModel):
    """Percent price change over each window."""

    m5: float = Field(default=0.0, description="5 minute change %")
    h1: float = Field(default=0.0, description="1 hour change %")
    h6: float = Field(default=0.0, description="6 hour change %")
    h24: float = Field(default=0.0, description="24 hour change %")

    class Config:
        frozen = True


class Candidate(BaseModel):
    """A prospective trading opportunity, identified by its token mint."""

    mint: str = Field(min_length=1, description="Token mint / contract address")
    symbol: str = Field(default="Unknown", description="Display symbol")
    price_usd: float = Field(default=0.0, ge=0.0, description="Current price in USD")
    price_change: PriceChange = Field(default_factory=PriceChange, description="Price change per window")
    volume_24h: float = Field(default=0.0, ge=0.0, description="Trailing 24h USD volume")
    liquidity: float = Field(default=0.0, ge=0.0, description="Pooled liquidity in USD")
    fdv: float = Field(default=0.0, ge=0.0, description="Fully diluted valuation, 0 if unknown")
    source: CandidateSource = Field(description="Provider that produced this candidate")
    score: float = Field(ge=0.0, description="Opportunity score")

    class Config:
        frozen = True

    @validator('mint')
    def validate_mint(cls, v):
        if not v.strip():
            raise ValueError("mint must not be blank")
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Render with the wire field names."""
        return {
            'mint': self.mint,
            'symbol': self.symbol,
            'priceUsd': self.price_usd,
            'priceChange': {
                'm5': self.price_change.m5,
                'h1': self.price_change.h1,
                'h6': self.price_change.h6,
                'h24': self.price_change.h24,
            },
            'volume24h': self.volume_24h,
            'liquidity': self.liquidity,
            'fdv': self.fdv,
            'source': self.source.value,
            'score': self.score,
        }


class ScanResult(BaseModel):
    """Outcome of one scan invocation."""

    success: bool = Field(default=True, description="False only for unexpected internal faults")
    opportunities: List[Candidate] = Field(default_factory=list, description="Ranked candidates")
    error: Optional[str] = Field(default=None, description="Failure reason")

    @property
    def count(self) -> int:
        return len(self.opportunities)

    @classmethod
    def failure(cls, reason: str) -> "ScanResult":
        return cls(success=False, opportunities=[], error=reason)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            'success': self.success,
            'opportunities': [c.to_dict() for c in self.opportunities],
            'count': self.count,
        }
        if self.error is not None:
            payload['error'] = self.error
        return payload

    def to_dataframe(self) -> pd.DataFrame:
        """Flatten the ranked opportunities into a table, one row per candidate."""
        columns = [
            'rank', 'symbol', 'mint', 'score', 'price_usd',
            'm5', 'h1', 'h6', 'h24',
            'volume_24h', 'liquidity', 'fdv', 'source',
        ]
        rows = [
            {
                'rank': i + 1,
                'symbol': c.symbol,
                'mint': c.mint,
                'score': c.score,
                'price_usd': c.price_usd,
                'm5': c.price_change.m5,
                'h1': c.price_change.h1,
                'h6': c.price_change.h6,
                'h24': c.price_change.h24,
                'volume_24h': c.volume_24h,
                'liquidity': c.liquidity,
                'fdv': c.fdv,
                'source': c.source.value,
            }
            for i, c in enumerate(self.opportunities)
        ]
        return pd.DataFrame(rows, columns=columns)
