"""
Market data response schemas.

Top-asset fields keep CoinGecko's snake_case names; the browser client
consumes them as-is.
"""
from typing import Optional

from pydantic import BaseModel, Field

from defi_tracker.schemas.base import CamelModel


class TopAsset(BaseModel):
    """A market-cap ranked coin tagged with the chain it belongs to."""
    id: str = Field(..., description="CoinGecko coin id")
    name: str
    symbol: str
    image: Optional[str] = None
    current_price: Optional[float] = None
    price_change_percentage_24h: Optional[float] = None
    market_cap: Optional[float] = None
    volume_24h: Optional[float] = None
    sparkline: list[float] = Field(default_factory=list, description="7 day price series")
    blockchain: str


class TrendingCoin(CamelModel):
    """A coin from the CoinGecko trending search list."""
    id: str
    name: str
    symbol: str
    market_cap_rank: Optional[int] = None
    thumb: Optional[str] = None
    price_btc: float = 0.0
    score: Optional[int] = None


class NewsItem(CamelModel):
    """A news card entry."""
    title: str
    description: str = ""
    url: str
    source: str
    categories: list[str] = Field(default_factory=list)
    published_at: str
