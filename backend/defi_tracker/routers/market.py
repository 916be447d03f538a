"""
Market router: CoinGecko passthroughs (no authentication).
"""
from typing import Annotated

from fastapi import APIRouter, Depends
from redis.asyncio import Redis

from defi_tracker.database.connections import get_redis_client
from defi_tracker.schemas.market import NewsItem, TopAsset, TrendingCoin
from defi_tracker.services.coingecko_api import CoinGeckoAPI, get_coingecko_api
from defi_tracker.services.market_service import MarketService

router = APIRouter(prefix="/api/market", tags=["Market"])


async def get_market_service(
    redis: Annotated[Redis, Depends(get_redis_client)],
    api: Annotated[CoinGeckoAPI, Depends(get_coingecko_api)],
) -> MarketService:
    """Dependency to get MarketService instance."""
    return MarketService(redis, api)


MarketServiceDep = Annotated[MarketService, Depends(get_market_service)]


@router.get("/top", response_model=list[TopAsset], summary="Top assets")
async def top_assets(market_service: MarketServiceDep):
    """Top market-cap coins on supported chains, with 7 day sparklines."""
    return await market_service.get_top_assets()


@router.get("/trending", response_model=list[TrendingCoin], summary="Trending coins")
async def trending(market_service: MarketServiceDep):
    """Trending coins from CoinGecko search."""
    return await market_service.get_trending()


@router.get("/news", response_model=list[NewsItem], summary="News feed")
async def news(market_service: MarketServiceDep):
    """News items; derived from trending coins when the feed is empty."""
    return await market_service.get_news()
