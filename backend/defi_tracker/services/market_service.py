"""
Market service: CoinGecko data reshaped for the dashboard, cached in Redis.

Provides:
- Top assets tagged with the chain they belong to, with 7 day sparklines
- Trending coins
- News items, falling back to trending coins when the feed is empty

Each response is cached under a fresh key (short TTL) and a stale key
(long TTL). When CoinGecko fails the stale copy is served, or an empty
list when there is none.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional

import httpx
from redis.asyncio import Redis
from redis.exceptions import RedisError

from defi_tracker.config import get_settings
from defi_tracker.schemas.market import NewsItem, TopAsset, TrendingCoin
from defi_tracker.services.coingecko_api import CoinGeckoAPI

logger = logging.getLogger(__name__)

# Chain tag -> CoinGecko ids that belong to it
SUPPORTED_CHAINS: dict[str, list[str]] = {
    "ethereum": ["ethereum", "eth"],
    "solana": ["solana", "sol"],
    "avalanche": ["avalanche-2", "avax"],
    "bsc": ["binancecoin", "bnb"],
}

TOP_ASSETS_LIMIT = 20
STALE_TTL_SECONDS = 24 * 60 * 60
COINGECKO_COIN_URL = "https://www.coingecko.com/en/coins/{coin_id}"


def classify_blockchain(coin_id: str) -> Optional[str]:
    """
    Chain tag for a CoinGecko coin id, or None if it is not on a supported chain.

    A coin matches a chain when its id is one of the chain's identifiers or
    starts with the chain tag (e.g. "solana-bridged-usdc" -> solana).
    """
    for chain, identifiers in SUPPORTED_CHAINS.items():
        if coin_id in identifiers or coin_id.startswith(chain):
            return chain
    return None


def to_top_asset(market: dict[str, Any]) -> Optional[TopAsset]:
    """Reshape one /coins/markets entry, or None if it is filtered out."""
    blockchain = classify_blockchain(market.get("id", ""))
    if blockchain is None:
        return None

    sparkline = (market.get("sparkline_in_7d") or {}).get("price") or []
    return TopAsset(
        id=market["id"],
        name=market.get("name", market["id"]),
        symbol=market.get("symbol", ""),
        image=market.get("image"),
        current_price=market.get("current_price"),
        price_change_percentage_24h=market.get("price_change_percentage_24h"),
        market_cap=market.get("market_cap"),
        volume_24h=market.get("total_volume"),
        sparkline=[p for p in sparkline if p is not None],
        blockchain=blockchain,
    )


def to_trending_coin(item: dict[str, Any]) -> TrendingCoin:
    return TrendingCoin(
        id=item["id"],
        name=item.get("name", item["id"]),
        symbol=item.get("symbol", ""),
        market_cap_rank=item.get("market_cap_rank"),
        thumb=item.get("thumb") or item.get("small"),
        price_btc=item.get("price_btc") or 0.0,
        score=item.get("score"),
    )


def status_update_to_news(update: dict[str, Any]) -> NewsItem:
    """Reshape one /status_updates entry into a news item."""
    project = update.get("project") or {}
    name = project.get("name") or update.get("user_title") or "CoinGecko"
    category = update.get("category") or "general"
    coin_id = project.get("id")
    url = COINGECKO_COIN_URL.format(coin_id=coin_id) if coin_id else "https://www.coingecko.com"

    return NewsItem(
        title=f"{name}: {category.replace('_', ' ').title()}",
        description=(update.get("description") or "").strip(),
        url=url,
        source=update.get("user") or "CoinGecko",
        categories=[category],
        published_at=update.get("created_at") or datetime.now(timezone.utc).isoformat(),
    )


def trending_to_news(coin: TrendingCoin, published_at: str) -> NewsItem:
    """Build a news item from a trending coin."""
    rank = f"#{coin.market_cap_rank}" if coin.market_cap_rank else "unranked"
    return NewsItem(
        title=f"{coin.name} ({coin.symbol.upper()}) is trending",
        description=(
            f"{coin.name} is among the most searched coins on CoinGecko "
            f"in the last 24 hours (market cap rank {rank})."
        ),
        url=COINGECKO_COIN_URL.format(coin_id=coin.id),
        source="CoinGecko Trending",
        categories=["Trending"],
        published_at=published_at,
    )


class MarketService:
    """Service for market data backed by CoinGecko with a Redis cache."""

    def __init__(self, redis: Redis, api: CoinGeckoAPI):
        self.redis = redis
        self.api = api
        self.settings = get_settings()

    # ==================== Cache ====================

    async def _cache_get(self, key: str) -> Optional[Any]:
        try:
            raw = await self.redis.get(key)
        except RedisError as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            return None
        return json.loads(raw) if raw else None

    async def _cache_set(self, key: str, value: Any, ttl: int) -> None:
        payload = json.dumps(value)
        try:
            await self.redis.set(key, payload, ex=ttl)
            await self.redis.set(f"{key}:stale", payload, ex=STALE_TTL_SECONDS)
        except RedisError as e:
            logger.warning(f"Cache write failed for {key}: {e}")

    async def _cached(
        self,
        key: str,
        ttl: int,
        loader: Callable[[], Awaitable[list[dict[str, Any]]]],
    ) -> list[dict[str, Any]]:
        """
        Return the cached value for `key`, loading it on a miss.

        Args:
            key: Cache key
            ttl: Seconds the fresh copy is served without reloading
            loader: Coroutine function producing JSON-serializable data

        Returns:
            Fresh data, the stale copy if loading fails, or an empty list
        """
        cached = await self._cache_get(key)
        if cached is not None:
            return cached

        try:
            value = await loader()
        except (httpx.HTTPError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"CoinGecko request for {key} failed: {e!r}")
            stale = await self._cache_get(f"{key}:stale")
            return stale if stale is not None else []

        await self._cache_set(key, value, ttl)
        return value

    # ==================== Market Data ====================

    async def _load_top_assets(self) -> list[dict[str, Any]]:
        markets = await self.api.get_markets(per_page=100)
        assets = []
        for market in markets:
            asset = to_top_asset(market)
            if asset is not None:
                assets.append(asset.model_dump())
            if len(assets) == TOP_ASSETS_LIMIT:
                break
        return assets

    async def _load_trending(self) -> list[dict[str, Any]]:
        items = await self.api.get_trending()
        return [to_trending_coin(item).model_dump(by_alias=True) for item in items]

    async def get_top_assets(self) -> list[TopAsset]:
        """Top market-cap coins on supported chains (at most 20)."""
        data = await self._cached(
            "market:top",
            self.settings.market_cache_ttl_seconds,
            self._load_top_assets,
        )
        return [TopAsset.model_validate(d) for d in data]

    async def get_trending(self) -> list[TrendingCoin]:
        """Trending coins from CoinGecko search."""
        data = await self._cached(
            "market:trending",
            self.settings.news_cache_ttl_seconds,
            self._load_trending,
        )
        return [TrendingCoin.model_validate(d) for d in data]

    async def _load_status_news(self) -> list[dict[str, Any]]:
        updates = await self.api.get_status_updates()
        return [status_update_to_news(u).model_dump(by_alias=True) for u in updates]

    async def get_news(self) -> list[NewsItem]:
        """
        News items from CoinGecko status updates.

        Falls back to items derived from trending coins when the feed is
        empty or unavailable.
        """
        data = await self._cached(
            "market:news",
            self.settings.news_cache_ttl_seconds,
            self._load_status_news,
        )
        if data:
            return [NewsItem.model_validate(d) for d in data]

        logger.info("News feed empty, deriving news from trending coins")
        now = datetime.now(timezone.utc).isoformat()
        return [trending_to_news(coin, now) for coin in await self.get_trending()]
