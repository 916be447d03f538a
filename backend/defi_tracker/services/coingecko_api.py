"""
CoinGecko API client for fetching market data.

Wraps the public CoinGecko v3 REST API (no API key required):
- /coins/markets: ranked coins with prices and 7 day sparklines
- /search/trending: trending coins
- /status_updates: project announcements used as the news feed
"""
from typing import Any, Optional

import httpx

from defi_tracker.config import get_settings


def _expect(data: Any, kind: type, path: str) -> Any:
    """Raise ValueError unless the decoded body of `path` is a `kind`."""
    if not isinstance(data, kind):
        raise ValueError(f"Unexpected payload from {path}: {type(data).__name__}")
    return data


class CoinGeckoAPI:
    """
    Async client for the CoinGecko REST API.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize CoinGecko API client."""
        self.base_url = (base_url or get_settings().coingecko_url).rstrip("/")
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client with connection pooling."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=30.0,
                follow_redirects=True,
                headers={"Accept": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        client = await self._get_client()
        response = await client.get(f"{self.base_url}{path}", params=params)
        response.raise_for_status()
        return response.json()

    async def get_markets(
        self,
        vs_currency: str = "usd",
        per_page: int = 100,
        page: int = 1,
        sparkline: bool = True,
    ) -> list[dict[str, Any]]:
        """
        Fetch coins ranked by market cap.

        Args:
            vs_currency: Quote currency
            per_page: Page size (CoinGecko caps this at 250)
            page: Page number, starting at 1
            sparkline: Include 7 day price series

        Returns:
            List of market dicts as returned by CoinGecko
        """
        params = {
            "vs_currency": vs_currency,
            "order": "market_cap_desc",
            "per_page": per_page,
            "page": page,
            "sparkline": str(sparkline).lower(),
            "price_change_percentage": "24h",
        }
        markets = _expect(await self._get("/coins/markets", params=params), list, "/coins/markets")
        return [m for m in markets if isinstance(m, dict)]

    async def get_trending(self) -> list[dict[str, Any]]:
        """
        Fetch trending coins.

        Returns:
            The inner `item` dicts of the `coins` list
        """
        data = _expect(await self._get("/search/trending"), dict, "/search/trending")
        coins = _expect(data.get("coins", []), list, "/search/trending")
        items = [entry.get("item", entry) for entry in coins if isinstance(entry, dict)]
        return [item for item in items if isinstance(item, dict) and item.get("id")]

    async def get_status_updates(self, per_page: int = 20) -> list[dict[str, Any]]:
        """
        Fetch project status updates.

        Returns:
            List of status update dicts (may be empty)
        """
        data = await self._get("/status_updates", params={"per_page": per_page})
        data = _expect(data, dict, "/status_updates")
        updates = _expect(data.get("status_updates", []), list, "/status_updates")
        return [u for u in updates if isinstance(u, dict)]


# Singleton instance
_coingecko_api: Optional[CoinGeckoAPI] = None


async def get_coingecko_api() -> CoinGeckoAPI:
    """Get shared CoinGeckoAPI instance."""
    global _coingecko_api
    if _coingecko_api is None:
        _coingecko_api = CoinGeckoAPI()
    return _coingecko_api


async def close_coingecko_api() -> None:
    """Close the shared client, if one was created."""
    global _coingecko_api
    if _coingecko_api is not None:
        await _coingecko_api.close()
        _coingecko_api = None
