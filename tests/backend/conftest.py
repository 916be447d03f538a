"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with upstream payloads and
httpx.MockTransport builders for CoinGecko and JSON-RPC endpoints.
"""

import json
import sys
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# Upstream Payloads
# =============================================================================

def make_market(coin_id: str, symbol: str, price: float = 100.0, **extra) -> dict:
    """A /coins/markets entry as CoinGecko returns it."""
    market = {
        "id": coin_id,
        "symbol": symbol,
        "name": coin_id.replace("-", " ").title(),
        "image": f"https://assets.coingecko.com/coins/images/1/large/{coin_id}.png",
        "current_price": price,
        "market_cap": price * 1_000_000,
        "total_volume": price * 10_000,
        "price_change_percentage_24h": 2.5,
        "sparkline_in_7d": {"price": [price * 0.9, price * 0.95, price]},
    }
    market.update(extra)
    return market


@pytest.fixture(name="make_market")
def make_market_fixture():
    """Factory for /coins/markets entries."""
    return make_market


@pytest.fixture
def coingecko_markets() -> list[dict]:
    """Mixed list: supported-chain coins plus coins that must be filtered out."""
    return [
        make_market("bitcoin", "btc", 60000.0),
        make_market("ethereum", "eth", 3000.0),
        make_market("tether", "usdt", 1.0),
        make_market("binancecoin", "bnb", 550.0),
        make_market("solana", "sol", 150.0),
        make_market("ripple", "xrp", 0.5),
        make_market("avalanche-2", "avax", 35.0, sparkline_in_7d=None),
    ]


@pytest.fixture
def coingecko_trending() -> dict:
    return {
        "coins": [
            {
                "item": {
                    "id": "pepe",
                    "coin_id": 29850,
                    "name": "Pepe",
                    "symbol": "PEPE",
                    "market_cap_rank": 24,
                    "thumb": "https://assets.coingecko.com/coins/images/29850/thumb/pepe.png",
                    "price_btc": 1.7e-10,
                    "score": 0,
                }
            },
            {
                "item": {
                    "id": "dogwifcoin",
                    "name": "dogwifhat",
                    "symbol": "WIF",
                    "market_cap_rank": None,
                    "thumb": None,
                    "price_btc": 3.1e-05,
                    "score": 1,
                }
            },
        ],
        "nfts": [],
    }


@pytest.fixture
def coingecko_status_updates() -> dict:
    return {
        "status_updates": [
            {
                "description": "Mainnet upgrade scheduled for next week.",
                "category": "software_release",
                "created_at": "2024-05-01T12:00:00.000Z",
                "user": "Core Team",
                "user_title": "Developer",
                "project": {"type": "Coin", "id": "ethereum", "name": "Ethereum"},
            }
        ]
    }


# =============================================================================
# Mock Transports
# =============================================================================

@pytest.fixture
def coingecko_transport(coingecko_markets, coingecko_trending, coingecko_status_updates):
    """
    Build an httpx.MockTransport serving CoinGecko paths.

    Usage:
        transport, calls = coingecko_transport()
        transport, calls = coingecko_transport(fail={"/status_updates"})
    """
    def _build(
        fail: set[str] = frozenset(),
        overrides: dict[str, Any] | None = None,
    ) -> tuple[httpx.MockTransport, list[str]]:
        calls: list[str] = []
        payloads = {
            "/coins/markets": coingecko_markets,
            "/search/trending": coingecko_trending,
            "/status_updates": coingecko_status_updates,
        }
        payloads.update(overrides or {})

        def handler(request: httpx.Request) -> httpx.Response:
            path = request.url.path.removeprefix("/api/v3")
            calls.append(path)
            if path in fail:
                return httpx.Response(429, json={"error": "rate limited"})
            if path not in payloads:
                return httpx.Response(404, json={"error": "not found"})
            return httpx.Response(200, json=payloads[path])

        return httpx.MockTransport(handler), calls

    return _build


@pytest.fixture
def rpc_transport():
    """
    Build an httpx.MockTransport answering JSON-RPC calls.

    `responder(method, params)` returns the `result` value, or an
    httpx.Response to send as-is.
    """
    def _build(responder: Callable[[str, list], Any]) -> tuple[httpx.MockTransport, list[dict]]:
        requests: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            body = json.loads(request.content)
            requests.append(body)
            result = responder(body["method"], body["params"])
            if isinstance(result, httpx.Response):
                return result
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})

        return httpx.MockTransport(handler), requests

    return _build


# =============================================================================
# Response Assertion Helpers
# =============================================================================

@pytest.fixture
def assert_error_response():
    """Helper to assert error response structure."""
    def _assert(response, status_code: int, detail_contains: str = None):
        assert response.status_code == status_code
        data = response.json()
        assert "detail" in data
        if detail_contains:
            assert detail_contains.lower() in data["detail"].lower()
    return _assert
