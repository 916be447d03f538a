"""
Global test fixtures for DeFi Tracker.

This module provides shared fixtures for all tests including:
- In-memory SQLite engine and sessions (SQLModel + StaticPool)
- Mock Redis (fakeredis)
- Stub chain fetchers and a fast-retry balance aggregator
- FastAPI TestClient wired to the fakes
"""

import sys
from collections import defaultdict
from pathlib import Path
from typing import Generator, Iterable, Optional

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

from defi_tracker.chains.base import BalanceFetcher, InvalidAddressError  # noqa: E402
from defi_tracker.chains.retry import RetryConfig  # noqa: E402
from defi_tracker.schemas.wallet import TokenBalance, WalletBalance  # noqa: E402


# =============================================================================
# Stub Chain Fetchers
# =============================================================================

class StubEthereumFetcher(BalanceFetcher):
    """
    In-memory fetcher with scriptable failures.

    Args:
        balances: address -> native balance string (default "1.5")
        fail_times: address -> number of leading calls that raise
        always_fail: addresses whose every call raises
    """

    chain = "ethereum"
    native_symbol = "ETH"

    def __init__(
        self,
        balances: Optional[dict[str, str]] = None,
        fail_times: Optional[dict[str, int]] = None,
        always_fail: Iterable[str] = (),
    ):
        super().__init__(rpc=None)
        self.balances = balances or {}
        self.fail_times = dict(fail_times or {})
        self.always_fail = set(always_fail)
        self.calls: dict[str, int] = defaultdict(int)

    def validate_address(self, address: str) -> None:
        if not address or address.startswith("bad"):
            raise InvalidAddressError(f"Invalid {self.chain} address: {address}")

    async def fetch_balance(self, address: str) -> WalletBalance:
        self.validate_address(address)
        self.calls[address] += 1

        if address in self.always_fail:
            raise ConnectionError(f"RPC unavailable for {address}")
        if self.fail_times.get(address, 0) > 0:
            self.fail_times[address] -= 1
            raise TimeoutError("RPC request timed out")

        return WalletBalance(
            address=address,
            chain=self.chain,
            balance=self.balances.get(address, "1.5"),
            token_balances=[TokenBalance(symbol="USDC", balance="100", address="0xusdc")],
        )

    async def close(self) -> None:
        pass


class StubSolanaFetcher(StubEthereumFetcher):
    chain = "solana"
    native_symbol = "SOL"


@pytest.fixture
def no_delay_retry() -> RetryConfig:
    """Three retries without sleeping."""
    return RetryConfig(max_retries=3, base_delay=0, max_delay=0)


@pytest.fixture
def stub_fetchers() -> dict[str, StubEthereumFetcher]:
    return {
        "ethereum": StubEthereumFetcher(),
        "solana": StubSolanaFetcher(balances={}),
    }


@pytest.fixture
def aggregator(stub_fetchers, no_delay_retry):
    """Aggregator over the stub fetchers with instant retries."""
    from defi_tracker.services.balance_service import WalletBalanceAggregator

    return WalletBalanceAggregator(stub_fetchers, no_delay_retry)


# =============================================================================
# Database Fixtures (in-memory SQLite)
# =============================================================================

@pytest.fixture
def engine(monkeypatch):
    """
    In-memory SQLite engine installed as the application engine.

    StaticPool keeps a single connection so every session sees the same data.
    """
    from defi_tracker import models  # noqa: F401  (registers tables)
    from defi_tracker.database import connections

    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(test_engine)
    monkeypatch.setattr(connections, "_engine", test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session(engine) -> Generator[Session, None, None]:
    with Session(engine) as s:
        yield s


# =============================================================================
# Redis Fixtures (fakeredis)
# =============================================================================

@pytest.fixture
def fake_redis(monkeypatch):
    """
    Async fake Redis installed as the application Redis client.

    Each test gets its own FakeServer so counters never leak between tests.
    """
    import fakeredis
    import fakeredis.aioredis
    from defi_tracker.database import connections

    redis_client = fakeredis.aioredis.FakeRedis(
        server=fakeredis.FakeServer(),
        decode_responses=True,
    )
    monkeypatch.setattr(connections, "_redis_client", redis_client)
    return redis_client


@pytest_asyncio.fixture
async def mock_async_redis():
    """
    Create an async mock Redis client using fakeredis.
    """
    import fakeredis
    import fakeredis.aioredis

    redis_client = fakeredis.aioredis.FakeRedis(
        server=fakeredis.FakeServer(),
        decode_responses=True,
    )
    yield redis_client
    await redis_client.flushall()
    await redis_client.aclose()


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def test_user_data() -> dict:
    """Basic test user data for registration."""
    return {
        "username": "satoshi",
        "password": "SecurePassword123!",
    }


@pytest.fixture
def eth_address() -> str:
    return "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


@pytest.fixture
def sol_address() -> str:
    return "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM"


# =============================================================================
# FastAPI Test Client Fixtures
# =============================================================================

@pytest.fixture
def app(engine, fake_redis, aggregator):
    """
    FastAPI app wired to the in-memory database, fake Redis and stub fetchers.
    """
    from defi_tracker.main import app as fastapi_app
    from defi_tracker.services.balance_service import get_balance_aggregator

    fastapi_app.dependency_overrides[get_balance_aggregator] = lambda: aggregator
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator:
    """
    Create a TestClient for the FastAPI app.

    Used as a context manager so the lifespan runs on one event loop.
    """
    with TestClient(app) as c:
        yield c


@pytest.fixture
def authenticated_client(client, test_user_data) -> TestClient:
    """A test client holding the session cookie of a freshly registered user."""
    response = client.post("/api/register", json=test_user_data)
    assert response.status_code == 201, response.text
    return client
