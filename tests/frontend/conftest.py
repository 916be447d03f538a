"""
Frontend test fixtures and mocks.

Mocks Streamlit session_state and API responses for isolated testing.
"""
import sys
from pathlib import Path

import pytest

# Views and figure helpers import `utils.*` relative to the frontend folder
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "frontend"))


class MockSessionState(dict):
    """Mock st.session_state that behaves like both dict and attribute access."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Default state
        self.update({
            "is_authenticated": False,
            "user": None,
            "token": None,
            "nav_page": "Market",
        })

    def __getattr__(self, name):
        try:
            return self[name]
        except KeyError:
            raise AttributeError(f"'SessionState' has no attribute '{name}'")

    def __setattr__(self, name, value):
        self[name] = value


@pytest.fixture
def mock_session_state():
    """Provide a mock session state for testing."""
    return MockSessionState()


@pytest.fixture
def authenticated_session_state():
    """Provide an authenticated mock session state."""
    state = MockSessionState()
    state.update({
        "is_authenticated": True,
        "user": {"id": 1, "username": "satoshi"},
        "token": "test-session-cookie",
    })
    return state


@pytest.fixture
def sample_wallets():
    """Wallet balances as returned by /api/portfolio."""
    return [
        {
            "id": 1,
            "address": "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045",
            "chain": "ethereum",
            "balance": "1.5",
            "tokenBalances": [
                {"symbol": "USDC", "balance": "250", "address": "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"},
            ],
        },
        {
            "id": 2,
            "address": "9WzDXwBbmkg8ZTbNMqUxvQRAyrZzDsGYdLVL9zYtAWWM",
            "chain": "solana",
            "balance": "0",
            "tokenBalances": [],
            "error": "RPC unavailable",
        },
    ]


@pytest.fixture
def sample_assets():
    """Manual holdings as returned by /api/portfolio."""
    return [
        {
            "id": 1,
            "portfolioId": 1,
            "assetId": "ethereum",
            "blockchain": "ethereum",
            "amount": "2.5",
            "purchasePrice": "0",
            "purchaseDate": "2025-01-15T10:00:00Z",
        },
    ]
