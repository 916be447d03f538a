"""
Integration test fixtures.

These tests require actual network access to CoinGecko and public RPC
endpoints. They are marked `integration` and deselected by default;
run them with: pytest -m integration tests/integration/
"""
import os
import socket

import pytest


@pytest.fixture
def live_coingecko_url():
    """Get base URL for live CoinGecko tests."""
    return os.getenv("COINGECKO_URL", "https://api.coingecko.com/api/v3")


@pytest.fixture
def live_ethereum_rpc_url():
    return os.getenv("ETHEREUM_RPC_URL", "https://eth.llamarpc.com")


@pytest.fixture
def live_solana_rpc_url():
    return os.getenv("SOLANA_RPC_URL", "https://api.mainnet-beta.solana.com")


@pytest.fixture
def known_eth_address():
    """vitalik.eth; always holds some ETH."""
    return "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


@pytest.fixture
def known_sol_address():
    """Wrapped SOL mint account; always holds rent-exempt lamports."""
    return "So11111111111111111111111111111111111111112"


@pytest.fixture
def test_timeout():
    """Timeout for network requests in integration tests."""
    return 30


@pytest.fixture
def skip_if_no_network():
    """Skip test if no network access."""
    try:
        socket.create_connection(("api.coingecko.com", 443), timeout=5)
    except OSError:
        pytest.skip("No network access to CoinGecko")
