"""
Tests for /api/portfolio routes.

These tests verify:
- Default portfolio creation on first access
- Manual asset creation and serialization
- Wallet tracking with live balances and per-wallet failure isolation
- refresh-balances ordering and idempotence
- Authentication and validation errors
"""

from sqlmodel import select

from defi_tracker.models import DEFAULT_PORTFOLIO_NAME, Portfolio, Wallet


class TestGetPortfolio:
    """Tests for GET /api/portfolio."""

    def test_first_access_creates_default_portfolio(self, authenticated_client, session):
        """A new user gets an empty default portfolio, persisted once."""
        response = authenticated_client.get("/api/portfolio")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == DEFAULT_PORTFOLIO_NAME
        assert data["assets"] == []
        assert data["wallets"] == []
        assert "createdAt" in data

        authenticated_client.get("/api/portfolio")
        portfolios = session.exec(select(Portfolio)).all()
        assert len(portfolios) == 1
        assert portfolios[0].name == DEFAULT_PORTFOLIO_NAME

    def test_requires_session_cookie(self, client):
        response = client.get("/api/portfolio")

        assert response.status_code == 401

    def test_invalid_session_cookie_rejected(self, client):
        client.cookies.set("session", "not-a-jwt")

        response = client.get("/api/portfolio")

        assert response.status_code == 401

    def test_portfolio_includes_assets_and_live_wallets(self, authenticated_client, eth_address):
        authenticated_client.post(
            "/api/portfolio/assets",
            json={"assetId": "solana", "amount": 12, "blockchain": "solana"},
        )
        authenticated_client.post(
            "/api/portfolio/wallets",
            json={"address": eth_address, "chain": "ethereum"},
        )

        data = authenticated_client.get("/api/portfolio").json()

        assert [a["assetId"] for a in data["assets"]] == ["solana"]
        assert data["assets"][0]["amount"] == "12"
        assert len(data["wallets"]) == 1
        wallet = data["wallets"][0]
        assert wallet["address"] == eth_address
        assert wallet["balance"] == "1.5"
        assert wallet["tokenBalances"] == [{"symbol": "USDC", "balance": "100", "address": "0xusdc"}]
        assert "error" not in wallet


class TestAddAsset:
    """Tests for POST /api/portfolio/assets."""

    def test_amount_and_purchase_price_serialized_as_strings(self, authenticated_client):
        response = authenticated_client.post(
            "/api/portfolio/assets",
            json={"assetId": "bitcoin", "amount": 1.5, "blockchain": "bitcoin"},
        )

        assert response.status_code == 200
        asset = response.json()
        assert asset["assetId"] == "bitcoin"
        assert asset["blockchain"] == "bitcoin"
        assert asset["amount"] == "1.5"
        assert asset["purchasePrice"] == "0"
        assert asset["portfolioId"] > 0
        assert "purchaseDate" in asset

    def test_fractional_amounts_kept_exact(self, authenticated_client):
        created = authenticated_client.post(
            "/api/portfolio/assets",
            json={"assetId": "ethereum", "amount": 0.1, "blockchain": "ethereum"},
        ).json()
        authenticated_client.post(
            "/api/portfolio/assets",
            json={"assetId": "solana", "amount": "123456789.123456789", "blockchain": "solana"},
        )

        assets = authenticated_client.get("/api/portfolio").json()["assets"]

        assert created["amount"] == "0.1"
        assert [a["amount"] for a in assets] == ["0.1", "123456789.123456789"]
        assert all(a["purchasePrice"] == "0" for a in assets)

    def test_missing_fields_return_400_with_field_names(self, authenticated_client):
        response = authenticated_client.post("/api/portfolio/assets", json={"assetId": "bitcoin"})

        assert response.status_code == 400
        data = response.json()
        assert data["detail"] == "Missing required fields"
        assert data["required"] == ["amount", "blockchain"]

    def test_non_positive_amount_rejected(self, authenticated_client):
        response = authenticated_client.post(
            "/api/portfolio/assets",
            json={"assetId": "bitcoin", "amount": 0, "blockchain": "bitcoin"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid request body"
        assert response.json()["required"] == ["amount"]

    def test_requires_authentication(self, client):
        response = client.post(
            "/api/portfolio/assets",
            json={"assetId": "bitcoin", "amount": 1, "blockchain": "bitcoin"},
        )

        assert response.status_code == 401


class TestAddWallet:
    """Tests for POST /api/portfolio/wallets."""

    def test_returns_wallet_with_fresh_balance(self, authenticated_client, eth_address, session):
        response = authenticated_client.post(
            "/api/portfolio/wallets",
            json={"address": eth_address, "chain": "Ethereum"},
        )

        assert response.status_code == 200
        wallet = response.json()
        assert wallet["chain"] == "ethereum"
        assert wallet["balance"] == "1.5"
        assert wallet["id"] > 0
        assert "error" not in wallet

        stored = session.exec(select(Wallet)).all()
        assert [(w.address, w.chain) for w in stored] == [(eth_address, "ethereum")]

    def test_unsupported_chain_saved_with_error(self, authenticated_client):
        response = authenticated_client.post(
            "/api/portfolio/wallets",
            json={"address": "bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq", "chain": "bitcoin"},
        )

        assert response.status_code == 200
        wallet = response.json()
        assert wallet["balance"] == "0"
        assert wallet["error"] == "Unsupported chain: bitcoin"

    def test_failing_rpc_reported_in_error(self, authenticated_client, stub_fetchers, eth_address):
        stub_fetchers["ethereum"].always_fail.add(eth_address)

        wallet = authenticated_client.post(
            "/api/portfolio/wallets",
            json={"address": eth_address, "chain": "ethereum"},
        ).json()

        assert wallet["balance"] == "0"
        assert "RPC unavailable" in wallet["error"]
        assert stub_fetchers["ethereum"].calls[eth_address] == 4

    def test_missing_chain_returns_400(self, authenticated_client, eth_address):
        response = authenticated_client.post("/api/portfolio/wallets", json={"address": eth_address})

        assert response.status_code == 400
        assert response.json() == {"detail": "Missing required fields", "required": ["chain"]}


class TestRefreshBalances:
    """Tests for POST /api/portfolio/refresh-balances."""

    def _track(self, client, address, chain):
        return client.post("/api/portfolio/wallets", json={"address": address, "chain": chain})

    def test_results_follow_wallet_creation_order(
        self, authenticated_client, stub_fetchers, eth_address, sol_address
    ):
        stub_fetchers["solana"].balances[sol_address] = "42"
        self._track(authenticated_client, eth_address, "ethereum")
        self._track(authenticated_client, sol_address, "solana")
        self._track(authenticated_client, "0x0000000000000000000000000000000000000001", "ethereum")

        response = authenticated_client.post("/api/portfolio/refresh-balances")

        assert response.status_code == 200
        results = response.json()
        assert [r["address"] for r in results] == [
            eth_address,
            sol_address,
            "0x0000000000000000000000000000000000000001",
        ]
        assert results[1]["balance"] == "42"

    def test_failed_wallet_does_not_block_others(
        self, authenticated_client, stub_fetchers, eth_address, sol_address
    ):
        self._track(authenticated_client, eth_address, "ethereum")
        self._track(authenticated_client, sol_address, "solana")
        stub_fetchers["ethereum"].always_fail.add(eth_address)

        results = authenticated_client.post("/api/portfolio/refresh-balances").json()

        assert len(results) == 2
        assert results[0]["balance"] == "0"
        assert results[0]["error"]
        assert results[1]["balance"] == "1.5"
        assert "error" not in results[1]

    def test_refresh_twice_returns_identical_balances(self, authenticated_client, eth_address, sol_address):
        self._track(authenticated_client, eth_address, "ethereum")
        self._track(authenticated_client, sol_address, "solana")

        first = authenticated_client.post("/api/portfolio/refresh-balances").json()
        second = authenticated_client.post("/api/portfolio/refresh-balances").json()

        assert [w["balance"] for w in first] == [w["balance"] for w in second]

    def test_empty_portfolio_returns_empty_list(self, authenticated_client):
        response = authenticated_client.post("/api/portfolio/refresh-balances")

        assert response.status_code == 200
        assert response.json() == []

    def test_users_see_only_their_wallets(self, client, eth_address, sol_address):
        client.post("/api/register", json={"username": "alice", "password": "password-alice"})
        self._track(client, eth_address, "ethereum")

        client.post("/api/register", json={"username": "bob12", "password": "password-bob"})
        self._track(client, sol_address, "solana")

        results = client.post("/api/portfolio/refresh-balances").json()
        assert [r["address"] for r in results] == [sol_address]


class TestPersistenceErrors:
    """Unexpected database errors surface as a generic 500."""

    def test_database_error_returns_500(self, authenticated_client, caplog):
        from unittest.mock import patch

        from sqlalchemy.exc import OperationalError

        with patch(
            "defi_tracker.services.portfolio_service.PortfolioService.get_or_create_portfolio",
            side_effect=OperationalError("SELECT", {}, Exception("disk I/O error")),
        ):
            response = authenticated_client.get("/api/portfolio")

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
        assert "Database error on GET /api/portfolio" in caplog.text
