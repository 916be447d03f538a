from typing import Optional

import requests
import streamlit as st


class APIClient:
    """
    Simple API client for backend requests.

    The backend session lives in an HttpOnly cookie; the client keeps its
    value in `st.session_state.token` and sends it back on every request.
    """

    def __init__(self, base_url: str, cookie_name: str = "session"):
        self.base_url = base_url
        self.cookie_name = cookie_name

    def _cookies(self) -> dict:
        """Session cookie if logged in."""
        token = st.session_state.get("token")
        return {self.cookie_name: token} if token else {}

    def _remember_session(self, resp) -> None:
        """Store the session cookie set by login/register."""
        token = resp.cookies.get(self.cookie_name)
        if token:
            st.session_state.token = token

    def _parse_json(self, resp) -> Optional[dict]:
        """Safely parse JSON, return None or text on failure."""
        try:
            if resp is None:
                return None
            if not resp.text:
                return None
            return resp.json()
        except ValueError:
            # Non-JSON response
            return {"raw": resp.text}

    def _get(self, endpoint: str, params: Optional[dict] = None) -> dict:
        """Make GET request."""
        try:
            resp = requests.get(
                f"{self.base_url}{endpoint}",
                params=params or {},
                cookies=self._cookies(),
                timeout=30,
            )
            return {"status": resp.status_code, "data": self._parse_json(resp)}
        except requests.exceptions.ConnectionError:
            return {"status": 0, "error": "Cannot connect to backend"}
        except requests.exceptions.RequestException as e:
            return {"status": 0, "error": str(e)}

    def _post(self, endpoint: str, data: Optional[dict] = None) -> dict:
        """Make POST request."""
        try:
            resp = requests.post(
                f"{self.base_url}{endpoint}",
                json=data or {},
                cookies=self._cookies(),
                timeout=60,
            )
            self._remember_session(resp)
            return {"status": resp.status_code, "data": self._parse_json(resp)}
        except requests.exceptions.ConnectionError:
            return {"status": 0, "error": "Cannot connect to backend"}
        except requests.exceptions.RequestException as e:
            return {"status": 0, "error": str(e)}

    # Auth endpoints
    def login(self, username: str, password: str) -> dict:
        """Login; the session cookie is kept in session state."""
        return self._post("/api/login", {
            "username": username,
            "password": password,
        })

    def register(self, username: str, password: str) -> dict:
        """Register new user (also starts a session)."""
        return self._post("/api/register", {
            "username": username,
            "password": password,
        })

    def logout(self) -> dict:
        """End the session and forget the cookie."""
        result = self._post("/api/logout")
        st.session_state.token = None
        return result

    def get_me(self) -> dict:
        """Get current user profile."""
        return self._get("/api/user")

    # Health endpoint
    def health(self) -> dict:
        """Check API health."""
        return self._get("/health")

    # Market endpoints
    def get_top_assets(self) -> dict:
        """Top assets with sparklines."""
        return self._get("/api/market/top")

    def get_trending(self) -> dict:
        """Trending coins."""
        return self._get("/api/market/trending")

    def get_news(self) -> dict:
        """News items."""
        return self._get("/api/market/news")

    # Portfolio endpoints
    def get_portfolio(self) -> dict:
        """Portfolio with holdings and live wallet balances."""
        return self._get("/api/portfolio")

    def add_asset(self, asset_id: str, amount: float, blockchain: str) -> dict:
        """Record a manual holding."""
        return self._post("/api/portfolio/assets", {
            "assetId": asset_id,
            "amount": amount,
            "blockchain": blockchain,
        })

    def add_wallet(self, address: str, chain: str) -> dict:
        """Track a wallet address."""
        return self._post("/api/portfolio/wallets", {
            "address": address,
            "chain": chain,
        })

    def refresh_balances(self) -> dict:
        """Recompute wallet balances."""
        return self._post("/api/portfolio/refresh-balances")
