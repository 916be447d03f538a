import os

API_URL = os.getenv("API_URL", "http://localhost:8000")

APP_NAME = "DeFi Tracker"

SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "session")

PRICE_REFRESH_SECONDS = int(os.getenv("PRICE_REFRESH_SECONDS", "60"))
NEWS_REFRESH_SECONDS = int(os.getenv("NEWS_REFRESH_SECONDS", "300"))

# Chains with live wallet balances
SUPPORTED_CHAINS = ["ethereum", "solana"]

# Tags offered for manual holdings
BLOCKCHAIN_OPTIONS = ["ethereum", "solana", "avalanche", "bsc", "bitcoin"]
