"""
Business logic services.
"""
from defi_tracker.services.auth_service import AuthService
from defi_tracker.services.balance_service import (
    WalletBalanceAggregator,
    close_balance_aggregator,
    get_balance_aggregator,
)
from defi_tracker.services.coingecko_api import (
    CoinGeckoAPI,
    close_coingecko_api,
    get_coingecko_api,
)
from defi_tracker.services.market_service import MarketService
from defi_tracker.services.portfolio_service import PortfolioService

__all__ = [
    "AuthService",
    "CoinGeckoAPI",
    "MarketService",
    "PortfolioService",
    "WalletBalanceAggregator",
    "close_balance_aggregator",
    "close_coingecko_api",
    "get_balance_aggregator",
    "get_coingecko_api",
]
