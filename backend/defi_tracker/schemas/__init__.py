"""
Request and response schemas for API endpoints.
"""
from defi_tracker.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserInfoResponse,
)
from defi_tracker.schemas.portfolio import (
    AssetCreate,
    AssetResponse,
    PortfolioResponse,
    format_decimal,
)
from defi_tracker.schemas.wallet import TokenBalance, WalletBalance, WalletCreate
from defi_tracker.schemas.market import NewsItem, TopAsset, TrendingCoin

__all__ = [
    # Auth
    "AuthResponse",
    "LoginRequest",
    "RegisterRequest",
    "UserInfoResponse",
    # Portfolio
    "AssetCreate",
    "AssetResponse",
    "PortfolioResponse",
    "format_decimal",
    # Wallet
    "TokenBalance",
    "WalletBalance",
    "WalletCreate",
    # Market
    "NewsItem",
    "TopAsset",
    "TrendingCoin",
]
