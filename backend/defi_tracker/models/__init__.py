"""
SQLModel tables.
"""
from defi_tracker.models.user import User
from defi_tracker.models.portfolio import (
    Asset,
    DEFAULT_PORTFOLIO_NAME,
    Portfolio,
    Wallet,
)

__all__ = [
    "User",
    "Portfolio",
    "Asset",
    "Wallet",
    "DEFAULT_PORTFOLIO_NAME",
]
