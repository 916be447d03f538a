"""
API routers.
"""
from defi_tracker.routers import auth, health, market, portfolio

__all__ = ["auth", "health", "market", "portfolio"]
