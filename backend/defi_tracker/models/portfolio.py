"""
Portfolio, manual asset and tracked wallet tables.
"""
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator
from sqlmodel import Field, Relationship, SQLModel

DEFAULT_PORTFOLIO_NAME = "Default Portfolio"


class DecimalString(TypeDecorator):
    """Decimal persisted as exact text; SQLite stores NUMERIC as REAL."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return format(Decimal(value), "f")

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Portfolio(SQLModel, table=True):
    """A user's named collection of manual holdings and tracked wallets."""
    __tablename__ = "portfolios"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    name: str
    created_at: datetime = Field(default_factory=_utcnow)

    assets: List["Asset"] = Relationship(back_populates="portfolio")
    wallets: List["Wallet"] = Relationship(back_populates="portfolio")


class Asset(SQLModel, table=True):
    """
    A manually entered holding.

    `asset_id` is the CoinGecko coin id. `purchase_price` is recorded as 0
    at creation; it is not looked up against a live price.
    """
    __tablename__ = "assets"

    id: Optional[int] = Field(default=None, primary_key=True)
    portfolio_id: int = Field(foreign_key="portfolios.id", index=True)
    asset_id: str
    blockchain: str
    amount: Decimal = Field(sa_type=DecimalString)
    purchase_price: Decimal = Field(default=Decimal("0"), sa_type=DecimalString)
    purchase_date: datetime = Field(default_factory=_utcnow)

    portfolio: Optional[Portfolio] = Relationship(back_populates="assets")


class Wallet(SQLModel, table=True):
    """An on-chain address tracked live; its balance is never stored."""
    __tablename__ = "wallets"

    id: Optional[int] = Field(default=None, primary_key=True)
    portfolio_id: int = Field(foreign_key="portfolios.id", index=True)
    address: str
    chain: str = Field(index=True)
    created_at: datetime = Field(default_factory=_utcnow)

    portfolio: Optional[Portfolio] = Relationship(back_populates="wallets")
