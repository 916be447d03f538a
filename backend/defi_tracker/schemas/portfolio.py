"""
Portfolio request/response schemas.
"""
from datetime import datetime
from decimal import Decimal

from pydantic import Field, field_validator

from defi_tracker.models.portfolio import Asset, Portfolio
from defi_tracker.schemas.base import CamelModel
from defi_tracker.schemas.wallet import WalletBalance


def format_decimal(value: Decimal) -> str:
    """Render a decimal without exponent or trailing zeros ("1.5", "0", "100")."""
    normalized = Decimal(value).normalize()
    return format(normalized, "f")


class AssetCreate(CamelModel):
    """Add a manual holding."""
    asset_id: str = Field(..., min_length=1, description="CoinGecko asset id, e.g. bitcoin")
    amount: Decimal = Field(..., gt=0, description="Quantity held")
    blockchain: str = Field(..., min_length=1, description="Blockchain tag")

    @field_validator("asset_id", "blockchain")
    @classmethod
    def normalize_tag(cls, value: str) -> str:
        return value.strip().lower()


class AssetResponse(CamelModel):
    """Manual holding as returned to the client."""
    id: int
    portfolio_id: int
    asset_id: str
    blockchain: str
    amount: str
    purchase_price: str
    purchase_date: datetime

    @classmethod
    def from_model(cls, asset: Asset) -> "AssetResponse":
        return cls(
            id=asset.id,
            portfolio_id=asset.portfolio_id,
            asset_id=asset.asset_id,
            blockchain=asset.blockchain,
            amount=format_decimal(asset.amount),
            purchase_price=format_decimal(asset.purchase_price),
            purchase_date=asset.purchase_date,
        )


class PortfolioResponse(CamelModel):
    """Portfolio with its holdings and live wallet balances."""
    id: int
    name: str
    created_at: datetime
    assets: list[AssetResponse] = Field(default_factory=list)
    wallets: list[WalletBalance] = Field(default_factory=list)

    @classmethod
    def from_model(
        cls,
        portfolio: Portfolio,
        assets: list[Asset],
        wallets: list[WalletBalance],
    ) -> "PortfolioResponse":
        return cls(
            id=portfolio.id,
            name=portfolio.name,
            created_at=portfolio.created_at,
            assets=[AssetResponse.from_model(a) for a in assets],
            wallets=wallets,
        )
