"""
Wallet request and live-balance schemas.
"""
from typing import Optional

from pydantic import Field, field_validator

from defi_tracker.schemas.base import CamelModel


class WalletCreate(CamelModel):
    """Attach an on-chain address to the portfolio."""
    address: str = Field(..., min_length=1, description="On-chain address")
    chain: str = Field(..., min_length=1, description="Chain tag, e.g. ethereum or solana")

    @field_validator("address")
    @classmethod
    def strip_address(cls, value: str) -> str:
        return value.strip()

    @field_validator("chain")
    @classmethod
    def normalize_chain(cls, value: str) -> str:
        return value.strip().lower()


class TokenBalance(CamelModel):
    """Balance of one non-native token held by a wallet."""
    symbol: str
    balance: str = Field(..., description="Human-readable amount as a decimal string")
    address: Optional[str] = Field(None, description="Token contract or mint address")


class WalletBalance(CamelModel):
    """
    Live balance of a wallet.

    On failure the same shape carries `balance="0"` and a non-empty `error`.
    """
    id: Optional[int] = Field(None, description="Wallet row ID")
    address: str
    chain: str
    balance: str = Field("0", description="Native balance as a decimal string")
    token_balances: list[TokenBalance] = Field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def placeholder(cls, address: str, chain: str, error: str, wallet_id: Optional[int] = None) -> "WalletBalance":
        """Build the error-shaped result for a wallet whose fetch failed."""
        return cls(id=wallet_id, address=address, chain=chain, balance="0", error=error)
