"""
Base class and shared helpers for chain-specific balance fetchers.
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import ClassVar

from defi_tracker.chains.rpc import JSONRPCClient
from defi_tracker.schemas.wallet import WalletBalance


class UnsupportedChainError(ValueError):
    """Raised for a chain tag with no registered fetcher."""

    def __init__(self, chain: str):
        super().__init__(f"Unsupported chain: {chain}")
        self.chain = chain


class InvalidAddressError(ValueError):
    """Raised when an address is malformed for its chain; never retried."""


def format_units(raw_amount: int, decimals: int) -> str:
    """
    Convert an integer base-unit amount into a decimal string.

    >>> format_units(1_500_000_000_000_000_000, 18)
    '1.5'
    """
    value = Decimal(raw_amount).scaleb(-decimals)
    return format(value.normalize(), "f")


class BalanceFetcher(ABC):
    """
    Fetches the native balance and allow-listed token balances of an address.

    Subclasses set `chain` and `native_symbol` and implement `fetch_balance`.
    """

    chain: ClassVar[str] = ""
    native_symbol: ClassVar[str] = ""

    def __init__(self, rpc: JSONRPCClient) -> None:
        if not self.chain:
            msg = f"{self.__class__.__name__} must define 'chain' attribute"
            raise ValueError(msg)
        self.rpc = rpc

    @abstractmethod
    def validate_address(self, address: str) -> None:
        """Raise InvalidAddressError if `address` is not valid on this chain."""

    @abstractmethod
    async def fetch_balance(self, address: str) -> WalletBalance:
        """
        Fetch native and token balances for one address.

        Zero-balance tokens are left out of `token_balances`.
        """

    async def close(self) -> None:
        await self.rpc.close()
