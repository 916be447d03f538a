"""
Wallet balance aggregation across chains.

Every wallet in a batch is fetched concurrently with its own bounded retry.
A wallet that still fails after its retries becomes an error placeholder in
its slot; the other wallets are unaffected and input order is preserved.
"""
import asyncio
import logging
from collections.abc import Sequence
from typing import Optional

from defi_tracker.chains import (
    BalanceFetcher,
    ChainRegistry,
    InvalidAddressError,
    JSONRPCClient,
    RetryConfig,
    UnsupportedChainError,
    call_with_retry,
)
from defi_tracker.config import get_settings
from defi_tracker.schemas.wallet import WalletBalance

logger = logging.getLogger(__name__)

# Errors that no amount of retrying will fix
NON_RETRYABLE = (InvalidAddressError, UnsupportedChainError)


class WalletBalanceAggregator:
    """
    Dispatches balance lookups to chain fetchers.

    Args:
        fetchers: Chain tag -> fetcher instance
        retry_config: Retry policy applied to each wallet independently
    """

    def __init__(
        self,
        fetchers: dict[str, BalanceFetcher],
        retry_config: Optional[RetryConfig] = None,
    ):
        self.fetchers = fetchers
        self.retry_config = retry_config or RetryConfig()

    def supported_chains(self) -> list[str]:
        return sorted(self.fetchers)

    async def fetch_balance(self, address: str, chain: str) -> WalletBalance:
        """
        Fetch one wallet with retries.

        Raises:
            UnsupportedChainError: No fetcher is configured for `chain`
            InvalidAddressError: The address is malformed for `chain`
            Exception: The last RPC error once retries are exhausted
        """
        fetcher = self.fetchers.get(chain)
        if fetcher is None:
            raise UnsupportedChainError(chain)

        return await call_with_retry(
            fetcher.fetch_balance,
            address,
            config=self.retry_config,
            no_retry=NON_RETRYABLE,
            label=f"{chain} balance for {address}",
        )

    async def _fetch_or_placeholder(
        self,
        address: str,
        chain: str,
        wallet_id: Optional[int] = None,
    ) -> WalletBalance:
        try:
            balance = await self.fetch_balance(address, chain)
        except Exception as e:
            logger.warning(f"Balance fetch failed for {chain}:{address}: {e}")
            return WalletBalance.placeholder(address, chain, str(e) or type(e).__name__, wallet_id)

        balance.id = wallet_id
        return balance

    async def fetch_balances(
        self,
        wallets: Sequence[tuple[str, str]],
        wallet_ids: Optional[Sequence[Optional[int]]] = None,
    ) -> list[WalletBalance]:
        """
        Fetch many wallets concurrently.

        Args:
            wallets: Ordered (address, chain) pairs
            wallet_ids: Optional row ids, index-aligned with `wallets`

        Returns:
            One result per input wallet, in input order. Failed wallets carry
            `balance="0"` and a non-empty `error`.
        """
        if wallet_ids is None:
            wallet_ids = [None] * len(wallets)

        return list(
            await asyncio.gather(
                *(
                    self._fetch_or_placeholder(address, chain, wallet_id)
                    for (address, chain), wallet_id in zip(wallets, wallet_ids)
                )
            )
        )

    async def close(self) -> None:
        """Close the RPC clients of all fetchers."""
        for fetcher in self.fetchers.values():
            await fetcher.close()


def build_default_fetchers() -> dict[str, BalanceFetcher]:
    """Instantiate a fetcher for every registered chain with a configured RPC URL."""
    settings = get_settings()
    rpc_urls = {
        "ethereum": settings.ethereum_rpc_url,
        "solana": settings.solana_rpc_url,
    }

    fetchers: dict[str, BalanceFetcher] = {}
    for chain in ChainRegistry.supported_chains():
        url = rpc_urls.get(chain)
        if not url:
            logger.warning(f"No RPC URL configured for {chain}; wallets on it will fail")
            continue
        fetcher_class = ChainRegistry.get_fetcher_class(chain)
        fetchers[chain] = fetcher_class(
            JSONRPCClient(url, timeout=settings.rpc_timeout_seconds)
        )
    return fetchers


# Singleton instance
_aggregator: Optional[WalletBalanceAggregator] = None


def get_balance_aggregator() -> WalletBalanceAggregator:
    """Get shared aggregator built from settings."""
    global _aggregator
    if _aggregator is None:
        settings = get_settings()
        _aggregator = WalletBalanceAggregator(
            build_default_fetchers(),
            RetryConfig(
                max_retries=settings.rpc_max_retries,
                base_delay=settings.rpc_base_delay,
                max_delay=settings.rpc_max_delay,
                exponential_base=settings.rpc_backoff_factor,
            ),
        )
    return _aggregator


async def close_balance_aggregator() -> None:
    """Close RPC clients of the shared aggregator, if one was created."""
    global _aggregator
    if _aggregator is not None:
        await _aggregator.close()
        _aggregator = None
