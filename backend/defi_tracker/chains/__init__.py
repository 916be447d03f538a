"""Chain-specific balance fetchers, JSON-RPC transport and retry policy."""

from defi_tracker.chains.base import (
    BalanceFetcher,
    InvalidAddressError,
    UnsupportedChainError,
    format_units,
)
from defi_tracker.chains.registry import ChainRegistry
from defi_tracker.chains.retry import RetryConfig, call_with_retry
from defi_tracker.chains.rpc import JSONRPCClient, JSONRPCError

# Import fetchers to trigger registration
from defi_tracker.chains.ethereum import EthereumBalanceFetcher
from defi_tracker.chains.solana import SolanaBalanceFetcher

__all__ = [
    "BalanceFetcher",
    "ChainRegistry",
    "EthereumBalanceFetcher",
    "InvalidAddressError",
    "JSONRPCClient",
    "JSONRPCError",
    "RetryConfig",
    "SolanaBalanceFetcher",
    "UnsupportedChainError",
    "call_with_retry",
    "format_units",
]
