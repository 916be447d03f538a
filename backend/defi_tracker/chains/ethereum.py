"""
Ethereum balance fetcher: ETH plus a fixed set of ERC-20 tokens.
"""
import asyncio
import re

from defi_tracker.chains.base import BalanceFetcher, InvalidAddressError, format_units
from defi_tracker.chains.registry import ChainRegistry
from defi_tracker.schemas.wallet import TokenBalance, WalletBalance

# balanceOf(address)
BALANCE_OF_SELECTOR = "0x70a08231"

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")

# Mainnet ERC-20 allow-list: symbol -> (contract, decimals)
ERC20_TOKENS: dict[str, tuple[str, int]] = {
    "USDT": ("0xdAC17F958D2ee523a2206206994597C13D831ec7", 6),
    "USDC": ("0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48", 6),
    "DAI": ("0x6B175474E89094C44Da98b954EedeAC495271d0F", 18),
    "WETH": ("0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", 18),
    "LINK": ("0x514910771AF9Ca656af840dff83E8264EcF986CA", 18),
    "UNI": ("0x1f9840a85d5aF5bf1D1762F925BDADdC4201F984", 18),
}


def encode_balance_of(owner: str) -> str:
    """ABI-encode a `balanceOf(owner)` call."""
    return BALANCE_OF_SELECTOR + owner.lower().removeprefix("0x").rjust(64, "0")


def parse_quantity(value: str | None) -> int:
    """Parse a hex quantity; empty return data ("0x") counts as zero."""
    if not value or value == "0x":
        return 0
    return int(value, 16)


@ChainRegistry.register
class EthereumBalanceFetcher(BalanceFetcher):
    """Reads balances through `eth_getBalance` and `eth_call`."""

    chain = "ethereum"
    native_symbol = "ETH"
    native_decimals = 18

    def validate_address(self, address: str) -> None:
        if not ADDRESS_PATTERN.match(address):
            raise InvalidAddressError(f"Invalid ethereum address: {address}")

    async def _token_balance(self, owner: str, symbol: str, contract: str, decimals: int) -> TokenBalance:
        raw = await self.rpc.make_request(
            "eth_call",
            [{"to": contract, "data": encode_balance_of(owner)}, "latest"],
        )
        return TokenBalance(
            symbol=symbol,
            balance=format_units(parse_quantity(raw), decimals),
            address=contract,
        )

    async def fetch_balance(self, address: str) -> WalletBalance:
        self.validate_address(address)

        wei = await self.rpc.make_request("eth_getBalance", [address, "latest"])
        tokens = await asyncio.gather(
            *(
                self._token_balance(address, symbol, contract, decimals)
                for symbol, (contract, decimals) in ERC20_TOKENS.items()
            )
        )

        return WalletBalance(
            address=address,
            chain=self.chain,
            balance=format_units(parse_quantity(wei), self.native_decimals),
            token_balances=[t for t in tokens if t.balance != "0"],
        )
