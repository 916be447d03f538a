"""
Solana balance fetcher: SOL plus SPL token accounts owned by the address.
"""
import re
from typing import Any

from defi_tracker.chains.base import BalanceFetcher, InvalidAddressError, format_units
from defi_tracker.chains.registry import ChainRegistry
from defi_tracker.schemas.wallet import TokenBalance, WalletBalance

TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"

# Base58, 32-byte public keys
ADDRESS_PATTERN = re.compile(r"^[1-9A-HJ-NP-Za-km-z]{32,44}$")

KNOWN_MINTS: dict[str, str] = {
    "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v": "USDC",
    "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB": "USDT",
    "mSoLzYCxHdYgdzU16g5QSh3i5K3z3KZK7ytfqcJm7So": "mSOL",
    "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263": "BONK",
    "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN": "JUP",
}


def mint_symbol(mint: str) -> str:
    """Symbol for a known mint, otherwise a shortened mint address."""
    return KNOWN_MINTS.get(mint) or f"{mint[:4]}...{mint[-4:]}"


def _parse_token_account(account: dict[str, Any]) -> TokenBalance | None:
    info = account["account"]["data"]["parsed"]["info"]
    token_amount = info["tokenAmount"]
    raw = int(token_amount["amount"])
    if raw == 0:
        return None
    mint = info["mint"]
    return TokenBalance(
        symbol=mint_symbol(mint),
        balance=format_units(raw, int(token_amount["decimals"])),
        address=mint,
    )


@ChainRegistry.register
class SolanaBalanceFetcher(BalanceFetcher):
    """Reads balances through `getBalance` and `getTokenAccountsByOwner`."""

    chain = "solana"
    native_symbol = "SOL"
    native_decimals = 9

    def validate_address(self, address: str) -> None:
        if not ADDRESS_PATTERN.match(address):
            raise InvalidAddressError(f"Invalid solana address: {address}")

    async def fetch_balance(self, address: str) -> WalletBalance:
        self.validate_address(address)

        lamports = await self.rpc.make_request("getBalance", [address])
        accounts = await self.rpc.make_request(
            "getTokenAccountsByOwner",
            [address, {"programId": TOKEN_PROGRAM_ID}, {"encoding": "jsonParsed"}],
        )

        tokens = []
        for account in accounts.get("value", []):
            token = _parse_token_account(account)
            if token is not None:
                tokens.append(token)

        return WalletBalance(
            address=address,
            chain=self.chain,
            balance=format_units(int(lamports["value"]), self.native_decimals),
            token_balances=tokens,
        )
