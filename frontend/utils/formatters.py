"""
Centralized formatting utilities for the dashboard.
"""
from datetime import datetime
from typing import Optional, Tuple

NATIVE_SYMBOLS = {
    "ethereum": "ETH",
    "solana": "SOL",
    "avalanche": "AVAX",
    "bsc": "BNB",
    "bitcoin": "BTC",
}


def format_number(value: float, decimals: int = 2) -> str:
    """Format numbers with K/M/B suffixes."""
    try:
        if value is None:
            return "-"
        if abs(value) >= 1_000_000_000:
            return f"{value/1_000_000_000:.1f}B"
        if abs(value) >= 1_000_000:
            return f"{value/1_000_000:.1f}M"
        if abs(value) >= 1_000:
            return f"{value/1_000:.1f}k"
        return f"{value:.{decimals}f}"
    except Exception:
        return "-"


def format_currency(value: float, decimals: Optional[int] = None) -> str:
    """
    Format as USD with $ prefix.

    Without explicit decimals, sub-dollar prices keep up to 6 places.
    """
    try:
        if value is None:
            return "-"
        if decimals is None:
            decimals = 2 if abs(value) >= 1 or value == 0 else 6
        return f"${value:,.{decimals}f}"
    except Exception:
        return "-"


def format_change(value: Optional[float], decimals: int = 2) -> str:
    """Format a percentage change that is already in percent units (2.5 -> "+2.50%")."""
    try:
        if value is None:
            return "-"
        return f"{value:+.{decimals}f}%"
    except Exception:
        return "-"


def format_balance(value: str, decimals: int = 6) -> str:
    """Format a decimal-string balance, trimming trailing zeros."""
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return "-"
    text = f"{amount:,.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_date(date_str: str, fmt: str = "%d/%m/%Y") -> str:
    """Format ISO date string for display."""
    try:
        if not date_str:
            return "-"
        dt = datetime.fromisoformat(date_str.replace('Z', '+00:00'))
        return dt.strftime(fmt)
    except Exception:
        return "-"


def format_datetime_parts(date_str: str) -> Tuple[str, str]:
    """Return (date_str, time_str) tuple."""
    try:
        if not date_str:
            return "", ""
        dt = datetime.fromisoformat(date_str.replace('Z', '+00:00'))
        return dt.strftime("%Y-%m-%d"), dt.strftime("%H:%M:%S")
    except Exception:
        return "", ""


def shorten_address(address: str, head: int = 6, tail: int = 4) -> str:
    """Shorten a wallet address for display (0x1234...abcd)."""
    if not address:
        return ""
    if len(address) <= head + tail + 3:
        return address
    return f"{address[:head]}...{address[-tail:]}"


def native_symbol(chain: str) -> str:
    """Native token symbol for a chain tag."""
    return NATIVE_SYMBOLS.get((chain or "").lower(), (chain or "").upper())


def get_change_color_class(value: Optional[float]) -> str:
    """Return CSS class based on a price change."""
    if value is None:
        return ""
    if value > 0:
        return "metric-positive"
    elif value < 0:
        return "metric-negative"
    return ""

