import pandas as pd
import plotly.graph_objects as go
from typing import List, Dict
from utils.styles import COLORS
from utils.formatters import native_symbol


def _create_sparkline(prices: List[float], height: int = 60) -> go.Figure:
    """
    Create a compact 7 day price line for an asset card.

    Args:
        prices: Price series, oldest first

    Returns:
        Plotly Figure without axes; green if the series ends up, red otherwise
    """
    fig = go.Figure()

    if prices:
        rising = prices[-1] >= prices[0]
        line_color = COLORS["accent_green"] if rising else COLORS["accent_red"]
        fill_color = 'rgba(59, 185, 80, 0.12)' if rising else 'rgba(248, 81, 73, 0.12)'
        low = min(prices)

        fig.add_trace(go.Scatter(
            y=prices,
            mode='lines',
            line=dict(color=line_color, width=1.8),
            fill='tozeroy',
            fillcolor=fill_color,
            hovertemplate='$%{y:,.4f}<extra></extra>',
        ))
        fig.update_yaxes(range=[low * 0.995, max(prices) * 1.005])

    fig.update_layout(
        paper_bgcolor='rgba(0,0,0,0)',
        plot_bgcolor='rgba(0,0,0,0)',
        margin=dict(l=0, r=0, t=0, b=0),
        height=height,
        showlegend=False,
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
    )
    return fig


def _build_holdings_dataframe(assets: List[Dict]) -> pd.DataFrame:
    """
    Convert manual holdings into a display DataFrame.

    Expected asset fields (camelCase, as returned by the API):
    - assetId, blockchain, amount (decimal string), purchaseDate
    """
    if not assets:
        return pd.DataFrame()

    rows = []
    for asset in assets:
        rows.append({
            "Asset": asset.get("assetId", ""),
            "Blockchain": asset.get("blockchain", ""),
            "Amount": asset.get("amount", "0"),
            "Added": (asset.get("purchaseDate") or "")[:10],
        })

    df = pd.DataFrame(rows)
    df["Amount"] = pd.to_numeric(df["Amount"], errors="coerce")
    return df.reset_index(drop=True)


def _build_wallet_tokens_dataframe(wallets: List[Dict]) -> pd.DataFrame:
    """
    Flatten wallet balances into one row per (wallet, token).

    Failed wallets (with an `error`) are skipped.
    """
    rows = []
    for wallet in wallets:
        if wallet.get("error"):
            continue
        address = wallet.get("address", "")
        chain = wallet.get("chain", "")
        rows.append({
            "Wallet": address,
            "Chain": chain,
            "Token": native_symbol(chain),
            "Balance": wallet.get("balance", "0"),
        })
        for token in wallet.get("tokenBalances") or []:
            rows.append({
                "Wallet": address,
                "Chain": chain,
                "Token": token.get("symbol", ""),
                "Balance": token.get("balance", "0"),
            })

    if not rows:
        return pd.DataFrame()

    df = pd.DataFrame(rows)
    df["Balance"] = pd.to_numeric(df["Balance"], errors="coerce")
    return df
