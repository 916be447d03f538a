import html

import streamlit as st
from utils.styles import chain_color
from utils.formatters import format_balance
from utils.formatters import format_change
from utils.formatters import format_currency
from utils.formatters import format_date
from utils.formatters import format_datetime_parts
from utils.formatters import format_number
from utils.formatters import get_change_color_class
from utils.formatters import native_symbol
from utils.formatters import shorten_address


def _chain_badge(chain: str) -> str:
    color = chain_color(chain)
    return (
        f'<span class="chain-badge" style="background:{color}33;color:{color};">'
        f'{html.escape(chain or "")}</span>'
    )


def render_asset_card(asset: dict):
    """Header of a top-asset card; the sparkline is drawn below it by the caller."""
    change = asset.get("price_change_percentage_24h")
    image = asset.get("image")
    img_tag = f'<img src="{html.escape(image)}"/>' if image else ""
    st.markdown(f"""
    <div class="asset-card">
        <div class="asset-card-header">
            {img_tag}
            <div>
                <div class="asset-card-title">{html.escape(asset.get('name', ''))}</div>
                <div class="asset-card-symbol">{html.escape(asset.get('symbol', ''))}</div>
            </div>
            <div style="margin-left:auto;">{_chain_badge(asset.get('blockchain', ''))}</div>
        </div>
        <div class="asset-card-price">{format_currency(asset.get('current_price'))}</div>
        <div class="asset-card-meta">
            <span class="{get_change_color_class(change)}">{format_change(change)}</span>
            &nbsp;·&nbsp; Vol {format_number(asset.get('volume_24h'))}
        </div>
    </div>
    """, unsafe_allow_html=True)


def render_trending_badges(coins: list):
    badges = []
    for coin in coins:
        thumb = coin.get("thumb")
        img_tag = f'<img src="{html.escape(thumb)}"/>' if thumb else ""
        badges.append(
            f'<span class="trending-badge">{img_tag}'
            f'<b>{html.escape((coin.get("symbol") or "").upper())}</b>'
            f'{coin.get("priceBtc", 0):.8f} BTC</span>'
        )
    st.markdown(f'<div>{"".join(badges)}</div>', unsafe_allow_html=True)


def render_news_card(item: dict):
    description = item.get("description") or ""
    if len(description) > 280:
        description = description[:277] + "..."
    categories = ", ".join(item.get("categories") or [])
    day, time = format_datetime_parts(item.get("publishedAt", ""))
    st.markdown(f"""
    <div class="news-card">
        <a href="{html.escape(item.get('url', '#'))}" target="_blank">{html.escape(item.get('title', ''))}</a>
        <div class="news-card-body">{html.escape(description)}</div>
        <div class="asset-card-meta">
            {html.escape(item.get('source', ''))} · {day} {time[:5]}
            {f' · {html.escape(categories)}' if categories else ''}
        </div>
    </div>
    """, unsafe_allow_html=True)


def render_wallet_card(wallet: dict):
    """Wallet with native and token balances, or its error message."""
    chain = wallet.get("chain", "")
    symbol = native_symbol(chain)
    error = wallet.get("error")

    token_rows = "".join(
        f'<div class="token-row"><span>{html.escape(t.get("symbol", ""))}</span>'
        f'<span>{format_balance(t.get("balance"))}</span></div>'
        for t in wallet.get("tokenBalances") or []
    )
    error_html = f'<div class="wallet-error">⚠ {html.escape(error)}</div>' if error else ""

    st.markdown(f"""
    <div class="wallet-card">
        <div class="asset-card-header">
            {_chain_badge(chain)}
            <span class="wallet-address" title="{html.escape(wallet.get('address', ''))}">
                {html.escape(shorten_address(wallet.get('address', '')))}
            </span>
        </div>
        <div class="wallet-balance">{format_balance(wallet.get('balance'))} {symbol}</div>
        {token_rows}
        {error_html}
    </div>
    """, unsafe_allow_html=True)


def render_holding_card(asset: dict):
    st.markdown(f"""
    <div class="asset-card">
        <div class="asset-card-header">
            <div class="asset-card-title">{html.escape(asset.get('assetId', ''))}</div>
            <div style="margin-left:auto;">{_chain_badge(asset.get('blockchain', ''))}</div>
        </div>
        <div class="asset-card-price">{format_balance(asset.get('amount'))}</div>
        <div class="asset-card-meta">Added {format_date(asset.get('purchaseDate', ''))}</div>
    </div>
    """, unsafe_allow_html=True)
