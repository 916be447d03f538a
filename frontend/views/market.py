import streamlit as st
from utils.api import APIClient
from utils.design_html import render_asset_card, render_news_card, render_trending_badges
from utils.display_figure import _create_sparkline
from config import API_URL, NEWS_REFRESH_SECONDS, PRICE_REFRESH_SECONDS

api = APIClient(API_URL)


@st.cache_data(ttl=PRICE_REFRESH_SECONDS, show_spinner=False)
def load_top_assets() -> list:
    result = api.get_top_assets()
    return result.get("data") or [] if result["status"] == 200 else []


@st.cache_data(ttl=NEWS_REFRESH_SECONDS, show_spinner=False)
def load_trending() -> list:
    result = api.get_trending()
    return result.get("data") or [] if result["status"] == 200 else []


@st.cache_data(ttl=NEWS_REFRESH_SECONDS, show_spinner=False)
def load_news() -> list:
    result = api.get_news()
    return result.get("data") or [] if result["status"] == 200 else []


@st.fragment(run_every=NEWS_REFRESH_SECONDS)
def _trending_section():
    st.subheader("🔥 Trending")
    coins = load_trending()
    if coins:
        render_trending_badges(coins)
    else:
        st.caption("No trending data available")


@st.fragment(run_every=PRICE_REFRESH_SECONDS)
def _top_assets_section():
    st.subheader("Top Assets")
    assets = load_top_assets()
    if not assets:
        st.info("Market data is unavailable right now.")
        return

    chains = sorted({a.get("blockchain", "") for a in assets})
    selected = st.multiselect("Chains", chains, default=chains, key="market_chains")

    cols = st.columns(3)
    for i, asset in enumerate(a for a in assets if a.get("blockchain") in selected):
        with cols[i % 3]:
            render_asset_card(asset)
            if asset.get("sparkline"):
                st.plotly_chart(
                    _create_sparkline(asset["sparkline"]),
                    use_container_width=True,
                    config={"displayModeBar": False},
                    key=f"spark_{asset['id']}",
                )


@st.fragment(run_every=NEWS_REFRESH_SECONDS)
def _news_section():
    st.subheader("📰 News")
    items = load_news()
    if not items:
        st.caption("No news available")
    for item in items[:10]:
        render_news_card(item)


def render():
    st.title("Market Overview")
    _trending_section()
    st.divider()

    left, right = st.columns([2, 1])
    with left:
        _top_assets_section()
    with right:
        _news_section()
