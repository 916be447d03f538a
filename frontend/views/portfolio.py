import streamlit as st
from config import API_URL, BLOCKCHAIN_OPTIONS, SESSION_COOKIE_NAME, SUPPORTED_CHAINS
from utils.api import APIClient
from utils.design_html import render_holding_card, render_wallet_card
from utils.display_figure import _build_holdings_dataframe, _build_wallet_tokens_dataframe


def _detail(resp: dict, default: str) -> str:
    data = resp.get("data")
    if isinstance(data, dict) and data.get("detail"):
        required = data.get("required")
        return f"{data['detail']}: {', '.join(required)}" if required else data["detail"]
    return resp.get("error") or default


def _render_forms(api: APIClient):
    col1, col2 = st.columns(2)

    with col1:
        with st.expander("➕ Add asset", expanded=False):
            with st.form("add_asset_form", clear_on_submit=True):
                asset_id = st.text_input("Asset id", placeholder="e.g. bitcoin, ethereum, solana")
                amount = st.number_input("Amount", min_value=0.0, step=0.1, format="%.8f")
                blockchain = st.selectbox("Blockchain", BLOCKCHAIN_OPTIONS)
                submitted = st.form_submit_button("Add asset", use_container_width=True)
                if submitted:
                    if not asset_id:
                        st.error("Asset id is required")
                    elif amount <= 0:
                        st.error("Amount must be positive")
                    else:
                        resp = api.add_asset(asset_id.strip().lower(), amount, blockchain)
                        if resp.get("status") == 200:
                            st.success(f"Added {amount} {asset_id}")
                            st.rerun()
                        else:
                            st.error(_detail(resp, "Could not add asset"))

    with col2:
        with st.expander("👛 Track wallet", expanded=False):
            with st.form("add_wallet_form", clear_on_submit=True):
                address = st.text_input("Address", placeholder="0x... or base58")
                chain = st.selectbox("Chain", SUPPORTED_CHAINS)
                submitted = st.form_submit_button("Track wallet", use_container_width=True)
                if submitted:
                    if not address:
                        st.error("Address is required")
                    else:
                        resp = api.add_wallet(address.strip(), chain)
                        if resp.get("status") == 200:
                            wallet = resp.get("data") or {}
                            if wallet.get("error"):
                                st.warning(f"Wallet saved, but its balance could not be fetched: {wallet['error']}")
                            else:
                                st.success("Wallet added")
                            st.rerun()
                        else:
                            st.error(_detail(resp, "Could not add wallet"))


def render():
    st.title("Portfolio")

    api = APIClient(API_URL, cookie_name=SESSION_COOKIE_NAME)

    _render_forms(api)
    st.divider()

    with st.spinner("Loading portfolio and wallet balances..."):
        resp = api.get_portfolio()

    if resp.get("status") == 401:
        st.warning("Your session has expired. Please log in again.")
        st.session_state.is_authenticated = False
        st.session_state.token = None
        st.rerun()
    if resp.get("status") != 200:
        st.error(_detail(resp, "Unable to load portfolio"))
        return

    portfolio = resp.get("data") or {}
    st.caption(portfolio.get("name", ""))

    wallets = portfolio.get("wallets") or []
    if st.session_state.get("refreshed_wallets") is not None:
        wallets = st.session_state.pop("refreshed_wallets")

    # Wallets
    header, button = st.columns([4, 1])
    with header:
        st.subheader("Wallets")
    with button:
        if st.button("🔄 Refresh balances", use_container_width=True, disabled=not wallets):
            with st.spinner("Refreshing balances..."):
                refreshed = api.refresh_balances()
            if refreshed.get("status") == 200:
                st.session_state.refreshed_wallets = refreshed.get("data") or []
                st.rerun()
            else:
                st.error(_detail(refreshed, "Refresh failed"))

    if wallets:
        cols = st.columns(2)
        for i, wallet in enumerate(wallets):
            with cols[i % 2]:
                render_wallet_card(wallet)

        df = _build_wallet_tokens_dataframe(wallets)
        if not df.empty:
            with st.expander("All wallet balances"):
                st.dataframe(df, use_container_width=True, hide_index=True)
    else:
        st.info("No wallets tracked yet.")

    st.divider()

    # Manual holdings
    st.subheader("Holdings")
    assets = portfolio.get("assets") or []
    if assets:
        cols = st.columns(3)
        for i, asset in enumerate(assets):
            with cols[i % 3]:
                render_holding_card(asset)

        holdings_df = _build_holdings_dataframe(assets)
        with st.expander("Holdings table"):
            st.dataframe(holdings_df, use_container_width=True, hide_index=True)
    else:
        st.info("No assets added yet.")
