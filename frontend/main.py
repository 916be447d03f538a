import streamlit as st
from streamlit_option_menu import option_menu
from views import login, market, account, portfolio
from utils.styles import inject_styles
from config import APP_NAME

NAV_OPTIONS = ["Market", "Portfolio", "Account"]
NAV_ICONS = ["graph-up", "wallet", "gear"]


def init_session():
    defaults = {
        "is_authenticated": False,
        "user": None,
        "token": None,
        "nav_page": "Market",
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def main():
    st.set_page_config(page_title=APP_NAME, layout="wide")
    inject_styles()  # Apply dark theme CSS
    init_session()

    # --- Sidebar navigation
    with st.sidebar:
        current_page = st.session_state.get("nav_page", "Market")
        try:
            default_index = NAV_OPTIONS.index(current_page)
        except ValueError:
            default_index = 0

        page_selected = option_menu(
            menu_title=APP_NAME,
            options=NAV_OPTIONS,
            icons=NAV_ICONS,
            default_index=default_index,
            key="main_nav",
        )

        if page_selected != current_page:
            st.session_state["nav_page"] = page_selected
            st.rerun()

        user = st.session_state.get("user") or {}
        if st.session_state["is_authenticated"] and user:
            st.caption(f"Signed in as **{user.get('username')}**")

    page = st.session_state.get("nav_page", "Market")

    # --- Routing; everything except Market needs a session
    if page == "Market":
        market.render()
        return

    if not st.session_state["is_authenticated"]:
        login.render()
        st.stop()

    if page == "Portfolio":
        portfolio.render()
    elif page == "Account":
        account.render()


if __name__ == "__main__":
    main()
