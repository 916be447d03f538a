import streamlit as st
from utils.api import APIClient
from utils.formatters import format_date
from config import API_URL, SESSION_COOKIE_NAME


def render():
    st.title("My Account")

    api = APIClient(API_URL, cookie_name=SESSION_COOKIE_NAME)

    st.subheader("Profile Information")

    user_info = api.get_me()
    if user_info["status"] == 200:
        user_data = user_info["data"]
        col1, col2 = st.columns(2)
        with col1:
            st.write(f"**Username:** {user_data.get('username')}")
        with col2:
            st.write(f"**ID:** {user_data.get('id')}")
        st.write(f"**Member since:** {format_date(user_data.get('createdAt', ''))}")
    elif user_info["status"] == 401:
        st.warning("Your session has expired. Please log in again.")
        st.session_state.is_authenticated = False
        st.session_state.token = None
        st.rerun()
    else:
        st.error("Unable to retrieve user information")

    st.divider()

    health = api.health()
    if health["status"] == 200:
        st.caption("Backend: online")
    else:
        st.caption(f"Backend: unreachable ({health.get('error', health['status'])})")

    if st.button("Log out", use_container_width=True):
        api.logout()
        st.session_state.is_authenticated = False
        st.session_state.user = None
        st.rerun()
