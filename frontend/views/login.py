# views/login.py

import streamlit as st
from utils.api import APIClient
from config import API_URL, SESSION_COOKIE_NAME

api = APIClient(API_URL, cookie_name=SESSION_COOKIE_NAME)


def _start_session(result: dict):
    data = result.get("data") or {}
    st.session_state.user = data.get("user")
    st.session_state["is_authenticated"] = True
    st.rerun()


def _error_message(result: dict, default: str) -> str:
    data = result.get("data") or {}
    detail = data.get("detail", result.get("error", default))
    required = data.get("required")
    if required:
        return f"{detail}: {', '.join(required)}"
    return detail


def render():
    tab1, tab2 = st.tabs(["Login", "Register"])

    with tab1:
        st.subheader("Login")
        with st.form("login_form"):
            username = st.text_input("Username")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Login")

            if submitted:
                if username and password:
                    result = api.login(username, password)
                    if result["status"] == 200:
                        st.success("Logged in successfully!")
                        _start_session(result)
                    else:
                        st.error(f"Login failed: {_error_message(result, 'Login failed')}")
                else:
                    st.warning("Please enter username and password")

    with tab2:
        st.subheader("Register")
        with st.form("register_form"):
            username = st.text_input("Username", key="reg_username", help="3 to 50 characters")
            new_password = st.text_input("Password", type="password", key="reg_password", help="Minimum 8 characters")
            confirm_password = st.text_input("Confirm Password", type="password")
            submitted = st.form_submit_button("Register")

            if submitted:
                if not all([username, new_password, confirm_password]):
                    st.warning("Please fill all fields")
                elif new_password != confirm_password:
                    st.error("Passwords do not match")
                else:
                    result = api.register(username, new_password)
                    if result["status"] in [200, 201]:
                        st.success("Registration successful!")
                        _start_session(result)
                    else:
                        st.error(f"Registration failed: {_error_message(result, 'Registration failed')}")
