# taskapp/ui/login.py

import requests
import streamlit as st
from taskapp.services.api import ApiError, get_user_info, login_user, register_user


def logout():
    for key in ("token", "user"):
        st.session_state.pop(key, None)


def login_page():
    st.title("🔐 Login")

    if "show_register" not in st.session_state:
        st.session_state["show_register"] = False

    if st.session_state["show_register"]:
        show_register_form()
    else:
        show_login_form()


def show_login_form():
    with st.form("login_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login")

    if submitted:
        with st.spinner("Logging in..."):
            try:
                token = login_user(username, password)
                st.session_state["user"] = get_user_info(token)
                st.session_state["token"] = token
            except ApiError as e:
                st.error(f"❌ Login failed: {e.message}")
            except requests.RequestException:
                st.error("❌ Login failed: server unreachable")
            else:
                st.rerun()

    if st.button("Register"):
        st.session_state["show_register"] = True
        st.rerun()


def show_register_form():
    st.subheader("📝 Register")

    new_user = st.text_input("New username", key="new_user")
    new_pass = st.text_input("New password", type="password", key="new_pass")

    if st.button("Create account"):
        with st.spinner("Creating account..."):
            try:
                register_user(new_user, new_pass)
            except ApiError as e:
                st.error(f"❌ Failed: {e.message}")
            except requests.RequestException:
                st.error("❌ Registration failed: server unreachable")
            else:
                st.success("🎉 Account created! Please log in.")
                st.session_state["show_register"] = False
                st.rerun()

    if st.button("← Back to login"):
        st.session_state["show_register"] = False
        st.rerun()
