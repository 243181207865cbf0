# taskapp/main.py

import streamlit as st
from dotenv import load_dotenv

load_dotenv()

from taskapp.ui.login import login_page, logout  # noqa: E402
from taskapp.ui.todos import todos_page  # noqa: E402


def main_page():
    user = st.session_state["user"]
    st.title("Task Manager")

    st.sidebar.markdown(f"Welcome, **{user['username']}**")
    if st.sidebar.button("🔓 Logout"):
        logout()
        st.rerun()

    todos_page(st.session_state["token"])


if "token" not in st.session_state:
    login_page()
else:
    main_page()
