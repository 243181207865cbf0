# taskapp/ui/todos.py

import requests
import streamlit as st
from taskapp.services.api import ApiError, add_todo, delete_todo, list_todos, update_todo


def todos_page(token):
    st.header("Your Todos")

    with st.form("add_todo", clear_on_submit=True):
        new_title = st.text_input("New todo")
        if st.form_submit_button("Add") and new_title.strip():
            run(add_todo, token, new_title)

    try:
        todos = list_todos(token)
    except ApiError as e:
        handle_error(e)
        return
    except requests.RequestException:
        st.error("Could not load todos: server unreachable")
        return

    if not todos:
        st.info("Nothing here yet - add a task above!")
        return

    for todo in todos:
        handle_todo_row(token, todo)


def handle_todo_row(token, todo):
    col_check, col_delete = st.columns([5, 1])
    with col_check:
        checked = st.checkbox(todo["title"], value=todo["done"], key=f"todo-{todo['id']}")
        if checked != todo["done"]:
            run(update_todo, token, todo["id"], todo["title"], checked)
            st.rerun()
    with col_delete:
        if st.button("Delete", key=f"delete-{todo['id']}"):
            run(delete_todo, token, todo["id"])
            st.rerun()


def run(action, *args):
    try:
        return action(*args)
    except ApiError as e:
        handle_error(e)
    except requests.RequestException:
        st.error("Server unreachable, please try again")


def handle_error(e: ApiError):
    if e.status_code == 401:
        # token expired or rejected; back to the login page
        st.session_state.pop("token", None)
        st.session_state.pop("user", None)
        st.warning("Session expired, please log in again.")
        st.rerun()
    st.error(e.message)
