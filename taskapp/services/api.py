# taskapp/services/api.py

import os
import requests

# Base URL of the TaskApi backend
TASKAPI_URL = os.getenv("TASKAPI_URL", "http://localhost:8000")

TIMEOUT = 10


class ApiError(Exception):
    """
    Raised when the backend answers with an error status.
    Carries the status code and the server's message.
    """

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


def _check(res):
    if res.ok:
        return res
    try:
        message = res.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        message = res.text or res.reason
    raise ApiError(res.status_code, message)


# -------------------------------
# Authentication-related functions
# -------------------------------

def register_user(username, password):
    """
    Creates an account and returns {"id", "username"}.
    """
    res = requests.post(
        f"{TASKAPI_URL}/register",
        json={"username": username, "password": password},
        timeout=TIMEOUT,
    )
    return _check(res).json()


def login_user(username, password):
    """
    Logs in a user and returns the bearer token.
    """
    res = requests.post(
        f"{TASKAPI_URL}/login",
        json={"username": username, "password": password},
        timeout=TIMEOUT,
    )
    return _check(res).json()["token"]


def get_user_info(token):
    """
    Retrieves user information using the access token.
    """
    res = requests.get(f"{TASKAPI_URL}/me", headers=auth_headers(token), timeout=TIMEOUT)
    return _check(res).json()


# -------------------------
# Todos
# -------------------------

def list_todos(token):
    res = requests.get(f"{TASKAPI_URL}/todos", headers=auth_headers(token), timeout=TIMEOUT)
    return _check(res).json()


def add_todo(token, title, done=False):
    res = requests.post(
        f"{TASKAPI_URL}/todos",
        json={"title": title, "done": done},
        headers=auth_headers(token),
        timeout=TIMEOUT,
    )
    return _check(res).json()


def update_todo(token, todo_id, title, done):
    res = requests.put(
        f"{TASKAPI_URL}/todos/{todo_id}",
        json={"title": title, "done": done},
        headers=auth_headers(token),
        timeout=TIMEOUT,
    )
    _check(res)
    return True


def delete_todo(token, todo_id):
    res = requests.delete(
        f"{TASKAPI_URL}/todos/{todo_id}",
        headers=auth_headers(token),
        timeout=TIMEOUT,
    )
    _check(res)
    return True
