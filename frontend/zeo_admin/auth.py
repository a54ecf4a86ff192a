import streamlit as st
from typing import Optional, Dict, Any
from zeo_admin.api_client import api_client

SESSION_DEFAULTS = {
    "authenticated": False,
    "access_token": None,
    "user_info": None,
    "token_checked": False,
}


def init_session_state():
    """Initialize session state and re-attach a stored token to the client."""
    for key, value in SESSION_DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = value

    token = st.session_state.access_token
    if not token:
        return

    # Streamlit reruns the script, the client keeps its headers across runs
    api_client.set_auth_token(token)

    # Check a restored token once per session; a stale one sends the admin back to the login form
    if not st.session_state.token_checked:
        st.session_state.token_checked = True
        response = api_client.get_user_info()
        if response["success"]:
            st.session_state.user_info = response["data"]
        elif response.get("status_code") in (401, 403):
            logout()


def login(email: str, password: str) -> bool:
    """Exchange the admin credentials for a token."""
    response = api_client.login(email, password)
    if not response["success"]:
        st.error(f"Login failed: {response['error']}")
        return False

    data = response["data"]
    api_client.set_auth_token(data["token"])
    st.session_state.update({
        "authenticated": True,
        "access_token": data["token"],
        "user_info": data.get("user"),
        "token_checked": True,
    })
    return True


def logout():
    """Forget the token; there is nothing to revoke server side."""
    st.session_state.update(SESSION_DEFAULTS)
    api_client.clear_auth_token()


def require_auth():
    """Stop the page unless an admin is logged in."""
    if not st.session_state.authenticated:
        st.warning("Please log in to manage website content.")
        show_login_form()
        st.stop()


def show_login_form():
    st.subheader("🔐 Admin Login")

    with st.form("login_form"):
        email = st.text_input("Admin email")
        password = st.text_input("Password", type="password")

        if st.form_submit_button("Login", type="primary"):
            if not email or not password:
                st.error("Please enter both email and password.")
            elif login(email, password):
                st.rerun()


def get_current_user() -> Optional[Dict[str, Any]]:
    return st.session_state.user_info


def check_api_response(response: Dict[str, Any]) -> bool:
    """Show the error of a failed call. Auth failures log the admin out."""
    if response["success"]:
        return True

    if response.get("status_code") in (401, 403):
        # No refresh tokens here, an expired token means logging in again
        logout()
        st.error("Session expired. Please log in again.")
        st.rerun()
    else:
        st.error(response["error"])
    return False
