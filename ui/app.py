import logfire
import streamlit as st

from settings import logfire_settings
from ui.api import ApiClient
from ui.components import close_list_views, get_client, get_session, show_flash
from ui.session import SessionStore
from ui.state import init_state
from ui.tabs import (
    render_auth_tab,
    render_banks_tab,
    render_content_tab,
    render_dashboard_tab,
    render_dealers_tab,
    render_loans_tab,
    render_profile_tab,
    render_users_tab,
)
from ui.tabs.auth import get_auth_flow
from ui.utils import run_async

PAGES = [
    "Dashboard",
    "Bank Loans",
    "Dealers",
    "Users",
    "Banks",
    "Content",
    "Profile",
]


@st.cache_resource
def configure_logging() -> None:
    logfire.configure(
        service_name=logfire_settings.service_name,
        environment=logfire_settings.environment,
        send_to_logfire=logfire_settings.send_to_logfire,
    )
    logfire.instrument_httpx()


def logout(client: ApiClient, session: SessionStore) -> None:
    flow = get_auth_flow(client, session)
    run_async(flow.logout())
    close_list_views()
    st.session_state["selected_record"] = {}
    st.session_state["auth_step"] = "login"
    st.rerun()


def render_sidebar(client: ApiClient, session: SessionStore) -> str:
    target = st.session_state.pop("nav_target", None)
    if target in PAGES:
        st.session_state["page"] = target

    with st.sidebar:
        st.title("CarTIBI")
        page = st.radio("Navigation", options=PAGES, key="page")
        st.divider()
        user = session.user
        if user is not None:
            st.caption(f"Signed in as **{user.name}**")
        if st.button("Logout", key="logout"):
            logout(client=client, session=session)
    return page


def main() -> None:
    st.set_page_config(page_title="CarTIBI Super Admin", layout="wide")
    configure_logging()
    init_state()

    session = get_session()
    client = get_client()
    if not session.is_authenticated:
        render_auth_tab(client, session)
        return

    page = render_sidebar(client=client, session=session)
    show_flash()
    if page == "Dashboard":
        render_dashboard_tab(client)
    elif page == "Bank Loans":
        render_loans_tab(client)
    elif page == "Dealers":
        render_dealers_tab(client)
    elif page == "Users":
        render_users_tab(client)
    elif page == "Banks":
        render_banks_tab(client)
    elif page == "Content":
        render_content_tab(client)
    elif page == "Profile":
        render_profile_tab(client, session)


if __name__ == "__main__":
    main()
