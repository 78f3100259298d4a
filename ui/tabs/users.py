from typing import Any

import streamlit as st

from enums import AccountStatus, EntityKind, Role
from schemas import UserRequest
from ui.api import ApiClient
from ui.components import (
    action_buttons,
    back_button,
    field_grid,
    flash,
    get_list_view,
    load_record,
    open_record,
    render_list,
    report_error,
    selected_record_id,
)
from ui.exceptions import ApiClientError
from ui.fields import USER_COUNTRY, display_id
from ui.utils import (
    format_date,
    format_date_long,
    format_datetime,
    run_async,
    show_table,
    status_label,
)

KIND = EntityKind.USERS
TABS = [
    ("Active", AccountStatus.ACTIVE),
    ("Blocked", AccountStatus.BLOCKED),
    ("Deleted", AccountStatus.DELETED),
]


def user_row(user: dict[str, Any]) -> dict[str, str]:
    return {
        "ID": display_id(KIND, user),
        "User Name": str(user.get("name") or "-"),
        "Phone Number": str(user.get("phone") or "-"),
        "Country": USER_COUNTRY.derive(user),
        "Joining Date": format_date(user.get("createdAt")),
        "Last Activity": format_datetime(user.get("lastLogin")),
    }


def render_users_tab(client: ApiClient) -> None:
    """Render user management: list, detail and creation."""
    st.subheader("User Management")
    record_id = selected_record_id(KIND)
    if record_id:
        render_user_detail(client=client, record_id=record_id)
        return

    view = get_list_view(key="users", client=client, kind=KIND, tabs=TABS)

    def render_rows(users: list[dict[str, Any]]) -> None:
        show_table([user_row(user) for user in users])
        options = {display_id(KIND, user): user for user in users}
        if not options:
            return
        selected = st.selectbox(
            "Open user",
            options=list(options),
            format_func=lambda item: f"{item} - {options[item].get('name', '')}",
            key="users_open_selector",
        )
        if st.button("Open", key="users_open"):
            open_record(KIND, options[selected])
            st.rerun()

    render_list(
        key="users",
        view=view,
        render_rows=render_rows,
        search_placeholder="Search users",
    )

    with st.expander("Add user"):
        render_new_user_form(client=client)


def render_user_detail(client: ApiClient, record_id: str) -> None:
    user = load_record(client=client, kind=KIND, record_id=record_id)
    if user is None:
        return

    back_button(KIND)
    st.markdown(f"### {user.get('name') or display_id(KIND, user)}")
    st.caption("Active" if user.get("isActive", True) else "Blocked")
    field_grid(
        [
            ("User Name", user.get("name")),
            ("Phone Number", user.get("phone")),
            ("Email Address", user.get("email")),
            ("Role", status_label(user.get("role"))),
            ("Position", user.get("position")),
            ("Country", USER_COUNTRY.derive(user)),
            ("Joined", format_date_long(user.get("createdAt"))),
            ("Last Activity", format_datetime(user.get("lastLogin"))),
        ]
    )
    action_buttons(key="user_detail", client=client, kind=KIND, record=user)


def render_new_user_form(client: ApiClient) -> None:
    with st.form("create_user"):
        name = st.text_input("Name")
        email = st.text_input("Email")
        phone = st.text_input("Phone")
        role = st.selectbox("Role", options=[role.value for role in Role], index=1)
        position = st.text_input("Position")
        submitted = st.form_submit_button("Create user")

    if not submitted:
        return
    if not name.strip() or not phone.strip():
        st.warning("Enter name and phone")
        return

    payload = UserRequest(
        name=name.strip(),
        email=email.strip() or None,
        phone=phone.strip(),
        role=Role(role),
        position=position.strip() or None,
    )
    try:
        run_async(client.create(kind=KIND, payload=payload))
    except ApiClientError as exc:
        report_error(exc)
        return

    get_list_view(key="users", client=client, kind=KIND).controller.invalidate()
    flash("User created")
    st.rerun()
