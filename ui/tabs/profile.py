import streamlit as st

from schemas import (
    GlobalPreferencesRequest,
    NotificationSettingsRequest,
    ProfileUpdateRequest,
)
from ui.api import ApiClient
from ui.components import report_error
from ui.exceptions import ApiClientError
from ui.session import SessionStore
from ui.utils import run_async

LANGUAGES = ["English", "Arabic"]
CURRENCIES = ["Saudi Arabian Riyal - SAR", "UAE Dirham - AED", "US Dollar - USD"]
TIMEZONES = ["(GMT+03:00) KSA", "(GMT+04:00) UAE", "(GMT+00:00) UTC"]
COUNTRIES = ["Saudi Arabia", "United Arab Emirates", "United States", "United Kingdom"]
NOTIFICATION_OPTIONS = [
    ("new_requests", "Allow receiving messages from our platform", True),
    ("reminders", "Allow receiving updates regarding orders and sales", False),
    (
        "policy_and_community",
        "Allow receiving updates on our rules and regulations",
        True,
    ),
    (
        "account_support",
        "Allow receiving messages about personal accounts, legal alerts",
        False,
    ),
]


def render_profile_tab(client: ApiClient, session: SessionStore) -> None:
    """Render login details, notification settings and global preferences."""
    st.subheader("Profile")
    details_tab, notifications_tab, preferences_tab = st.tabs(
        ["Login details", "Notifications", "Global preferences"]
    )
    with details_tab:
        render_login_details(client, session)
    with notifications_tab:
        render_notification_settings(client)
    with preferences_tab:
        render_global_preferences(client)


def render_login_details(client: ApiClient, session: SessionStore) -> None:
    user = session.user
    if user is None:
        return

    with st.form("profile_details"):
        name = st.text_input("Name", value=user.name)
        email = st.text_input("Email", value=user.email or "")
        phone = st.text_input("Phone number", value=user.phone or "")
        submitted = st.form_submit_button("Save changes")
    if not submitted:
        return

    payload = ProfileUpdateRequest(
        name=name.strip() or None,
        email=email.strip() or None,
        phone=phone.strip() or None,
    )
    try:
        run_async(client.update_profile(payload))
    except ApiClientError as exc:
        report_error(exc)
        return

    session.update_user(user.model_copy(update=payload.model_dump(exclude_none=True)))
    st.success("Profile updated")


def render_notification_settings(client: ApiClient) -> None:
    with st.form("notification_settings"):
        values = {
            field: st.toggle(label, value=default, key=f"notify_{field}")
            for field, label, default in NOTIFICATION_OPTIONS
        }
        submitted = st.form_submit_button("Save")
    if not submitted:
        return

    try:
        run_async(
            client.update_notification_settings(NotificationSettingsRequest(**values))
        )
    except ApiClientError as exc:
        report_error(exc)
        return
    st.success("Notification settings saved")


def render_global_preferences(client: ApiClient) -> None:
    with st.form("global_preferences"):
        language = st.selectbox("Language", options=LANGUAGES)
        currency = st.selectbox("Currency", options=CURRENCIES)
        timezone = st.selectbox("Timezone", options=TIMEZONES)
        country = st.selectbox("Country", options=COUNTRIES)
        submitted = st.form_submit_button("Save")
    if not submitted:
        return

    payload = GlobalPreferencesRequest(
        language=language, currency=currency, timezone=timezone, country=country
    )
    try:
        run_async(client.update_global_preferences(payload))
    except ApiClientError as exc:
        report_error(exc)
        return
    st.success("Global preferences saved")
