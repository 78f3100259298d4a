import streamlit as st

from exceptions import BaseError, OtpPhoneMissingError
from settings import core_settings
from ui.api import ApiClient
from ui.auth import COUNTRY_CODES, DEBUG_PRESETS, DEFAULT_COUNTRY_CODE, AuthFlow
from ui.exceptions import ApiClientError
from ui.session import SessionStore
from ui.utils import run_async, show_error


def get_auth_flow(client: ApiClient, session: SessionStore) -> AuthFlow:
    if "auth_flow" not in st.session_state:
        st.session_state["auth_flow"] = AuthFlow(
            client=client,
            session=session,
            otp_length=core_settings.otp_length,
            resend_seconds=core_settings.otp_resend_seconds,
        )
    return st.session_state["auth_flow"]


def render_auth_tab(client: ApiClient, session: SessionStore) -> None:
    """Render the sign-in screens: phone, OTP and debug sign-in."""
    st.title("CarTIBI")
    flow = get_auth_flow(client, session)
    if st.session_state["auth_step"] == "otp":
        render_otp_step(flow)
        return

    login_tab, debug_tab = st.tabs(["Login", "Debug Auth"])
    with login_tab:
        render_login_step(flow)
    with debug_tab:
        render_debug_step(flow)


def render_login_step(flow: AuthFlow) -> None:
    st.markdown("### Welcome Back! Sign in to your account")
    with st.form("login"):
        code_column, phone_column = st.columns([1, 3])
        codes = list(COUNTRY_CODES)
        country_code = code_column.selectbox(
            "Code",
            options=codes,
            index=codes.index(DEFAULT_COUNTRY_CODE),
            format_func=lambda code: f"{code} {COUNTRY_CODES[code]}",
        )
        phone = phone_column.text_input("Phone", placeholder="Enter Phone Number")
        submitted = st.form_submit_button("Send OTP")
    if not submitted:
        return

    try:
        with st.spinner("Sending..."):
            run_async(flow.send_otp(phone=phone, country_code=country_code))
    except (ApiClientError, BaseError) as exc:
        show_error(exc)
        return
    st.session_state["auth_step"] = "otp"
    st.rerun()


def on_digit_change(flow: AuthFlow, index: int) -> None:
    value = st.session_state[f"otp_digit_{index}"]
    code = flow.otp.enter(index, value)
    st.session_state[f"otp_digit_{index}"] = flow.otp.digits[index]
    if code is not None:
        st.session_state["otp_submit"] = code


def verify(flow: AuthFlow, code: str | None = None) -> None:
    try:
        with st.spinner("Verifying..."):
            run_async(flow.verify_otp(code))
    except OtpPhoneMissingError:
        st.session_state["auth_step"] = "login"
        st.rerun()
    except (ApiClientError, BaseError) as exc:
        show_error(exc)
        return
    st.session_state["auth_step"] = "login"
    st.rerun()


def render_otp_step(flow: AuthFlow) -> None:
    """Render one box per digit.

    Streamlit cannot move keyboard focus between inputs, so the box that
    `OtpInput` would focus next is marked with a placeholder instead.
    """
    if not flow.phone:
        st.session_state["auth_step"] = "login"
        st.rerun()

    st.markdown("### Enter the verification code")
    st.caption(f"Sent to {flow.phone}")
    columns = st.columns(flow.otp.length)
    for index, column in enumerate(columns):
        column.text_input(
            f"Digit {index + 1}",
            key=f"otp_digit_{index}",
            label_visibility="collapsed",
            placeholder="•" if index == flow.otp.focus else "",
            on_change=on_digit_change,
            args=(flow, index),
        )

    code = st.session_state.pop("otp_submit", None)
    if code is not None:
        verify(flow, code)

    if st.button("Verify", type="primary"):
        verify(flow)

    render_resend(flow)
    if st.button("Change phone number"):
        st.session_state["auth_step"] = "login"
        st.rerun()


@st.fragment(run_every=core_settings.countdown_refresh_seconds)
def render_resend(flow: AuthFlow) -> None:
    if not flow.countdown.can_resend:
        st.caption(flow.countdown.label)
        return
    if not st.button("Resend"):
        return
    try:
        run_async(flow.resend_otp())
    except (ApiClientError, BaseError) as exc:
        show_error(exc)
        return
    for index in range(flow.otp.length):
        st.session_state.pop(f"otp_digit_{index}", None)
    st.rerun()


def render_debug_step(flow: AuthFlow) -> None:
    st.markdown("### Debug Auth")
    preset = st.selectbox(
        "Select Super Admin",
        options=DEBUG_PRESETS,
        format_func=lambda item: item.label,
    )
    if not st.button("Login as selected user", key="debug_login"):
        return
    try:
        run_async(flow.debug_login(preset))
    except (ApiClientError, BaseError) as exc:
        show_error(exc)
        return
    st.rerun()
