from typing import Any

import streamlit as st

from enums import EntityKind
from schemas import BankRequest, ContactPersonRequest
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
from ui.fields import BANK_CONTACT_NAME, BANK_CONTACT_PHONE, display_id
from ui.utils import format_date, format_date_long, run_async, show_table


def bank_row(bank: dict[str, Any]) -> dict[str, str]:
    return {
        "ID": display_id(EntityKind.BANKS, bank),
        "Bank Name": str(bank.get("name") or "-"),
        "Contact Phone Number": BANK_CONTACT_PHONE.derive(bank),
        "Contact Person": BANK_CONTACT_NAME.derive(bank),
        "Joining Date": format_date(bank.get("createdAt")),
    }


def render_banks_tab(client: ApiClient) -> None:
    """Render bank management: list, detail and the new bank form."""
    st.subheader("Bank Management")
    record_id = selected_record_id(EntityKind.BANKS)
    if record_id:
        render_bank_detail(client=client, record_id=record_id)
        return

    view = get_list_view(key="banks", client=client, kind=EntityKind.BANKS)

    def render_rows(banks: list[dict[str, Any]]) -> None:
        show_table([bank_row(bank) for bank in banks])
        options = {display_id(EntityKind.BANKS, bank): bank for bank in banks}
        if not options:
            return
        selected = st.selectbox(
            "Open bank",
            options=list(options),
            format_func=lambda item: f"{item} - {options[item].get('name', '')}",
            key="banks_open_selector",
        )
        if st.button("Open", key="banks_open"):
            open_record(EntityKind.BANKS, options[selected])
            st.rerun()

    render_list(
        key="banks",
        view=view,
        render_rows=render_rows,
        search_placeholder="Search banks",
    )

    with st.expander("Add new bank"):
        render_new_bank_form(client=client)


def render_bank_detail(client: ApiClient, record_id: str) -> None:
    bank = load_record(client=client, kind=EntityKind.BANKS, record_id=record_id)
    if bank is None:
        return

    back_button(EntityKind.BANKS)
    st.markdown(f"### {bank.get('name') or display_id(EntityKind.BANKS, bank)}")
    st.caption("Active" if bank.get("isActive", True) else "Blocked")
    contact = bank.get("contactPerson") or {}
    field_grid(
        [
            ("Bank Name", bank.get("name")),
            ("Bank Code", bank.get("code")),
            ("Contact Person", BANK_CONTACT_NAME.derive(bank)),
            ("Contact Email", contact.get("email")),
            ("Contact Phone Number", BANK_CONTACT_PHONE.derive(bank)),
            ("Joined", format_date_long(bank.get("createdAt"))),
        ]
    )
    action_buttons(key="bank_detail", client=client, kind=EntityKind.BANKS, record=bank)


def render_new_bank_form(client: ApiClient) -> None:
    with st.form("create_bank"):
        name = st.text_input("Bank name")
        st.caption("Contact person")
        contact_name = st.text_input("Name")
        contact_email = st.text_input("Email")
        contact_phone = st.text_input("Phone")
        submitted = st.form_submit_button("Add bank")

    if not submitted:
        return
    if not name.strip():
        st.warning("Enter bank name")
        return

    payload = BankRequest(
        name=name.strip(),
        contact_person=ContactPersonRequest(
            name=contact_name.strip() or None,
            email=contact_email.strip() or None,
            phone=contact_phone.strip() or None,
        ),
    )
    try:
        run_async(client.create(kind=EntityKind.BANKS, payload=payload))
    except ApiClientError as exc:
        report_error(exc)
        return

    view = get_list_view(key="banks", client=client, kind=EntityKind.BANKS)
    view.controller.invalidate()
    flash("Bank added successfully")
    st.rerun()
