from typing import Any

import streamlit as st

from enums import DealerStatus, EntityKind
from schemas import AddressRequest, DealerRequest
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
from ui.fields import DEALER_COUNTRY, DEALER_PHONE, display_id
from ui.utils import (
    format_date,
    format_date_long,
    format_datetime,
    run_async,
    show_table,
    status_label,
)

KIND = EntityKind.DEALERS
TABS = [
    ("Active", DealerStatus.ACTIVE),
    ("Pending", DealerStatus.PENDING),
    ("Blocked", DealerStatus.BLOCKED),
    ("Deleted", DealerStatus.DELETED),
]


def dealer_row(dealer: dict[str, Any]) -> dict[str, str]:
    """Table row for a dealer record."""
    return {
        "ID": display_id(KIND, dealer),
        "Dealership Name": str(dealer.get("name") or ""),
        "Phone Number": DEALER_PHONE.derive(dealer),
        "Country": DEALER_COUNTRY.derive(dealer),
        "Joining Date": format_date(dealer.get("createdAt")),
        "Last Activity": format_datetime(dealer.get("updatedAt")),
    }


def render_dealers_tab(client: ApiClient) -> None:
    """Render dealer management: list, detail and registration."""
    st.subheader("Dealer Management")
    record_id = selected_record_id(KIND)
    if record_id:
        render_dealer_detail(client=client, record_id=record_id)
        return

    view = get_list_view(key="dealers", client=client, kind=KIND, tabs=TABS)

    def render_rows(dealers: list[dict[str, Any]]) -> None:
        show_table([dealer_row(dealer) for dealer in dealers])
        options = {dealer_row(dealer)["ID"]: dealer for dealer in dealers}
        if not options:
            return
        selected = st.selectbox(
            "Open dealer",
            options=list(options),
            format_func=lambda item: f"{item} - {options[item].get('name', '')}",
            key="dealers_open_selector",
        )
        if st.button("Open", key="dealers_open"):
            open_record(KIND, options[selected])
            st.rerun()

    render_list(
        key="dealers",
        view=view,
        render_rows=render_rows,
        search_placeholder="Search dealers",
    )

    with st.expander("Register new dealer"):
        render_new_dealer_form(client=client)


def render_dealer_detail(client: ApiClient, record_id: str) -> None:
    dealer = load_record(client=client, kind=KIND, record_id=record_id)
    if dealer is None:
        return

    back_button(KIND)
    st.markdown(f"### {dealer.get('name') or display_id(KIND, dealer)}")
    st.caption(status_label(dealer.get("status")))

    address = dealer.get("address") or {}
    field_grid(
        [
            ("Dealership Code", dealer.get("code")),
            ("Contact Phone", DEALER_PHONE.derive(dealer)),
            ("Contact Email", dealer.get("contactEmail")),
            ("Contact Person", dealer.get("contactPerson")),
            ("Commercial Registration", dealer.get("commercialRegNumber")),
            ("VAT Number", dealer.get("vatNumber")),
            ("City", address.get("city")),
            ("Country", DEALER_COUNTRY.derive(dealer)),
            ("Total Loans", dealer.get("totalLoans", 0)),
            ("Approved Loans", dealer.get("totalApprovedLoans", 0)),
            ("Rating", dealer.get("rating")),
            ("Joined", format_date_long(dealer.get("createdAt"))),
        ]
    )

    documents = dealer.get("documents") or []
    if documents:
        show_table(
            [
                {"Document": doc.get("name") or doc.get("type"), "URL": doc.get("url")}
                for doc in documents
                if isinstance(doc, dict)
            ],
            "Documents",
        )

    action_buttons(key="dealer_detail", client=client, kind=KIND, record=dealer)


def render_new_dealer_form(client: ApiClient) -> None:
    with st.form("create_dealer"):
        name = st.text_input("Dealership name")
        code = st.text_input("Dealership code")
        contact_person = st.text_input("Contact person")
        contact_phone = st.text_input("Contact phone")
        contact_email = st.text_input("Contact email")
        commercial_reg_number = st.text_input("Commercial registration number")
        vat_number = st.text_input("VAT number")
        city = st.text_input("City")
        country = st.text_input("Country", value="KSA")
        submitted = st.form_submit_button("Create dealer")

    if not submitted:
        return
    if not name.strip():
        st.warning("Enter dealership name")
        return

    payload = DealerRequest(
        name=name.strip(),
        code=code.strip() or None,
        contact_person=contact_person.strip() or None,
        contact_phone=contact_phone.strip() or None,
        contact_email=contact_email.strip() or None,
        commercial_reg_number=commercial_reg_number.strip() or None,
        vat_number=vat_number.strip() or None,
        address=AddressRequest(
            city=city.strip() or None, country=country.strip() or None
        ),
    )
    try:
        run_async(client.create(kind=KIND, payload=payload))
    except ApiClientError as exc:
        report_error(exc)
        return

    view = get_list_view(key="dealers", client=client, kind=KIND, tabs=TABS)
    view.controller.invalidate()
    flash("Dealer created")
    st.rerun()
