from typing import Any

import streamlit as st

from enums import EntityKind, LoanStatus, PhaseStatus
from schemas import ALL_FILTER
from settings import core_settings
from ui.api import ApiClient
from ui.components import (
    back_button,
    field_grid,
    get_list_view,
    load_record,
    open_record,
    render_list,
    selected_record_id,
)
from ui.fields import (
    ASSIGNEE_NAME,
    CUSTOMER_NATIONAL_ID,
    CUSTOMER_PHONE,
    DEALERSHIP_CODE,
    assignee_status_label,
    bank_name,
    customer_name,
    dealership_name,
    display_id,
    loan_amount,
    phase_progress,
    phase_status,
    phase_status_label,
    phase_title,
    phase_tone,
    sorted_phases,
    time_left,
    vehicle_title,
)
from ui.utils import format_amount, format_date, format_date_long, status_label

KIND = EntityKind.BANK_LOANS
TABS = [
    ("All Loans", ALL_FILTER),
    ("Pending", LoanStatus.PENDING),
    ("Approved", LoanStatus.APPROVED),
    ("Rejected", LoanStatus.REJECTED),
]
STATUS_ICONS = {
    LoanStatus.APPROVED: "🟢",
    LoanStatus.PENDING: "🟡",
    LoanStatus.REJECTED: "🔴",
}
TONE_ICONS = {"gray": "⚪", "red": "🔴", "green": "🟢", "yellow": "🟡"}


def loan_number(loan: dict[str, Any]) -> str:
    if loan.get("loanNumber"):
        return f"#{loan['loanNumber']}"
    return display_id(KIND, loan)


def loan_card_lines(loan: dict[str, Any]) -> list[str]:
    """Text lines of a loan card in the list."""
    status = str(loan.get("status") or "")
    lines = [
        f"{STATUS_ICONS.get(status, '⚪')} **{loan_number(loan)}** · "
        f"{status_label(status)}",
        f"Customer: {customer_name(loan)}",
        f"Bank: {bank_name(loan)}",
    ]
    dealership = dealership_name(loan)
    if dealership:
        lines.append(f"Dealership: {dealership}")
    amount = loan_amount(loan)
    if amount is not None:
        lines.append(f"Amount: {format_amount(amount)}")
    lines.append(f"Created: {format_date(loan.get('createdAt'))}")
    return lines


def render_loans_tab(client: ApiClient) -> None:
    """Render the bank loan applications list and detail."""
    st.subheader("Bank Loans")
    record_id = selected_record_id(KIND)
    if record_id:
        render_loan_detail(client=client, record_id=record_id)
        return

    view = get_list_view(key="loans", client=client, kind=KIND, tabs=TABS)

    def render_rows(loans: list[dict[str, Any]]) -> None:
        if not loans:
            st.info("No loans found")
            return
        for loan in loans:
            with st.container(border=True):
                st.markdown("  \n".join(loan_card_lines(loan)))
                if st.button("View details", key=f"loan_open_{display_id(KIND, loan)}"):
                    open_record(KIND, loan)
                    st.rerun()

    render_list(
        key="loans",
        view=view,
        render_rows=render_rows,
        search_placeholder="Search loans",
    )


@st.fragment(run_every=core_settings.countdown_refresh_seconds)
def phase_countdown(deadline: str) -> None:
    st.caption(f"Time Left: **{time_left(deadline)}**")


def render_phase(phase: dict[str, Any]) -> None:
    with st.container(border=True):
        st.markdown(f"#### {phase_title(phase)}")
        if phase.get("description"):
            st.caption(phase["description"])

        tone = phase_tone(phase)
        st.progress(
            phase_progress(phase),
            text=f"{TONE_ICONS[tone]} {phase_status_label(phase)}",
        )
        if phase.get("deadline") and phase_status(phase) not in PhaseStatus.get_done():
            phase_countdown(phase["deadline"])

        for assignee in phase.get("assignedUsers") or []:
            if not isinstance(assignee, dict):
                continue
            label = assignee_status_label(assignee)
            suffix = f" ({label})" if label else ""
            st.markdown(f"- {ASSIGNEE_NAME.derive(assignee)}{suffix}")

        rejection = phase.get("rejectionInfo") or {}
        if phase_status(phase) in PhaseStatus.get_failed() or rejection:
            title = (
                "Rejected"
                if phase_status(phase) == PhaseStatus.REJECTED
                else "Changes Requested"
            )
            details = rejection.get("reason") or rejection.get("changesRequested") or ""
            st.error(f"{title}. {details}".strip())


def render_loan_detail(client: ApiClient, record_id: str) -> None:
    loan = load_record(client=client, kind=KIND, record_id=record_id)
    if loan is None:
        return

    back_button(KIND)
    st.markdown(f"### Loan {loan_number(loan)}")
    st.caption(status_label(loan.get("status")))

    vehicle = loan.get("vehicle") or {}
    pricing = vehicle.get("pricing") or {}
    mileage = vehicle.get("mileage")
    field_grid(
        [
            ("Customer", customer_name(loan)),
            ("Phone", CUSTOMER_PHONE.derive(loan)),
            ("National ID", CUSTOMER_NATIONAL_ID.derive(loan)),
            ("Bank", bank_name(loan)),
            ("Dealership", dealership_name(loan)),
            ("Dealership Code", DEALERSHIP_CODE.derive(loan)),
            ("Vehicle", vehicle_title(loan)),
            ("Mileage", f"{mileage:,} km" if isinstance(mileage, int) else "N/A"),
            ("Sale Price", format_amount(pricing.get("salePrice"))),
            ("Loan Amount", format_amount(loan_amount(loan))),
            ("Down Payment", format_amount(loan.get("downPayment"))),
            ("Monthly Payment", format_amount(loan.get("monthlyPayment"))),
            ("Created", format_date_long(loan.get("createdAt"))),
            ("Updated", format_date_long(loan.get("updatedAt"))),
        ]
    )

    phases = sorted_phases(loan)
    if not phases:
        st.info("No workflow phases yet")
        return
    st.markdown("### Application Progress")
    for phase in phases:
        render_phase(phase)
