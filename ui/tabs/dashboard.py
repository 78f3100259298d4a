import asyncio
from typing import Any

import streamlit as st

from constants import UNKNOWN
from enums import DealerStatus, EntityKind
from settings import core_settings
from ui.api import ApiClient
from ui.components import navigate, open_record, report_error
from ui.exceptions import ApiClientError
from ui.fields import dig
from ui.utils import format_amount, run_async, show_table

QUICK_ACTIONS = [
    ("Review New User Accounts", "Users"),
    ("Add a new Dealer", "Dealers"),
    ("Edit Landing Page Content", "Content"),
]


def stat_cards(stats: dict[str, Any]) -> list[tuple[str, str]]:
    """Headline counters of the dashboard."""
    return [
        ("Total Dealers", str(dig(stats, "dealers", "total") or 0)),
        ("Total Users", str(dig(stats, "users", "total") or 0)),
        ("Total Registered Banks", str(dig(stats, "banks", "total") or 0)),
        ("Blocked Accounts", str(dig(stats, "dealers", "blocked") or 0)),
    ]


def performance_metrics(stats: dict[str, Any]) -> list[tuple[str, str, str]]:
    """Loan and dealer metrics as (label, sublabel, value)."""
    loans = stats.get("loans") or {}
    return [
        (
            "Total Loan Applications",
            "All submitted applications",
            str(loans.get("total", 0)),
        ),
        (
            "Approved Applications",
            "Complete Applications",
            str(loans.get("approved", 0)),
        ),
        (
            "Rejected Applications",
            "Rejected by Banks or Users",
            str(loans.get("rejected", 0)),
        ),
        ("Pending Applications", "Awaiting Review", str(loans.get("pending", 0))),
        (
            "Total Loan Amount",
            "Approved Loan Value",
            format_amount(loans.get("totalAmount", 0)),
        ),
        (
            "Active Dealers",
            "Currently Active",
            str(dig(stats, "dealers", "active") or 0),
        ),
    ]


def month_label(item: dict[str, Any]) -> str:
    year = dig(item, "_id", "year")
    month = dig(item, "_id", "month")
    if not isinstance(year, int) or not isinstance(month, int):
        return "-"
    return f"{year}-{month:02d}"


def loan_activity(loan: dict[str, Any]) -> str:
    customer = dig(loan, "customer", "name") or UNKNOWN
    return f"Loan #{loan.get('loanNumber', '')} - {customer} ({loan.get('status', '')})"


def dealer_activity(dealer: dict[str, Any]) -> str:
    return f'Dealer "{dealer.get("name", "")}" - {dealer.get("status", "")}'


async def load_dashboard(client: ApiClient) -> list[Any]:
    return await asyncio.gather(
        client.get_stats(),
        client.get_recent_activity(limit=core_settings.activity_limit),
    )


def render_dashboard_tab(client: ApiClient) -> None:
    """Render statistics, performance metrics and recent activity."""
    st.subheader("Dashboard")
    try:
        with st.spinner("Loading..."):
            stats, activity = run_async(load_dashboard(client))
    except ApiClientError as exc:
        report_error(exc)
        return

    stats = stats if isinstance(stats, dict) else {}
    activity = activity if isinstance(activity, dict) else {}

    st.markdown("#### Statistics")
    for column, (label, value) in zip(st.columns(4), stat_cards(stats)):
        column.metric(label, value)

    st.markdown("#### Performance report")
    metrics = performance_metrics(stats)
    for row_start in range(0, len(metrics), 3):
        columns = st.columns(3)
        for column, (label, sublabel, value) in zip(
            columns, metrics[row_start : row_start + 3]
        ):
            column.metric(label, value, help=sublabel)

    performance = stats.get("performance") or []
    if performance:
        show_table(
            [
                {
                    "Month": month_label(item),
                    "Loans": item.get("count", 0),
                    "Approved": item.get("approved", 0),
                    "Amount": format_amount(item.get("amount", 0)),
                }
                for item in performance
                if isinstance(item, dict)
            ]
        )

    st.markdown("#### Activity logs")
    loans_column, dealers_column = st.columns(2)
    with loans_column:
        for loan in activity.get("recentLoans") or []:
            if st.button(loan_activity(loan), key=f"activity_loan_{loan.get('_id')}"):
                open_record(EntityKind.BANK_LOANS, loan)
                navigate("Bank Loans")
    with dealers_column:
        for dealer in activity.get("recentDealers") or []:
            highlighted = dealer.get("status") == DealerStatus.PENDING
            if st.button(
                dealer_activity(dealer),
                key=f"activity_dealer_{dealer.get('_id')}",
                type="primary" if highlighted else "secondary",
            ):
                open_record(EntityKind.DEALERS, dealer)
                navigate("Dealers")

    recent_users = activity.get("recentUsers") or []
    if recent_users:
        show_table(
            [
                {
                    "Name": user.get("name"),
                    "Email": user.get("email"),
                    "Role": user.get("role"),
                }
                for user in recent_users
                if isinstance(user, dict)
            ],
            "New users",
        )

    st.markdown("#### Quick actions")
    for column, (label, page) in zip(st.columns(len(QUICK_ACTIONS)), QUICK_ACTIONS):
        if column.button(label, key=f"quick_{page}"):
            navigate(page)
