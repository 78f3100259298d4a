import asyncio
from datetime import datetime
from typing import Any, Coroutine, TypeVar

import streamlit as st

from constants import CURRENCY, DASH, NOT_AVAILABLE
from exceptions import BaseError
from ui.exceptions import ApiClientError
from ui.fields import parse_timestamp

T = TypeVar("T")


def run_async(coroutine: Coroutine[Any, Any, T]) -> T:
    """Run one gateway coroutine to completion inside a Streamlit render."""
    return asyncio.run(coroutine)


def show_error(error: ApiClientError | BaseError) -> None:
    """Render a failed call as an inline error.

    Args:
        error: Gateway error or local domain error.

    """
    if isinstance(error, ApiClientError):
        detail = format_error_detail(error.detail)
        if error.status_code:
            st.error(f"HTTP {error.status_code}: {detail}")
        else:
            st.error(f"Network error: {detail}")
        return

    st.error(format_error_detail(error.message))


def show_table(data: list[dict[str, Any]], title: str | None = None) -> None:
    """Render a data table.

    Args:
        data: Table rows as dictionaries.
        title: Optional section title.

    """
    if title:
        st.subheader(title)
    if not data:
        st.info("No data")
        return
    st.dataframe(data, width="stretch", hide_index=True)


def _normalize_error_detail(detail: Any) -> str:
    """Convert API error payloads to a readable string."""
    if detail is None:
        return ""
    if isinstance(detail, str):
        return detail
    if isinstance(detail, dict):
        if "message" in detail:
            return str(detail["message"])
        return ", ".join(
            f"{key}: {_normalize_error_detail(value)}" for key, value in detail.items()
        )
    if isinstance(detail, list):
        items = [_normalize_error_detail(item) for item in detail]
        return "; ".join(item for item in items if item)
    return str(detail)


def format_error_detail(detail: Any) -> str:
    """Normalize error detail text for UI display.

    Args:
        detail: Raw error detail from API response.

    Returns:
        User-facing error detail text.

    """
    normalized_detail = _normalize_error_detail(detail).strip()
    return normalized_detail or "Unknown error"


def status_label(status: Any) -> str:
    text = str(status or "")
    return text[:1].upper() + text[1:] if text else DASH


def format_date(value: Any) -> str:
    """`14/03/2024`, or `-` when missing."""
    moment = parse_timestamp(value)
    return moment.strftime("%d/%m/%Y") if moment else DASH


def format_date_long(value: Any) -> str:
    """`14 March 2024`, or `-` when missing."""
    moment = parse_timestamp(value)
    if moment is None:
        return DASH
    return f"{moment.day} {moment.strftime('%B')} {moment.year}"


def format_time(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def format_datetime(value: Any) -> str:
    """`14/03/2024` and `3:05 PM` on two lines, or `-` when missing."""
    moment = parse_timestamp(value)
    if moment is None:
        return DASH
    return f"{moment.strftime('%d/%m/%Y')}\n{format_time(moment)}"


def format_amount(value: Any) -> str:
    """`SAR 120,000`; non-numeric values render as `N/A`."""
    if isinstance(value, bool) or value is None:
        return NOT_AVAILABLE
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return NOT_AVAILABLE
    return f"{CURRENCY} {amount:,.0f}"
