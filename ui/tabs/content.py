from typing import Any

import streamlit as st

from enums import EntityKind
from schemas import CarTypeRequest, FaqRequest
from ui.actions import record_key
from ui.api import ApiClient
from ui.components import (
    ListView,
    action_buttons,
    close_list_views,
    flash,
    get_list_view,
    report_error,
    skeleton,
    sync_view,
)
from ui.exceptions import ApiClientError, UnauthorizedError
from ui.utils import run_async, show_error


def render_content_tab(client: ApiClient) -> None:
    """Render content configuration: car types and FAQs."""
    st.subheader("Content Configuration")
    car_types_tab, faqs_tab = st.tabs(["Car Types", "FAQs"])
    with car_types_tab:
        render_car_types(client)
    with faqs_tab:
        render_faqs(client)


def load_items(view: ListView) -> list[dict[str, Any]] | None:
    snapshot = sync_view(view)
    if snapshot.error:
        st.error(snapshot.error)
    if snapshot.result is None:
        if snapshot.error:
            st.info("No results")
        else:
            skeleton(rows=3)
        return None
    return snapshot.items


def render_car_types(client: ApiClient) -> None:
    view = get_list_view(key="car_types", client=client, kind=EntityKind.CAR_TYPES)
    car_types = load_items(view)
    if car_types is None:
        return

    if not car_types:
        st.info("No car types yet")
    for car_type in car_types:
        record_id = record_key(car_type)
        with st.container(border=True):
            name_column, toggle_column = st.columns([4, 1])
            name_column.markdown(f"**{car_type.get('name', '')}**")
            if car_type.get("description"):
                name_column.caption(car_type["description"])
            st.session_state[toggle_key(record_id)] = bool(
                car_type.get("isActive", True)
            )
            toggle_column.toggle(
                "Active",
                key=toggle_key(record_id),
                on_change=toggle_car_type,
                args=(client, view, car_type),
            )
            action_buttons(
                key="car_type",
                client=client,
                kind=EntityKind.CAR_TYPES,
                record=car_type,
                view=view,
            )

    with st.form("create_car_type", clear_on_submit=True):
        name = st.text_input("Car type name")
        description = st.text_input("Description")
        submitted = st.form_submit_button("Add car type")
    if submitted:
        if not name.strip():
            st.warning("Enter car type name")
            return
        payload = CarTypeRequest(
            name=name.strip(), description=description.strip() or None, is_active=True
        )
        create_content(client, view, EntityKind.CAR_TYPES, payload, "Car type added")


def toggle_key(record_id: str) -> str:
    return f"car_type_active_{record_id}"


def toggle_car_type(
    client: ApiClient, view: ListView, car_type: dict[str, Any]
) -> None:
    """Toggle callback; a failed update puts the switch back."""
    record_id = record_key(car_type)
    widget_key = toggle_key(record_id)
    is_active = bool(st.session_state[widget_key])
    try:
        run_async(
            client.update(
                kind=EntityKind.CAR_TYPES,
                record_id=record_id,
                payload=CarTypeRequest(is_active=is_active),
            )
        )
    except UnauthorizedError:
        close_list_views()
        return
    except ApiClientError as exc:
        st.session_state[widget_key] = not is_active
        show_error(exc)
        return
    view.controller.patch(record_id=record_id, changes={"isActive": is_active})


def render_faqs(client: ApiClient) -> None:
    view = get_list_view(key="faqs", client=client, kind=EntityKind.FAQS)
    faqs = load_items(view)
    if faqs is None:
        return

    if not faqs:
        st.info("No FAQs yet")
    for faq in faqs:
        record_id = record_key(faq)
        with st.expander(str(faq.get("question") or "Untitled question")):
            st.markdown(str(faq.get("answer") or ""))
            with st.form(f"edit_faq_{record_id}"):
                question = st.text_input("Question", value=faq.get("question", ""))
                answer = st.text_area("Answer", value=faq.get("answer", ""))
                saved = st.form_submit_button("Save")
            if saved:
                update_faq(client, view, record_id, question, answer)
            action_buttons(
                key="faq", client=client, kind=EntityKind.FAQS, record=faq, view=view
            )

    with st.form("create_faq", clear_on_submit=True):
        question = st.text_input("Question")
        answer = st.text_area("Answer")
        submitted = st.form_submit_button("Add FAQ")
    if submitted:
        if not question.strip() or not answer.strip():
            st.warning("Enter question and answer")
            return
        payload = FaqRequest(question=question.strip(), answer=answer.strip())
        create_content(client, view, EntityKind.FAQS, payload, "FAQ added")


def update_faq(
    client: ApiClient, view: ListView, record_id: str, question: str, answer: str
) -> None:
    payload = FaqRequest(question=question.strip(), answer=answer.strip())
    try:
        data = run_async(
            client.update(kind=EntityKind.FAQS, record_id=record_id, payload=payload)
        )
    except ApiClientError as exc:
        report_error(exc)
        return
    changes = data if isinstance(data, dict) else payload.to_payload()
    view.controller.patch(record_id=record_id, changes=changes)
    st.rerun()


def create_content(
    client: ApiClient,
    view: ListView,
    kind: EntityKind,
    payload: CarTypeRequest | FaqRequest,
    message: str,
) -> None:
    try:
        data = run_async(client.create(kind=kind, payload=payload))
    except ApiClientError as exc:
        report_error(exc)
        return
    if isinstance(data, dict):
        view.controller.append(data)
    else:
        view.controller.invalidate()
    flash(message)
    st.rerun()
