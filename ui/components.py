from dataclasses import dataclass, field
from typing import Any, Callable

import streamlit as st

from enums import EntityKind, FollowUp, LifecycleAction, ListStatus
from exceptions import BaseError
from schemas import ALL_FILTER
from settings import api_settings, core_settings
from ui.actions import (
    LifecycleActionController,
    available_actions,
    record_key,
    requires_reason,
)
from ui.api import ApiClient
from ui.exceptions import ApiClientError, NotFoundError, UnauthorizedError
from ui.listing import ListFetchController
from ui.models import ActionOutcome, ListSnapshot
from ui.pagination import PaginationView
from ui.session import FileStorage, SessionStore
from ui.state import FilterState
from ui.utils import run_async, show_error

Tab = tuple[str, str]


@dataclass
class ListView:
    """Filter state and fetch controller of one list screen."""

    state: FilterState
    controller: ListFetchController
    tabs: list[Tab] = field(default_factory=list)


def get_session() -> SessionStore:
    if "session_store" not in st.session_state:
        store = SessionStore(storage=FileStorage(core_settings.session_file))
        store.hydrate()
        st.session_state["session_store"] = store
    return st.session_state["session_store"]


def get_client() -> ApiClient:
    if "api_client" not in st.session_state:
        st.session_state["api_client"] = ApiClient(
            base_url=api_settings.base_url,
            timeout=api_settings.timeout,
            session=get_session(),
        )
    return st.session_state["api_client"]


def get_action_controller(client: ApiClient) -> LifecycleActionController:
    if "action_controller" not in st.session_state:
        st.session_state["action_controller"] = LifecycleActionController(client)
    return st.session_state["action_controller"]


def get_list_view(
    key: str, client: ApiClient, kind: EntityKind, tabs: list[Tab] | None = None
) -> ListView:
    """Return the list view stored under `key`, creating it on first use."""
    views: dict[str, ListView] = st.session_state["list_views"]
    if key not in views:
        tabs = tabs or []
        state = FilterState(
            status_filter=tabs[0][1] if tabs else None,
            page_size=core_settings.page_size,
        )
        views[key] = ListView(
            state=state,
            controller=ListFetchController(client=client, kind=kind, state=state),
            tabs=tabs,
        )
    return views[key]


def close_list_views() -> None:
    """Tear down every list view, e.g. after the session ended."""
    for view in st.session_state.get("list_views", {}).values():
        view.controller.close()
    st.session_state["list_views"] = {}


def flash(message: str) -> None:
    st.session_state["flash"] = message


def show_flash() -> None:
    message = st.session_state.get("flash")
    if message:
        st.success(message)
        st.session_state["flash"] = None


def status_tabs(key: str, view: ListView) -> None:
    labels = {value: label for label, value in view.tabs}
    options = list(labels)
    current = view.state.status_filter or ALL_FILTER
    selected = st.radio(
        "Status",
        options=options,
        index=options.index(current) if current in options else 0,
        format_func=lambda value: labels[value],
        horizontal=True,
        label_visibility="collapsed",
        key=f"{key}_tabs",
    )
    view.state.set_status_filter(selected)


def search_input(key: str, view: ListView, placeholder: str = "Search") -> None:
    text = st.text_input(
        "Search",
        value=view.state.search_text or "",
        placeholder=placeholder,
        label_visibility="collapsed",
        key=f"{key}_search",
    )
    view.state.set_search_text(text)


def skeleton(rows: int = 5) -> None:
    """Placeholder rendered while a page is loading."""
    for _ in range(rows):
        st.markdown("&nbsp;")
        st.progress(0)


def sync_view(view: ListView) -> ListSnapshot:
    """Bring the view's page in line with its filter state.

    An expired session triggers a rerun, which lands on the login screen.
    """
    try:
        with st.spinner("Loading..."):
            return run_async(view.controller.sync())
    except UnauthorizedError:
        close_list_views()
        st.rerun()


def pagination_control(key: str, view: ListView, snapshot: ListSnapshot) -> None:
    if snapshot.result is None:
        return

    pager = PaginationView.from_result(snapshot.result)
    pages = pager.pages
    columns = st.columns([1] * (len(pages) + 2) + [3])
    if columns[0].button("‹", key=f"{key}_prev", disabled=not pager.has_prev):
        view.state.set_page(pager.page - 1)
        st.rerun()
    for column, page in zip(columns[1:], pages):
        if column.button(
            str(page),
            key=f"{key}_page_{page}",
            type="primary" if page == pager.page else "secondary",
        ):
            view.state.set_page(page)
            st.rerun()
    if columns[len(pages) + 1].button(
        "›", key=f"{key}_next", disabled=not pager.has_next
    ):
        view.state.set_page(pager.page + 1)
        st.rerun()
    columns[-1].caption(pager.summary)


def render_list(
    key: str,
    view: ListView,
    render_rows: Callable[[list[dict[str, Any]]], None],
    search_placeholder: str = "Search",
) -> ListSnapshot:
    """Render filters, the current page and pagination of a list view.

    Args:
        key: Widget key prefix.
        view: List view to render.
        render_rows: Callback rendering the page records.
        search_placeholder: Placeholder of the search box.

    Returns:
        The snapshot that was rendered.

    """
    if view.tabs:
        status_tabs(key=key, view=view)
    search_input(key=key, view=view, placeholder=search_placeholder)

    snapshot = sync_view(view)
    failed = snapshot.status is ListStatus.ERROR
    if failed:
        st.error(snapshot.error or "Request failed")
    if snapshot.result is None:
        if failed:
            st.info("No results")
        else:
            skeleton()
        return snapshot

    render_rows(snapshot.items)
    pagination_control(key=key, view=view, snapshot=snapshot)
    return snapshot


def open_record(kind: EntityKind, record: dict[str, Any]) -> None:
    st.session_state["selected_record"][kind] = record_key(record)


def close_record(kind: EntityKind) -> None:
    st.session_state["selected_record"].pop(kind, None)


def selected_record_id(kind: EntityKind) -> str | None:
    return st.session_state["selected_record"].get(kind)


def back_button(kind: EntityKind) -> None:
    if st.button("← Back", key=f"{kind}_back"):
        close_record(kind)
        st.rerun()


def action_buttons(
    key: str,
    client: ApiClient,
    kind: EntityKind,
    record: dict[str, Any],
    view: ListView | None = None,
    on_done: Callable[[ActionOutcome], None] | None = None,
) -> None:
    """Lifecycle action buttons with an inline confirmation step."""
    actions = get_action_controller(client)
    record_id = record_key(record)
    pending = actions.pending
    if (
        pending is not None
        and pending.kind is kind
        and pending.record_id == record_id
    ):
        confirm_action(
            key=key,
            actions=actions,
            record=record,
            view=view,
            on_done=on_done,
        )
        return

    allowed = available_actions(kind=kind, record=record)
    if not allowed:
        return
    columns = st.columns(len(allowed))
    for column, action in zip(columns, allowed):
        if column.button(
            action.label,
            key=f"{key}_{action}_{record_id}",
            type="primary" if action is LifecycleAction.APPROVE else "secondary",
        ):
            try:
                actions.request(action=action, kind=kind, record=record)
            except BaseError as exc:
                show_error(exc)
                return
            st.rerun()


def confirm_action(
    key: str,
    actions: LifecycleActionController,
    record: dict[str, Any],
    view: ListView | None,
    on_done: Callable[[ActionOutcome], None] | None,
) -> None:
    pending = actions.pending
    if pending is None:
        return

    name = record.get("name") or record.get("question") or pending.record_id
    st.warning(f"{pending.action.label} {pending.kind.label.lower()} {name}?")
    reason = None
    reason_required = requires_reason(kind=pending.kind, action=pending.action)
    if pending.action in LifecycleAction.get_destructive():
        reason = st.text_input(
            "Reason",
            key=f"{key}_reason_{pending.record_id}",
            placeholder="Enter reason..." if reason_required else "Optional",
        )

    confirm_column, cancel_column = st.columns(2)
    if cancel_column.button("Cancel", key=f"{key}_cancel_{pending.record_id}"):
        actions.cancel()
        st.rerun()
    if not confirm_column.button(
        "Confirm",
        key=f"{key}_confirm_{pending.record_id}",
        type="primary",
        disabled=reason_required and not (reason or "").strip(),
    ):
        return

    actions.confirm(pending)
    try:
        outcome = run_async(
            actions.execute(
                action=pending.action,
                kind=pending.kind,
                record=record,
                reason=reason,
            )
        )
    except UnauthorizedError:
        close_list_views()
        st.rerun()
    except (ApiClientError, BaseError) as exc:
        actions.cancel()
        show_error(exc)
        return

    if view is not None:
        view.controller.apply(outcome)
    if outcome.follow_up is FollowUp.REDIRECT:
        close_record(outcome.kind)
        for other in st.session_state["list_views"].values():
            if other.controller.kind is outcome.kind:
                other.controller.invalidate()
    if on_done is not None:
        on_done(outcome)
    flash(f"{outcome.action.label} completed")
    st.rerun()


def load_record(
    client: ApiClient, kind: EntityKind, record_id: str
) -> dict[str, Any] | None:
    """Fetch a record for its detail screen.

    Returns:
        The record, or None after rendering a not-found or error state.

    """
    try:
        with st.spinner("Loading..."):
            return run_async(client.get(kind=kind, record_id=record_id))
    except UnauthorizedError:
        close_list_views()
        st.rerun()
    except NotFoundError:
        st.warning(f"{kind.label} record not found")
    except ApiClientError as exc:
        show_error(exc)
    back_button(kind)
    return None


def field_grid(fields: list[tuple[str, Any]], columns: int = 2) -> None:
    grid = st.columns(columns)
    for index, (label, value) in enumerate(fields):
        with grid[index % columns]:
            st.caption(label)
            st.markdown(str(value) if value not in (None, "") else "-")


def report_error(error: ApiClientError | BaseError) -> None:
    """Show an inline error, or go back to login when the session expired."""
    if isinstance(error, UnauthorizedError):
        close_list_views()
        st.rerun()
    show_error(error)


def navigate(page: str) -> None:
    """Switch the sidebar page on the next run."""
    st.session_state["nav_target"] = page
    st.rerun()
