from typing import Callable

import streamlit as st

from schemas import ListQuery

FilterListener = Callable[[ListQuery], None]


class FilterState:
    """Tab filter, search text and page of one list view.

    Changing the status filter or the search text moves back to page 1.
    Changing the page leaves the other two fields alone. Every effective
    change notifies subscribers exactly once with the new query.
    """

    def __init__(
        self,
        status_filter: str | None = None,
        search_text: str | None = None,
        page: int = 1,
        page_size: int = 10,
    ):
        self._status_filter = status_filter
        self._search_text = search_text or None
        self._page = max(page, 1)
        self.page_size = page_size
        self._listeners: list[FilterListener] = []

    @property
    def status_filter(self) -> str | None:
        return self._status_filter

    @property
    def search_text(self) -> str | None:
        return self._search_text

    @property
    def page(self) -> int:
        return self._page

    @property
    def query(self) -> ListQuery:
        return ListQuery(
            status_filter=self._status_filter,
            search_text=self._search_text,
            page=self._page,
            page_size=self.page_size,
        )

    def set_status_filter(self, value: str | None) -> bool:
        if value == self._status_filter:
            return False
        self._status_filter = value
        self._page = 1
        self._notify()
        return True

    def set_search_text(self, value: str | None) -> bool:
        value = (value or "").strip() or None
        if value == self._search_text:
            return False
        self._search_text = value
        self._page = 1
        self._notify()
        return True

    def set_page(self, page: int) -> bool:
        page = max(page, 1)
        if page == self._page:
            return False
        self._page = page
        self._notify()
        return True

    def clamp(self, total_pages: int) -> bool:
        """Pull the page back into `[1, total_pages]` once totals are known."""
        return self.set_page(min(self._page, max(total_pages, 1)))

    def subscribe(self, listener: FilterListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        query = self.query
        for listener in list(self._listeners):
            listener(query)


def init_state() -> None:
    """Initialize default Streamlit state used by UI pages."""
    defaults: dict[str, object] = {
        "page": "Dashboard",
        "auth_step": "login",
        "selected_record": {},
        "pending_action": None,
        "list_views": {},
        "flash": None,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value
